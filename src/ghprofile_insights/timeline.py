"""개발 여정 타임라인 합성.

서로 독립적인 휴리스틱 이벤트를 하나의 목록으로 합친다.
- 첫 저장소 / 가입 / 최다 스타 저장소 / 스타 5개 이상 저장소
- 언어별 첫 프로젝트 / 저장소 수 마일스톤
- 기여 streak (캘린더가 있을 때만)
- 가입 기념일 / 팔로워 마일스톤 (추정 날짜, estimated=True)

팔로워 마일스톤 날짜는 가입 기간 전체에 선형 보간한 추정치이며 실제 달성일이 아니다.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import UTC, date, datetime, timedelta

from ghprofile_insights.contributions import flatten_days, parse_day
from ghprofile_insights.models import (
    ContributionCalendar,
    Profile,
    Repository,
    Streak,
    TimelineEvent,
    TimelineMetadata,
)
from ghprofile_insights.streaks import detect_streaks, personal_best

logger = logging.getLogger(__name__)

EVENT_TYPES: tuple[str, ...] = ("repo", "star", "follower", "streak", "anniversary", "milestone")

REPO_MILESTONES: tuple[int, ...] = (5, 10, 25, 50, 100)
FOLLOWER_MILESTONES: tuple[int, ...] = (1, 10, 50, 100, 500, 1000)
POPULAR_REPO_MIN_STARS = 5
POPULAR_REPO_HIGHLIGHT_STARS = 10
STREAK_HIGHLIGHT_DAYS = 7
DESCRIPTION_PREVIEW = 80

LANGUAGE_COLORS: dict[str, str] = {
    "JavaScript": "#f1e05a",
    "TypeScript": "#3178c6",
    "Python": "#3572A5",
    "Java": "#b07219",
    "Go": "#00ADD8",
    "Rust": "#dea584",
    "Ruby": "#701516",
    "PHP": "#4F5D95",
    "CSS": "#563d7c",
    "HTML": "#e34c26",
    "C": "#555555",
    "C++": "#f34b7d",
    "C#": "#178600",
    "Swift": "#ffac45",
    "Kotlin": "#A97BFF",
    "Dart": "#00B4AB",
}
DEFAULT_LANGUAGE_COLOR = "#8257e5"
NO_LANGUAGE_COLOR = "#ddd"


# ── 포매팅 헬퍼 ────────────────────────────────────────


def language_color(language: str | None) -> str:
    if not language:
        return NO_LANGUAGE_COLOR
    return LANGUAGE_COLORS.get(language, DEFAULT_LANGUAGE_COLOR)


def format_date(value: date | datetime) -> str:
    """'Jan 5, 2024' 형식."""
    return f"{value:%b} {value.day}, {value.year}"


def _plural(n: int, word: str) -> str:
    return f"{n} {word}" if n == 1 else f"{n} {word}s"


def account_age_description(created_at: datetime, now: datetime) -> str:
    """가입 이후 경과 기간 문구. 5년 미만이면 개월 수까지 표기."""
    years = now.year - created_at.year
    months = now.month - created_at.month

    if years > 0:
        age = _plural(years, "year")
        if months > 0 and years < 5:
            age += f" and {_plural(months, 'month')}"
    elif months > 0:
        age = _plural(months, "month")
    else:
        age = _plural((now - created_at).days, "day")

    return f"That's over {age} ago!"


def _day_start(value: str) -> datetime | None:
    parsed = parse_day(value)
    if parsed is None:
        return None
    return datetime(parsed.year, parsed.month, parsed.day, tzinfo=UTC)


def _add_years(value: datetime, years: int) -> datetime:
    try:
        return value.replace(year=value.year + years)
    except ValueError:
        # 2월 29일 → 평년에는 3월 1일
        return value.replace(year=value.year + years, month=3, day=1)


# ── 이벤트 생성기 ──────────────────────────────────────


def _first_repository_event(repo: Repository) -> TimelineEvent:
    description = f'Started your GitHub journey with "{repo.name}"! '
    if repo.description:
        preview = repo.description[:DESCRIPTION_PREVIEW]
        ellipsis = "..." if len(repo.description) > DESCRIPTION_PREVIEW else ""
        description += f'"{preview}{ellipsis}"'

    return TimelineEvent(
        id=f"first-repo-{repo.id}",
        date=repo.created_at,
        title="First Repository Created",
        description=description,
        type="repo",
        highlight=True,
        metadata=TimelineMetadata(
            repo_id=repo.id,
            repo_name=repo.name,
            language=repo.language,
            language_color=language_color(repo.language),
        ),
    )


def _joined_event(profile: Profile, now: datetime) -> TimelineEvent:
    return TimelineEvent(
        id="account-created",
        date=profile.created_at,
        title="Joined GitHub",
        description=(
            f"{profile.display_name} started their GitHub journey! "
            f"{account_age_description(profile.created_at, now)}"
        ),
        type="anniversary",
        highlight=True,
    )


def _star_events(sorted_repos: Sequence[Repository]) -> list[TimelineEvent]:
    events: list[TimelineEvent] = []

    # 동률이면 먼저 생성된 저장소 (안정 정렬)
    most_starred = max(sorted_repos, key=lambda r: r.stargazers_count)
    if most_starred.stargazers_count > 0:
        stars = most_starred.stargazers_count
        events.append(
            TimelineEvent(
                id=f"most-starred-{most_starred.id}",
                date=most_starred.created_at,
                title="Most Popular Repository",
                description=(
                    f'"{most_starred.name}" is your most starred project with '
                    f"{_plural(stars, 'star')}!"
                ),
                type="star",
                highlight=True,
                metadata=TimelineMetadata(
                    repo_id=most_starred.id, repo_name=most_starred.name, stars=stars
                ),
            )
        )

    covered = {e.metadata.repo_id for e in events if e.metadata is not None}
    for repo in sorted_repos:
        if repo.fork or repo.stargazers_count < POPULAR_REPO_MIN_STARS:
            continue
        if repo.id in covered:
            continue
        events.append(
            TimelineEvent(
                id=f"starred-repo-{repo.id}",
                date=repo.created_at,
                title="Popular Repository",
                description=f'"{repo.name}" has gained {_plural(repo.stargazers_count, "star")}!',
                type="star",
                highlight=repo.stargazers_count >= POPULAR_REPO_HIGHLIGHT_STARS,
                metadata=TimelineMetadata(
                    repo_id=repo.id, repo_name=repo.name, stars=repo.stargazers_count
                ),
            )
        )
        covered.add(repo.id)

    return events


def _language_events(sorted_repos: Sequence[Repository]) -> list[TimelineEvent]:
    seen: set[str] = set()
    events: list[TimelineEvent] = []
    for repo in sorted_repos:
        if not repo.language or repo.language in seen:
            continue
        seen.add(repo.language)
        events.append(
            TimelineEvent(
                id=f"first-{repo.language}-{repo.id}",
                date=repo.created_at,
                title=f"First {repo.language} Project",
                description=f'Started coding in {repo.language} with "{repo.name}"!',
                type="milestone",
                metadata=TimelineMetadata(
                    language=repo.language, language_color=language_color(repo.language)
                ),
            )
        )
    return events


def _repository_count_events(sorted_repos: Sequence[Repository]) -> list[TimelineEvent]:
    events: list[TimelineEvent] = []
    for index, repo in enumerate(sorted_repos, 1):
        if index not in REPO_MILESTONES:
            continue
        events.append(
            TimelineEvent(
                id=f"repo-milestone-{index}",
                date=repo.created_at,
                title=f"{index} Repositories Created",
                description=(
                    f"You've created {index} repositories on GitHub! "
                    f'"{repo.name}" marks this milestone.'
                ),
                type="milestone",
                highlight=index >= 10,
            )
        )
    return events


def _broken_streak_event(streak: Streak) -> TimelineEvent | None:
    start, end = _day_start(streak.start), _day_start(streak.end)
    if start is None or end is None:
        return None
    return TimelineEvent(
        id=f"streak-{streak.start}-{streak.end}",
        date=end,
        title=f"{streak.length}-Day Contribution Streak",
        description=(
            f"You maintained a {streak.length}-day streak of activity from "
            f"{format_date(start)} to {format_date(end)}!"
        ),
        type="streak",
        highlight=streak.length >= STREAK_HIGHLIGHT_DAYS,
    )


def _personal_best_event(streak: Streak) -> TimelineEvent | None:
    start, end = _day_start(streak.start), _day_start(streak.end)
    if start is None or end is None:
        return None
    return TimelineEvent(
        id=f"longest-streak-{streak.length}",
        date=end,
        title=f"Longest Contribution Streak: {streak.length} Days!",
        description=(
            f"Your longest contribution streak lasted from {format_date(start)} to "
            f"{format_date(end)}. Great dedication!"
        ),
        type="streak",
        highlight=True,
    )


def streak_events(calendar: ContributionCalendar | None) -> list[TimelineEvent]:
    """끊어진 streak(3일 초과) + 개인 최고 streak(5일 이상) 이벤트."""
    if calendar is None:
        return []

    summary = detect_streaks(flatten_days(calendar))
    events = [e for e in map(_broken_streak_event, summary.broken) if e is not None]

    best = personal_best(summary)
    if best is not None:
        event = _personal_best_event(best)
        if event is not None:
            events.append(event)
    return events


def anniversary_events(profile: Profile, now: datetime) -> list[TimelineEvent]:
    created = profile.created_at
    completed_years = (now - created) // timedelta(days=365)

    events: list[TimelineEvent] = []
    for year in range(1, completed_years + 1):
        anniversary = _add_years(created, year)
        if anniversary > now:
            continue
        events.append(
            TimelineEvent(
                id=f"github-anniversary-{year}",
                date=anniversary,
                title=f"{year}-Year GitHub Anniversary",
                description=(
                    f"Celebrating {_plural(year, 'year')} as a GitHub developer! "
                    f"You've come a long way since {format_date(created)}."
                ),
                type="anniversary",
                highlight=year == 1 or year % 5 == 0,
            )
        )
    return events


def follower_events(profile: Profile, now: datetime) -> list[TimelineEvent]:
    """팔로워 마일스톤. 날짜는 (마일스톤 / 현재 팔로워) 비율로 가입 기간에 선형 보간한 추정치."""
    followers = profile.followers
    if followers <= 0:
        return []

    lifetime = now - profile.created_at
    events: list[TimelineEvent] = []
    for milestone in FOLLOWER_MILESTONES:
        if milestone > followers:
            continue
        estimated = profile.created_at + lifetime * (milestone / followers)
        events.append(
            TimelineEvent(
                id=f"follower-milestone-{milestone}",
                date=min(estimated, now),
                title=f"{milestone} GitHub Followers",
                description=(
                    f"You've reached {milestone} followers on GitHub! "
                    "Your work is gaining recognition."
                ),
                type="follower",
                highlight=milestone >= 50,
                estimated=True,
            )
        )
    return events


# ── 공개 API ──────────────────────────────────────────


def synthesize_timeline(
    profile: Profile,
    repositories: Sequence[Repository],
    calendar: ContributionCalendar | None,
    now: datetime,
) -> list[TimelineEvent]:
    """타임라인 이벤트를 생성 순서대로 반환한다. 정렬은 sort_events()로."""
    if not repositories:
        return []

    sorted_repos = sorted(repositories, key=lambda r: r.created_at)

    events: list[TimelineEvent] = [
        _first_repository_event(sorted_repos[0]),
        _joined_event(profile, now),
    ]
    events.extend(_star_events(sorted_repos))
    events.extend(_language_events(sorted_repos))
    events.extend(_repository_count_events(sorted_repos))

    try:
        events.extend(streak_events(calendar))
    except ValueError:
        logger.exception(
            "Failed to derive streak events for %s",
            profile.login,
            extra={"event_code": "STREAK_ERROR", "login": profile.login},
        )

    events.extend(anniversary_events(profile, now))
    events.extend(follower_events(profile, now))

    logger.debug(
        "Synthesized %d timeline events for %s",
        len(events),
        profile.login,
        extra={"login": profile.login, "counts": {"events": len(events)}},
    )
    return events


def sort_events(events: Iterable[TimelineEvent], newest_first: bool = True) -> list[TimelineEvent]:
    return sorted(events, key=lambda e: e.date, reverse=newest_first)


def filter_events(events: Iterable[TimelineEvent], event_type: str | None) -> list[TimelineEvent]:
    """event_type 이 None 또는 'all' 이면 전체."""
    if event_type is None or event_type == "all":
        return list(events)
    if event_type not in EVENT_TYPES:
        raise ValueError(f"Unknown timeline event type: {event_type}")
    return [e for e in events if e.type == event_type]


def highlight_events(events: Iterable[TimelineEvent]) -> list[TimelineEvent]:
    return [e for e in events if e.highlight]
