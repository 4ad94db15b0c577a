"""프로필 요약 인사이트 + 프로필 레벨.

결정적 순서로 생성한다 (무작위 셔플 없음). 표시 순서가 필요하면 호출 측에서 정한다.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from ghprofile_insights.contributions import flatten_days, most_active_weekday
from ghprofile_insights.metrics import (
    language_counts,
    round_half_up,
    total_contributions,
    total_stars,
)
from ghprofile_insights.models import (
    AccountKind,
    ContributionCalendar,
    Insight,
    Profile,
    Repository,
)
from ghprofile_insights.streaks import detect_streaks

RECENT_DAYS = 30

LANGUAGE_COMPLIMENTS: dict[str, str] = {
    "JavaScript": "You must love building interactive web experiences!",
    "TypeScript": "You value type safety and maintainable code!",
    "Python": "Great choice for data science and automation!",
    "Java": "You're working with a powerful, enterprise-grade language!",
    "HTML": "Frontend development is your thing!",
    "CSS": "You have an eye for design and UI!",
    "Ruby": "You appreciate elegant and expressive syntax!",
    "Go": "You value performance and simplicity!",
    "C#": "A versatile choice for various applications!",
    "PHP": "You're powering a significant part of the web!",
    "Swift": "You're building sleek Apple platform apps!",
    "Kotlin": "Modern Android development is your specialty!",
    "Rust": "You care about memory safety without sacrificing performance!",
    "C++": "You're handling complex and performance-critical systems!",
}

# (최소 스타 수, 문구) - 큰 값부터
STAR_LEVELS: tuple[tuple[int, str], ...] = (
    (1000, "That's stellar! You're making a significant impact on the community!"),
    (500, "Fantastic achievement! Your projects are getting serious attention!"),
    (100, "Impressive! Your work is gaining recognition in the community!"),
    (50, "Great job! Your projects are starting to shine!"),
    (10, "Nice start! People are taking notice of your work!"),
    (0, "Every star counts! Keep building awesome projects!"),
)

FOLLOWER_LEVELS: tuple[tuple[int, str], ...] = (
    (1000, "You have a significant following in the developer community!"),
    (100, "Your work is making an impact in the community!"),
    (10, "Your reputation is growing among developers!"),
    (0, "You're starting to build your developer network!"),
)

# (점수 초과 기준, 레벨)
PROFILE_LEVELS: tuple[tuple[int, str], ...] = (
    (1000, "GitHub Legend"),
    (500, "GitHub Master"),
    (200, "GitHub Pro"),
    (100, "GitHub Enthusiast"),
    (50, "GitHub Regular"),
    (20, "GitHub Explorer"),
)
BASE_PROFILE_LEVEL = "GitHub Beginner"


def _level(value: int, levels: Sequence[tuple[int, str]]) -> str:
    for minimum, text in levels:
        if value >= minimum:
            return text
    return levels[-1][1]


def star_level(stars: int) -> str:
    return _level(stars, STAR_LEVELS)


def language_compliment(language: str) -> str:
    return LANGUAGE_COMPLIMENTS.get(language, "Great language choice!")


def _activity_insights(calendar: ContributionCalendar | None) -> list[Insight]:
    if calendar is None:
        return []

    insights: list[Insight] = []
    weekday = most_active_weekday(calendar)
    if weekday is not None:
        insights.append(
            Insight(
                id="active-day",
                text=f"Your most active day is {weekday}!",
                subtext="That's when you make the most contributions to your projects.",
                category="activity",
            )
        )

    summary = detect_streaks(flatten_days(calendar))
    current = summary.current_length
    if current > 0:
        subtext = (
            f"Keep it up! Your longest streak is {summary.longest_length} days."
            if current > 1
            else "Great start! Try to build momentum with regular contributions."
        )
        insights.append(
            Insight(
                id="streak",
                text=f"You're on a {current}-day contribution streak!",
                subtext=subtext,
                category="activity",
            )
        )
    return insights


def _language_insights(repositories: Sequence[Repository]) -> list[Insight]:
    ranked = language_counts(repositories).most_common()
    if not ranked:
        return []

    top, count = ranked[0]
    percentage = round_half_up(count / len(repositories) * 100)
    insights = [
        Insight(
            id="top-language",
            text=f"You're a {top} enthusiast!",
            subtext=f"{percentage}% of your repositories use {top}. {language_compliment(top)}",
            category="languages",
        )
    ]
    if len(ranked) >= 3:
        insights.append(
            Insight(
                id="polyglot",
                text=f"You're a polyglot programmer with {len(ranked)} languages!",
                subtext=f"Your top 3: {', '.join(lang for lang, _ in ranked[:3])}",
                category="languages",
            )
        )
    return insights


def _repository_insights(repositories: Sequence[Repository], now: datetime) -> list[Insight]:
    insights: list[Insight] = []

    if len(repositories) > 1:
        oldest = min(repositories, key=lambda r: r.created_at)
        days_since_first = (now - oldest.created_at).days
        if days_since_first > 30:
            per_month = len(repositories) / (days_since_first // 30)
            insights.append(
                Insight(
                    id="repo-pace",
                    text=f"You create about {per_month:.1f} repositories per month!",
                    subtext=f"That's based on your activity since {oldest.created_at:%b %Y}",
                    category="repositories",
                )
            )

    stars = total_stars(repositories)
    if stars > 0:
        insights.append(
            Insight(
                id="total-stars",
                text=f"You've earned {stars} stars across your repositories!",
                subtext=star_level(stars),
                category="impact",
            )
        )

    if repositories:
        popular = max(repositories, key=lambda r: r.stargazers_count)
        if popular.stargazers_count > 0:
            forks = f" and {popular.forks_count} forks" if popular.forks_count else ""
            insights.append(
                Insight(
                    id="popular-project",
                    text=f'"{popular.name}" is your most popular project!',
                    subtext=f"It has {popular.stargazers_count} stars{forks}.",
                    category="repositories",
                )
            )

    recent = [r for r in repositories if (now - r.updated_at).days < RECENT_DAYS]
    if recent:
        subtext = (
            f"Including {', '.join(r.name for r in recent[:2])} and more."
            if len(recent) > 2
            else "Keep up the good work!"
        )
        insights.append(
            Insight(
                id="recent-activity",
                text=f"You've been busy! {len(recent)} projects updated in the last month.",
                subtext=subtext,
                category="activity",
            )
        )
    return insights


def _personal_insights(profile: Profile, now: datetime) -> list[Insight]:
    insights: list[Insight] = []

    age_years = (now - profile.created_at).days / 365
    if age_years >= 1:
        insights.append(
            Insight(
                id="account-age",
                text=f"You're a GitHub veteran of {age_years:.1f} years!",
                subtext=(
                    f"Account created on {profile.created_at:%B} {profile.created_at.day}, "
                    f"{profile.created_at.year}"
                ),
                category="personal",
            )
        )

    if profile.type is not AccountKind.USER:
        insights.append(
            Insight(
                id="account-type",
                text=f"Account type: {profile.type.value}",
                subtext="This is a special GitHub account with additional capabilities.",
                category="personal",
            )
        )

    if profile.site_admin:
        insights.append(
            Insight(
                id="staff-member",
                text="GitHub Staff Member!",
                subtext="This user works at GitHub and has administrative privileges.",
                category="personal",
            )
        )

    if profile.followers > 0:
        insights.append(
            Insight(
                id="followers",
                text=f"You have {profile.followers} GitHub followers!",
                subtext=_level(profile.followers, FOLLOWER_LEVELS),
                category="impact",
            )
        )
    return insights


def generate_insights(
    profile: Profile,
    repositories: Sequence[Repository],
    calendar: ContributionCalendar | None,
    now: datetime,
) -> list[Insight]:
    return [
        *_activity_insights(calendar),
        *_language_insights(repositories),
        *_repository_insights(repositories, now),
        *_personal_insights(profile, now),
    ]


def profile_level(
    profile: Profile,
    repositories: Sequence[Repository],
    calendar: ContributionCalendar | None,
    now: datetime,
) -> str:
    """가중 점수(가입 개월 + 저장소×2 + 스타×3 + 기여/10 + 팔로워×5)로 레벨을 정한다."""
    score = (
        (now - profile.created_at).days / 30
        + len(repositories) * 2
        + total_stars(repositories) * 3
        + total_contributions(calendar) / 10
        + profile.followers * 5
    )
    for threshold, level in PROFILE_LEVELS:
        if score > threshold:
            return level
    return BASE_PROFILE_LEVEL
