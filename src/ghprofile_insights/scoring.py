"""GitHub 배틀 점수 계산.

프로필 1건의 점수는 5개 차원의 상한 있는 가중치 합이다.
- experience: 30일당 1점, 최대 60
- stars:      스타당 3점, 최대 300
- repositories: 공개 저장소당 5점, 최대 250
- followers:  팔로워당 2점, 최대 200
- commits:    기여 0.5점(내림), 최대 300

두 프로필 비교는 같은 계산을 서로 독립적으로 두 번 수행한다 (공유 상태 없음).
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime

from ghprofile_insights.metrics import total_contributions, total_stars
from ghprofile_insights.models import (
    BattleResult,
    ContributionCalendar,
    Profile,
    ProfileSnapshot,
    Repository,
    ScoreBreakdown,
)

logger = logging.getLogger(__name__)


class AccountKindMismatchError(ValueError):
    """유저와 조직을 비교하려 할 때 발생."""

    def __init__(self, first: Profile, second: Profile) -> None:
        self.first = first
        self.second = second
        super().__init__(
            f"Cannot compare a GitHub {first.type.value} ({first.login}) with a GitHub "
            f"{second.type.value} ({second.login})"
        )


@dataclass(frozen=True)
class ScoringMetric:
    id: str
    title: str
    formula: str
    max_points: int
    description: str


SCORING_METRICS: tuple[ScoringMetric, ...] = (
    ScoringMetric(
        "repositories", "Repositories", "5 points per repository", 250,
        "Public repositories demonstrate a developer's ability to create and manage "
        "code projects.",
    ),
    ScoringMetric(
        "stars", "Stars", "3 points per star", 300,
        "Stars represent community recognition and the value of a developer's "
        "contributions.",
    ),
    ScoringMetric(
        "commits", "Commits", "0.5 points per contribution", 300,
        "Commits reflect active contribution frequency and ongoing development activity.",
    ),
    ScoringMetric(
        "followers", "Followers", "2 points per follower", 200,
        "Followers indicate a developer's influence and reputation in the GitHub "
        "community.",
    ),
    ScoringMetric(
        "experience", "Experience", "1 point per month", 60,
        "Account age reflects a developer's experience and longevity in the development "
        "community.",
    ),
)

MAX_POSSIBLE_SCORE = sum(metric.max_points for metric in SCORING_METRICS)


def experience_points(created_at: datetime, now: datetime) -> int:
    age_days = max(0, (now - created_at).days)
    return min(age_days // 30, 60)


def star_points(stars: int) -> int:
    return min(stars * 3, 300)


def repository_points(public_repos: int) -> int:
    return min(public_repos * 5, 250)


def follower_points(followers: int) -> int:
    return min(followers * 2, 200)


def commit_points(contributions: int) -> int:
    return min(math.floor(contributions * 0.5), 300)


def score_profile(
    profile: Profile,
    repositories: Sequence[Repository],
    calendar: ContributionCalendar | None,
    now: datetime,
) -> ScoreBreakdown:
    repos = repository_points(profile.public_repos)
    stars = star_points(total_stars(repositories))
    commits = commit_points(total_contributions(calendar))
    followers = follower_points(profile.followers)
    experience = experience_points(profile.created_at, now)

    return ScoreBreakdown(
        login=profile.login,
        repositories=repos,
        stars=stars,
        commits=commits,
        followers=followers,
        experience=experience,
        total=repos + stars + commits + followers + experience,
    )


def score_snapshot(snapshot: ProfileSnapshot, now: datetime) -> ScoreBreakdown:
    return score_profile(snapshot.profile, snapshot.repositories, snapshot.calendar, now)


def ensure_same_account_kind(first: Profile, second: Profile) -> None:
    """유저 vs 조직 비교를 막는다."""
    if first.type is not second.type:
        raise AccountKindMismatchError(first, second)


def decide_winner(first: ScoreBreakdown, second: ScoreBreakdown) -> BattleResult:
    """총점이 엄격히 큰 쪽이 승자, 같으면 무승부."""
    if first.total == second.total:
        return BattleResult(first=first, second=second, winner=None, is_draw=True)
    winner = first if first.total > second.total else second
    return BattleResult(first=first, second=second, winner=winner.login, is_draw=False)


def compare_profiles(
    first: ProfileSnapshot,
    second: ProfileSnapshot,
    now: datetime,
    *,
    parallel: bool = False,
    max_workers: int = 2,
) -> BattleResult:
    """두 프로필 배틀.

    Args:
        parallel: True면 두 점수를 스레드 풀에서 동시에 계산한다
        max_workers: 스레드 풀 크기
    """
    if parallel:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            first_future = pool.submit(score_snapshot, first, now)
            second_future = pool.submit(score_snapshot, second, now)
            first_score, second_score = first_future.result(), second_future.result()
    else:
        first_score = score_snapshot(first, now)
        second_score = score_snapshot(second, now)

    result = decide_winner(first_score, second_score)
    logger.info(
        "Battle %s (%d) vs %s (%d): %s",
        first_score.login,
        first_score.total,
        second_score.login,
        second_score.total,
        "draw" if result.is_draw else f"{result.winner} wins",
        extra={
            "event_code": "BATTLE_RESULT",
            "counts": {first_score.login: first_score.total, second_score.login: second_score.total},
        },
    )
    return result
