"""프로필 지표 추출.

페르소나/배지/타임라인이 공유하는 단일 지표 정의. 모든 함수는 전역 상태 없이
입력만으로 결정되며, 빈 입력에서는 0(또는 정의된 기본값)을 반환한다.
"""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Sequence

from ghprofile_insights.contributions import dated_days
from ghprofile_insights.models import (
    ContributionCalendar,
    DerivedMetrics,
    Profile,
    Repository,
)

DEFAULT_CONSISTENCY = 50
LANGUAGE_DIVERSITY_CAP = 10
FOLLOWER_CAP = 100
STAR_CAP = 100
DESCRIPTION_MIN_LENGTH = 20


def round_half_up(value: float) -> int:
    """0.5 를 올림하는 반올림 (Python round()의 banker's rounding 대신)."""
    return math.floor(value + 0.5)


def _clamp(value: int, low: int = 0, high: int = 100) -> int:
    return max(low, min(high, value))


# ── 원시 집계 ──────────────────────────────────────────


def distinct_languages(repositories: Sequence[Repository]) -> tuple[str, ...]:
    """저장소 언어 목록 (중복 제거, 처음 등장 순서 유지)."""
    seen: dict[str, None] = {}
    for repo in repositories:
        if repo.language:
            seen.setdefault(repo.language, None)
    return tuple(seen)


def language_counts(repositories: Sequence[Repository]) -> Counter[str]:
    """언어별 저장소 수. 처음 등장 순서를 보존한다."""
    return Counter(repo.language for repo in repositories if repo.language)


def primary_language(repositories: Sequence[Repository]) -> tuple[str, int] | None:
    """가장 많이 쓰인 언어와 저장소 수. 동률이면 먼저 등장한 언어."""
    counts = language_counts(repositories)
    if not counts:
        return None
    return counts.most_common(1)[0]


def total_stars(repositories: Sequence[Repository]) -> int:
    return sum(repo.stargazers_count for repo in repositories)


def total_forks(repositories: Sequence[Repository]) -> int:
    return sum(repo.forks_count for repo in repositories)


def forked_count(repositories: Sequence[Repository]) -> int:
    return sum(1 for repo in repositories if repo.fork)


def total_contributions(calendar: ContributionCalendar | None) -> int:
    return calendar.total_contributions if calendar is not None else 0


# ── 정규화 점수 ────────────────────────────────────────


def language_diversity(language_count: int) -> int:
    return round_half_up(min(language_count / LANGUAGE_DIVERSITY_CAP, 1) * 100)


def contribution_consistency(calendar: ContributionCalendar | None) -> int:
    """활동일 / 전체일 × 100. 캘린더가 없으면 기본값 50.

    날짜를 해석할 수 없는 일자는 분자와 분모 모두에서 제외한다.
    """
    if calendar is None:
        return DEFAULT_CONSISTENCY
    days = dated_days(calendar)
    if not days:
        return 0
    active = sum(1 for _, day in days if day.contribution_count > 0)
    return _clamp(round_half_up(active / len(days) * 100))


def collaboration(repositories: Sequence[Repository], followers: int) -> int:
    if not repositories:
        return 0
    ratio = forked_count(repositories) / len(repositories)
    return _clamp(round_half_up(ratio * 50 + min(followers, FOLLOWER_CAP) / 2))


def project_popularity(stars: int) -> int:
    return _clamp(round_half_up(min(stars / STAR_CAP * 100, 100)))


def code_quality(repositories: Sequence[Repository]) -> int:
    """설명이 20자를 넘는 저장소 비율."""
    described = sum(
        1
        for repo in repositories
        if repo.description and len(repo.description) > DESCRIPTION_MIN_LENGTH
    )
    return _clamp(round_half_up(described / max(1, len(repositories)) * 100))


def community_impact(forks: int, followers: int) -> int:
    return _clamp(round_half_up(min(forks / 20 + min(followers, FOLLOWER_CAP) / 2, 100)))


def extract_metrics(
    profile: Profile,
    repositories: Sequence[Repository],
    calendar: ContributionCalendar | None = None,
) -> DerivedMetrics:
    """6개 정규화 점수와 원시 집계를 계산한다."""
    languages = distinct_languages(repositories)
    stars = total_stars(repositories)
    forks = total_forks(repositories)

    return DerivedMetrics(
        language_diversity=language_diversity(len(languages)),
        contribution_consistency=contribution_consistency(calendar),
        collaboration=collaboration(repositories, profile.followers),
        project_popularity=project_popularity(stars),
        code_quality=code_quality(repositories),
        community_impact=community_impact(forks, profile.followers),
        languages=languages,
        total_stars=stars,
        total_forks=forks,
        repository_count=len(repositories),
        forked_repository_count=forked_count(repositories),
    )
