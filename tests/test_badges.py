"""배지 평가 테스트."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta

from ghprofile_insights.badges import (
    BADGE_TABLES,
    earned_badges,
    evaluate_badges,
    has_recent_activity,
    highest_earned_tier,
    specialty_badge,
)
from ghprofile_insights.models import ContributionCalendar, ProfileSnapshot, Repository


def _by_id(badges: list) -> dict:
    return {badge.id: badge for badge in badges}


class TestEvaluateBadges:
    """카테고리별 배지 평가 테스트."""

    def test_no_repositories(
        self,
        now: datetime,
        make_calendar: Callable[..., ContributionCalendar],
    ) -> None:
        assert evaluate_badges([], make_calendar([5]), now) == []

    def test_all_tier_badges_emitted(self, sample_snapshot: ProfileSnapshot, now: datetime) -> None:
        badges = evaluate_badges(sample_snapshot.repositories, sample_snapshot.calendar, now)
        table_ids = [spec.id for table in BADGE_TABLES for spec in table.specs]
        assert [b.id for b in badges[: len(table_ids)]] == table_ids
        assert badges[len(table_ids)].id == "active-developer"

    def test_sample_snapshot_flags(self, sample_snapshot: ProfileSnapshot, now: datetime) -> None:
        badges = _by_id(
            evaluate_badges(sample_snapshot.repositories, sample_snapshot.calendar, now)
        )
        assert badges["repo-starter"].earned
        assert not badges["repo-creator"].earned
        assert badges["code-contributor"].earned
        assert not badges["code-enthusiast"].earned
        assert badges["language-explorer"].earned
        assert not badges["polyglot-coder"].earned
        assert badges["first-star"].earned
        assert not badges["rising-star"].earned
        assert badges["active-developer"].earned

    def test_monotonic_tiers(
        self,
        now: datetime,
        make_repo: Callable[..., Repository],
    ) -> None:
        repos = [make_repo(i) for i in range(1, 31)]
        badges = _by_id(evaluate_badges(repos, None, now))
        for badge_id in ("repo-starter", "repo-creator", "repo-manager", "repo-guru"):
            assert badges[badge_id].earned

    def test_earned_set_is_downward_closed(
        self,
        now: datetime,
        make_repo: Callable[..., Repository],
        make_calendar: Callable[..., ContributionCalendar],
    ) -> None:
        repos = [make_repo(i, stars=30) for i in range(1, 10)]
        badges = evaluate_badges(repos, make_calendar([600]), now)
        by_id = _by_id(badges)
        for table in BADGE_TABLES:
            flags = [by_id[spec.id].earned for spec in table.specs]
            assert flags == sorted(flags, reverse=True)

    def test_no_calendar_means_no_activity_badges(
        self,
        now: datetime,
        make_repo: Callable[..., Repository],
    ) -> None:
        badges = _by_id(evaluate_badges([make_repo(1)], None, now))
        assert not badges["code-contributor"].earned

    def test_language_count_ignores_null(
        self,
        now: datetime,
        make_repo: Callable[..., Repository],
    ) -> None:
        badges = _by_id(evaluate_badges([make_repo(1, language=None)], None, now))
        assert not badges["code-writer"].earned
        assert "specialty" not in {b.category for b in badges.values()}


class TestActiveDeveloper:
    def test_recent_update(
        self,
        now: datetime,
        make_repo: Callable[..., Repository],
    ) -> None:
        repo = make_repo(1, updated_at=(now - timedelta(days=29, hours=23)).isoformat())
        assert has_recent_activity([repo], now)

    def test_thirty_days_is_not_recent(
        self,
        now: datetime,
        make_repo: Callable[..., Repository],
    ) -> None:
        repo = make_repo(1, updated_at=(now - timedelta(days=30)).isoformat())
        assert not has_recent_activity([repo], now)


class TestSpecialtyBadge:
    def test_bronze(
        self,
        make_repo: Callable[..., Repository],
    ) -> None:
        badge = specialty_badge([make_repo(1, language="Python")])
        assert badge is not None
        assert badge.id == "python-bronze"
        assert badge.name == "Python Enthusiast"
        assert badge.description == "Created 1 repositories using Python"

    def test_silver(
        self,
        make_repo: Callable[..., Repository],
    ) -> None:
        badge = specialty_badge([make_repo(i, language="Go") for i in range(5)])
        assert badge is not None
        assert (badge.id, badge.tier, badge.name) == ("go-silver", "silver", "Go Developer")

    def test_gold(
        self,
        make_repo: Callable[..., Repository],
    ) -> None:
        repos = [make_repo(i, language="Rust") for i in range(10)] + [make_repo(99, language="C")]
        badge = specialty_badge(repos)
        assert badge is not None
        assert (badge.id, badge.tier, badge.name) == ("rust-gold", "gold", "Rust Master")

    def test_none_without_languages(
        self,
        make_repo: Callable[..., Repository],
    ) -> None:
        assert specialty_badge([make_repo(1, language=None)]) is None


class TestHighestEarnedTier:
    def test_highest(
        self,
        now: datetime,
        make_repo: Callable[..., Repository],
    ) -> None:
        repos = [make_repo(i) for i in range(1, 16)]
        badges = evaluate_badges(repos, None, now)
        assert highest_earned_tier(badges, "repositories") == "gold"
        assert highest_earned_tier(badges, "impact") is None

    def test_earned_badges_filter(
        self,
        now: datetime,
        make_repo: Callable[..., Repository],
    ) -> None:
        badges = evaluate_badges([make_repo(1, stars=1)], None, now)
        assert {b.id for b in earned_badges(badges)} == {
            "repo-starter",
            "code-writer",
            "first-star",
            "python-bronze",
        }
