"""개발자 배지 평가.

카테고리별 임계치 테이블(bronze < silver < gold < platinum)을 독립적으로 평가한다.
배지는 누적형: 상위 티어를 달성하면 하위 티어도 모두 earned 상태가 된다.
네 티어 배지는 항상 모두 생성되며 earned 플래그로 달성 여부를 표시한다.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from ghprofile_insights.metrics import (
    distinct_languages,
    primary_language,
    total_contributions,
    total_stars,
)
from ghprofile_insights.models import Badge, ContributionCalendar, Repository

TIERS: tuple[str, ...] = ("bronze", "silver", "gold", "platinum")
CATEGORIES: tuple[str, ...] = ("activity", "languages", "repositories", "impact", "specialty")

ACTIVE_WINDOW_DAYS = 30


@dataclass(frozen=True)
class BadgeSpec:
    id: str
    name: str
    description: str
    tier: str
    threshold: int


@dataclass(frozen=True)
class BadgeTable:
    category: str
    metric: str
    icon: str
    specs: tuple[BadgeSpec, ...]


BADGE_TABLES: tuple[BadgeTable, ...] = (
    BadgeTable(
        category="repositories",
        metric="repository_count",
        icon="repository",
        specs=(
            BadgeSpec("repo-starter", "Project Starter",
                      "Created your first GitHub repository", "bronze", 1),
            BadgeSpec("repo-creator", "Project Creator",
                      "Maintained 5+ GitHub repositories", "silver", 5),
            BadgeSpec("repo-manager", "Repository Manager",
                      "Managed an impressive collection of 15+ repositories", "gold", 15),
            BadgeSpec("repo-guru", "Repository Guru",
                      "Mastered the art of managing 30+ repositories", "platinum", 30),
        ),
    ),
    BadgeTable(
        category="activity",
        metric="total_contributions",
        icon="commit",
        specs=(
            BadgeSpec("code-contributor", "Code Contributor",
                      "Made your first contributions on GitHub", "bronze", 1),
            BadgeSpec("code-enthusiast", "Code Enthusiast",
                      "Made 100+ contributions in the past year", "silver", 100),
            BadgeSpec("commit-machine", "Commit Machine",
                      "Made 500+ contributions in the past year", "gold", 500),
            BadgeSpec("commit-ninja", "Commit Ninja",
                      "Made 1,000+ contributions in the past year", "platinum", 1000),
        ),
    ),
    BadgeTable(
        category="languages",
        metric="language_count",
        icon="code",
        specs=(
            BadgeSpec("code-writer", "Code Writer",
                      "Wrote code in your first programming language", "bronze", 1),
            BadgeSpec("language-explorer", "Language Explorer",
                      "Explored and used 3+ programming languages", "silver", 3),
            BadgeSpec("polyglot-coder", "Polyglot Programmer",
                      "Mastered 6+ different programming languages", "gold", 6),
            BadgeSpec("language-master", "Language Master",
                      "Achieved proficiency in 10+ programming languages", "platinum", 10),
        ),
    ),
    BadgeTable(
        category="impact",
        metric="total_stars",
        icon="star",
        specs=(
            BadgeSpec("first-star", "First Star",
                      "Someone starred one of your repositories", "bronze", 1),
            BadgeSpec("rising-star", "Rising Star",
                      "Earned 50+ stars across your repositories", "silver", 50),
            BadgeSpec("community-favorite", "Community Favorite",
                      "Earned 250+ stars across your repositories", "gold", 250),
            BadgeSpec("open-source-hero", "Open Source Hero",
                      "Earned 1,000+ stars for your valuable contributions", "platinum", 1000),
        ),
    ),
)

# (최소 저장소 수, 티어, 칭호) - 큰 값부터
SPECIALTY_LEVELS: tuple[tuple[int, str, str], ...] = (
    (10, "gold", "Master"),
    (5, "silver", "Developer"),
    (0, "bronze", "Enthusiast"),
)


def tier_rank(tier: str) -> int:
    return TIERS.index(tier)


def evaluate_table(table: BadgeTable, value: int) -> list[Badge]:
    """한 카테고리 테이블의 배지 4개를 earned 플래그와 함께 반환한다."""
    return [
        Badge(
            id=spec.id,
            name=spec.name,
            description=spec.description,
            icon=table.icon,
            tier=spec.tier,
            category=table.category,
            earned=value >= spec.threshold,
        )
        for spec in table.specs
    ]


def has_recent_activity(
    repositories: Sequence[Repository],
    now: datetime,
    window_days: int = ACTIVE_WINDOW_DAYS,
) -> bool:
    """최근 window_days 일 이내(경과 일수 미만)에 업데이트된 저장소가 있는지."""
    return any((now - repo.updated_at).days < window_days for repo in repositories)


def specialty_badge(repositories: Sequence[Repository]) -> Badge | None:
    """가장 많이 쓴 언어의 특기 배지. 언어 정보가 없으면 None."""
    primary = primary_language(repositories)
    if primary is None:
        return None

    language, count = primary
    for minimum, tier, title in SPECIALTY_LEVELS:
        if count >= minimum:
            break

    return Badge(
        id=f"{language.lower()}-{tier}",
        name=f"{language} {title}",
        description=f"Created {count} repositories using {language}",
        icon="specialty",
        tier=tier,
        category="specialty",
        earned=True,
    )


def evaluate_badges(
    repositories: Sequence[Repository],
    calendar: ContributionCalendar | None,
    now: datetime,
) -> list[Badge]:
    """전체 배지 목록을 평가한다. 저장소가 없으면 빈 리스트."""
    if not repositories:
        return []

    values = {
        "repository_count": len(repositories),
        "total_contributions": total_contributions(calendar),
        "language_count": len(distinct_languages(repositories)),
        "total_stars": total_stars(repositories),
    }

    badges: list[Badge] = []
    for table in BADGE_TABLES:
        badges.extend(evaluate_table(table, values[table.metric]))

    badges.append(
        Badge(
            id="active-developer",
            name="Active Developer",
            description="Showed coding activity within the last 30 days",
            icon="activity",
            tier="silver",
            category="activity",
            earned=has_recent_activity(repositories, now),
        )
    )

    specialty = specialty_badge(repositories)
    if specialty is not None:
        badges.append(specialty)

    return badges


def earned_badges(badges: Sequence[Badge]) -> list[Badge]:
    return [badge for badge in badges if badge.earned]


def highest_earned_tier(badges: Sequence[Badge], category: str) -> str | None:
    """카테고리 내 달성한 최고 티어. 없으면 None."""
    tiers = [b.tier for b in badges if b.category == category and b.earned]
    if not tiers:
        return None
    return max(tiers, key=tier_rank)
