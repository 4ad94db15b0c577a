"""코더 페르소나 분류.

우선순위가 고정된 (persona, predicate) 규칙 목록을 앞에서부터 평가하여
처음 만족하는 규칙의 페르소나를 선택한다 (first-match-wins).
어떤 규칙도 만족하지 않으면 The Framework Lord.

The Sprinter 는 예약 페르소나: 정의는 존재하지만 분류 규칙이 없어
build_assignment()로 직접 생성할 때만 나타난다.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from ghprofile_insights.metrics import extract_metrics
from ghprofile_insights.models import (
    ContributionCalendar,
    DerivedMetrics,
    PersonaAssignment,
    PersonaStrengths,
    PersonaType,
    Profile,
    Repository,
)


@dataclass(frozen=True)
class PersonaProfile:
    """페르소나 정적 정보."""

    description: str
    color: str
    icon: str


@dataclass(frozen=True)
class PersonaRule:
    persona: PersonaType
    predicate: Callable[[DerivedMetrics], bool]
    summary: str


PERSONA_PROFILES: dict[PersonaType, PersonaProfile] = {
    PersonaType.POLYGLOT: PersonaProfile(
        description=(
            "You thrive in diverse technological environments, able to adapt to "
            "different programming languages and paradigms."
        ),
        color="#8B5CF6",
        icon="code-branches",
    ),
    PersonaType.SPECIALIST: PersonaProfile(
        description=(
            "You focus deeply on mastering specific technologies, becoming an expert "
            "in your chosen domain."
        ),
        color="#2563EB",
        icon="microscope",
    ),
    PersonaType.CONSISTENT_COMMITTER: PersonaProfile(
        description=(
            "Your steady approach to coding creates reliable progress and demonstrates "
            "exceptional discipline."
        ),
        color="#10B981",
        icon="calendar",
    ),
    PersonaType.OSS_CONTRIBUTOR: PersonaProfile(
        description=(
            "You actively collaborate with the broader developer community, "
            "strengthening the open-source ecosystem."
        ),
        color="#F97316",
        icon="network",
    ),
    PersonaType.SOLO_HACKER: PersonaProfile(
        description=(
            "You excel in independent development, building your own vision with "
            "focus and determination."
        ),
        color="#6B7280",
        icon="lightbulb",
    ),
    PersonaType.PROJECT_JUGGLER: PersonaProfile(
        description=(
            "Your diverse portfolio of projects showcases versatility and a passion "
            "for exploring new ideas."
        ),
        color="#EC4899",
        icon="cubes",
    ),
    PersonaType.COMMUNITY_PILLAR: PersonaProfile(
        description=(
            "Your work resonates with the developer community, creating impact "
            "through widely-used projects."
        ),
        color="#F59E0B",
        icon="star",
    ),
    PersonaType.DOCUMENTATION_HERO: PersonaProfile(
        description=(
            "Your attention to detail and clear communication makes your code "
            "accessible and maintainable."
        ),
        color="#14B8A6",
        icon="document",
    ),
    PersonaType.FRAMEWORK_LORD: PersonaProfile(
        description=(
            "You build on solid foundations, leveraging frameworks and libraries to "
            "create robust applications."
        ),
        color="#6366F1",
        icon="template",
    ),
    PersonaType.SPRINTER: PersonaProfile(
        description=(
            "You work in intense bursts of activity, shipping a lot of code in short, "
            "focused sprints."
        ),
        color="#EF4444",
        icon="lightning",
    ),
}

DEFAULT_PERSONA = PersonaType.FRAMEWORK_LORD

# 순서 자체가 계약이다. 재배치하면 분류 결과가 바뀐다.
PERSONA_RULES: tuple[PersonaRule, ...] = (
    PersonaRule(
        PersonaType.POLYGLOT,
        lambda m: len(m.languages) >= 5 and m.language_diversity > 70,
        "languages >= 5 and language diversity > 70",
    ),
    PersonaRule(
        PersonaType.SPECIALIST,
        lambda m: len(m.languages) <= 2 and m.repository_count >= 5,
        "languages <= 2 and repositories >= 5",
    ),
    PersonaRule(
        PersonaType.CONSISTENT_COMMITTER,
        lambda m: m.contribution_consistency > 75,
        "contribution consistency > 75",
    ),
    PersonaRule(
        PersonaType.OSS_CONTRIBUTOR,
        lambda m: m.forked_repository_count > m.repository_count / 2,
        "forked repositories > half of all repositories",
    ),
    PersonaRule(
        PersonaType.SOLO_HACKER,
        lambda m: m.collaboration < 30 and m.repository_count > 5,
        "collaboration < 30 and repositories > 5",
    ),
    PersonaRule(
        PersonaType.PROJECT_JUGGLER,
        lambda m: m.repository_count > 10,
        "repositories > 10",
    ),
    PersonaRule(
        PersonaType.COMMUNITY_PILLAR,
        lambda m: m.total_stars > 100 or m.project_popularity > 70,
        "total stars > 100 or project popularity > 70",
    ),
    PersonaRule(
        PersonaType.DOCUMENTATION_HERO,
        lambda m: m.code_quality > 70,
        "code quality > 70",
    ),
)

RESERVED_PERSONAS: frozenset[PersonaType] = frozenset({PersonaType.SPRINTER})
CLASSIFIABLE_PERSONAS: tuple[PersonaType, ...] = (
    *(rule.persona for rule in PERSONA_RULES),
    DEFAULT_PERSONA,
)


def strengths_of(metrics: DerivedMetrics) -> PersonaStrengths:
    return PersonaStrengths(
        language_diversity=metrics.language_diversity,
        contribution_consistency=metrics.contribution_consistency,
        collaboration=metrics.collaboration,
        project_popularity=metrics.project_popularity,
        code_quality=metrics.code_quality,
        community_impact=metrics.community_impact,
    )


def build_assignment(persona: PersonaType, metrics: DerivedMetrics) -> PersonaAssignment:
    """페르소나 값과 지표로 PersonaAssignment를 만든다 (예약 페르소나 포함)."""
    info = PERSONA_PROFILES[persona]
    return PersonaAssignment(
        persona=persona,
        description=info.description,
        strengths=strengths_of(metrics),
        color=info.color,
        icon=info.icon,
    )


def match_rule(
    metrics: DerivedMetrics,
    rules: Sequence[PersonaRule] = PERSONA_RULES,
) -> PersonaRule | None:
    """처음 만족하는 규칙. 없으면 None."""
    for rule in rules:
        if rule.predicate(metrics):
            return rule
    return None


def classify_persona(metrics: DerivedMetrics) -> PersonaAssignment:
    rule = match_rule(metrics)
    persona = rule.persona if rule is not None else DEFAULT_PERSONA
    return build_assignment(persona, metrics)


def assign_persona(
    profile: Profile,
    repositories: Sequence[Repository],
    calendar: ContributionCalendar | None = None,
) -> PersonaAssignment | None:
    """저장소가 없으면 None (데이터 없음), 있으면 분류 결과."""
    if not repositories:
        return None
    return classify_persona(extract_metrics(profile, repositories, calendar))


def persona_chart_color(persona: PersonaType) -> str:
    return PERSONA_PROFILES[persona].color


def personality_text(
    assignment: PersonaAssignment,
    metrics: DerivedMetrics,
    profile: Profile,
) -> str:
    """페르소나 설명 + 언어/저장소/스타/팔로워 기반 문장을 이어 붙인다."""
    parts = [assignment.description]
    languages = list(metrics.languages)

    if languages:
        if assignment.persona is PersonaType.POLYGLOT:
            more = " and more" if len(languages) > 3 else ""
            parts.append(
                f"Your proficiency across {', '.join(languages[:3])}{more} "
                "shows your adaptability."
            )
        elif assignment.persona is PersonaType.SPECIALIST:
            parts.append(
                f"Your focus on {' and '.join(languages[:2])} has allowed you to "
                "develop deep expertise."
            )
        else:
            parts.append(
                f"Your experience with {languages[0]} forms a strong foundation for "
                "your development work."
            )

    count = metrics.repository_count
    if count > 0:
        if count > 10:
            parts.append(
                f"With {count} repositories, you clearly enjoy exploring diverse projects."
            )
        elif count > 5:
            parts.append(
                f"Your {count} repositories show a healthy balance of focus and variety."
            )

        stars = metrics.total_stars
        if stars > 100:
            parts.append(
                f"Your projects have gained significant attention with {stars} stars."
            )
        elif stars > 10:
            parts.append(
                f"With {stars} stars across your repositories, your work is beginning "
                "to get recognized."
            )

    followers = profile.followers
    if followers > 50:
        parts.append(
            f"Your community of {followers} followers suggests you're an influential "
            "voice in the development space."
        )
    elif followers > 10:
        parts.append(
            f"Your {followers} followers indicate your work is resonating with other "
            "developers."
        )
    else:
        parts.append(
            "As you continue to share your work, your developer network will likely "
            f"expand beyond your current {followers} followers."
        )

    return " ".join(parts)
