"""프로필 입력 모델 (Pydantic) + 파생 결과 데이터 클래스.

- 입력: GitHub users / repos / contributionCalendar 스키마의 부분집합
- 출력: 불변(frozen) dataclass, asdict + orjson으로 직렬화
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AccountKind(str, Enum):
    USER = "User"
    ORGANIZATION = "Organization"


class PersonaType(str, Enum):
    POLYGLOT = "The Polyglot"
    SPECIALIST = "The Specialist"
    OSS_CONTRIBUTOR = "The OSS Contributor"
    SOLO_HACKER = "The Solo Hacker"
    FRAMEWORK_LORD = "The Framework Lord"
    CONSISTENT_COMMITTER = "The Consistent Committer"
    SPRINTER = "The Sprinter"
    DOCUMENTATION_HERO = "The Documentation Hero"
    PROJECT_JUGGLER = "The Project Juggler"
    COMMUNITY_PILLAR = "The Community Pillar"


def _as_utc(value: datetime) -> datetime:
    """tz 정보가 없는 timestamp는 UTC로 간주한다."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


# ── 입력 모델 ─────────────────────────────────────────


class Profile(BaseModel):
    """GitHub 유저/조직 프로필 스냅샷."""

    model_config = ConfigDict(frozen=True)

    login: str
    name: str | None = None
    bio: str | None = None
    created_at: datetime
    followers: int = Field(default=0, ge=0)
    public_repos: int = Field(default=0, ge=0)
    type: AccountKind = AccountKind.USER
    site_admin: bool = False

    @field_validator("created_at")
    @classmethod
    def created_at_utc(cls, v: datetime) -> datetime:
        return _as_utc(v)

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v: object) -> object:
        # API는 "User"/"Organization", 일부 호출자는 소문자로 전달
        if isinstance(v, str) and v.lower() == "organization":
            return AccountKind.ORGANIZATION
        if isinstance(v, str) and v.lower() == "user":
            return AccountKind.USER
        return v

    @property
    def display_name(self) -> str:
        return self.name or self.login

    @property
    def is_organization(self) -> bool:
        return self.type is AccountKind.ORGANIZATION


class Repository(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    description: str | None = None
    language: str | None = None
    stargazers_count: int = Field(default=0, ge=0)
    forks_count: int = Field(default=0, ge=0)
    fork: bool = False
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def timestamps_utc(cls, v: datetime) -> datetime:
        return _as_utc(v)


class ContributionDay(BaseModel):
    """하루 기여 기록.

    date는 원본 문자열 그대로 보관한다. 파싱 실패는 집계 단계에서 해당 일자만 스킵한다.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    date: str
    contribution_count: int = Field(default=0, ge=0, alias="contributionCount")
    color: str = "#ebedf0"


class ContributionWeek(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    contribution_days: tuple[ContributionDay, ...] = Field(
        default_factory=tuple, alias="contributionDays"
    )


class ContributionCalendar(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    total_contributions: int = Field(default=0, ge=0, alias="totalContributions")
    weeks: tuple[ContributionWeek, ...] = Field(default_factory=tuple)

    def iter_days(self) -> list[ContributionDay]:
        return [day for week in self.weeks for day in week.contribution_days]


class ProfileSnapshot(BaseModel):
    """분석 1회분 입력 (프로필 + 저장소 목록 + 선택적 기여 캘린더)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    profile: Profile = Field(alias="user")
    repositories: tuple[Repository, ...] = Field(default_factory=tuple, alias="repos")
    calendar: ContributionCalendar | None = Field(default=None, alias="contributions")


# ── 파생 결과 ─────────────────────────────────────────


@dataclass(frozen=True)
class DerivedMetrics:
    """6개 정규화 점수(0~100) + 원시 집계."""

    language_diversity: int
    contribution_consistency: int
    collaboration: int
    project_popularity: int
    code_quality: int
    community_impact: int
    languages: tuple[str, ...] = ()
    total_stars: int = 0
    total_forks: int = 0
    repository_count: int = 0
    forked_repository_count: int = 0


@dataclass(frozen=True)
class PersonaStrengths:
    """페르소나 레이더 차트용 6차원 강점 벡터."""

    language_diversity: int
    contribution_consistency: int
    collaboration: int
    project_popularity: int
    code_quality: int
    community_impact: int


@dataclass(frozen=True)
class PersonaAssignment:
    persona: PersonaType
    description: str
    strengths: PersonaStrengths
    color: str
    icon: str


@dataclass(frozen=True)
class Streak:
    start: str
    end: str
    length: int


@dataclass(frozen=True)
class StreakSummary:
    longest: Streak | None = None
    current: Streak | None = None
    broken: tuple[Streak, ...] = ()
    skipped_days: int = 0

    @property
    def longest_length(self) -> int:
        return self.longest.length if self.longest else 0

    @property
    def current_length(self) -> int:
        return self.current.length if self.current else 0


@dataclass(frozen=True)
class GridCell:
    week: int
    weekday: int
    date: str | None = None
    count: int = 0
    color: str | None = None
    empty: bool = True
    future: bool = False


@dataclass(frozen=True)
class YearGrid:
    year: int
    cells: tuple[tuple[GridCell, ...], ...] = ()  # [week][weekday]
    total: int = 0


@dataclass(frozen=True)
class TimelineMetadata:
    repo_id: int | None = None
    repo_name: str | None = None
    language: str | None = None
    language_color: str | None = None
    stars: int | None = None


@dataclass(frozen=True)
class TimelineEvent:
    id: str
    date: datetime
    title: str
    description: str
    type: str  # repo | star | follower | streak | anniversary | milestone
    highlight: bool = False
    estimated: bool = False
    metadata: TimelineMetadata | None = None


@dataclass(frozen=True)
class Badge:
    id: str
    name: str
    description: str
    icon: str
    tier: str  # bronze | silver | gold | platinum
    category: str  # activity | languages | repositories | impact | specialty
    earned: bool


@dataclass(frozen=True)
class ScoreBreakdown:
    login: str
    repositories: int
    stars: int
    commits: int
    followers: int
    experience: int
    total: int


@dataclass(frozen=True)
class BattleResult:
    first: ScoreBreakdown
    second: ScoreBreakdown
    winner: str | None
    is_draw: bool


@dataclass(frozen=True)
class Insight:
    id: str
    text: str
    category: str  # activity | languages | repositories | impact | personal
    subtext: str | None = None


@dataclass(frozen=True)
class ProfileReport:
    """스냅샷 1건의 전체 파생 결과."""

    login: str
    metrics: DerivedMetrics | None
    persona: PersonaAssignment | None
    personality_text: str
    badges: tuple[Badge, ...] = ()
    timeline: tuple[TimelineEvent, ...] = ()
    streaks: StreakSummary = field(default_factory=StreakSummary)
    weekday_histogram: tuple[int, ...] = (0, 0, 0, 0, 0, 0, 0)
    grid: YearGrid | None = None
    score: ScoreBreakdown | None = None
    insights: tuple[Insight, ...] = ()
    profile_level: str = ""
