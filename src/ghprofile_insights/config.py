"""YAML 설정 로딩 + Pydantic 모델."""

from __future__ import annotations

import os
from datetime import UTC, datetime
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

_DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "config.yaml"


# ── 설정 모델 ──────────────────────────────────────────


class AnalysisConfig(BaseModel):
    calendar_year: int | None = None
    reference_time: datetime | None = None

    @field_validator("reference_time")
    @classmethod
    def reference_time_utc(cls, v: datetime | None) -> datetime | None:
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v

    def resolve_now(self) -> datetime:
        """평가 기준 시각. 고정값이 없으면 현재 UTC 시각."""
        return self.reference_time or datetime.now(tz=UTC)

    def resolve_year(self, now: datetime) -> int:
        return self.calendar_year or now.year


class BattleConfig(BaseModel):
    parallel: bool = True
    max_workers: int = Field(default=2, ge=1)


class LoggingConfig(BaseModel):
    json_format: bool = True
    level: str = "INFO"

    @field_validator("level")
    @classmethod
    def level_known(cls, v: str) -> str:
        upper = v.upper()
        if upper not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return upper


class OutputConfig(BaseModel):
    indent: bool = True


class AppConfig(BaseModel):
    """애플리케이션 전체 설정."""

    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    battle: BattleConfig = Field(default_factory=BattleConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


# ── 로딩 ───────────────────────────────────────────────


def load_config(path: Path | None = None) -> AppConfig:
    """YAML 설정 파일을 로딩하고 Pydantic 모델로 검증한다.

    환경변수 우선순위: 시스템 환경변수 > .env 파일 > config.yaml 기본값
    기본 경로에 파일이 없으면 기본 설정을 사용한다.
    """
    config_path = path or _DEFAULT_CONFIG_PATH

    # .env 파일 로딩: config.yaml과 같은 디렉터리의 .env를 탐색
    dotenv_path = config_path.parent / ".env"
    load_dotenv(dotenv_path=dotenv_path, override=False)

    if path is None and not config_path.exists():
        raw: dict = {}
    else:
        with open(config_path) as f:
            raw = yaml.safe_load(f)

        if raw is None:
            raise ValueError(f"Empty config file: {config_path}")

    # 환경변수 오버라이드
    if reference_time := os.environ.get("GHPROFILE_REFERENCE_TIME"):
        raw["analysis"] = raw.get("analysis") or {}
        raw["analysis"]["reference_time"] = reference_time

    if calendar_year := os.environ.get("GHPROFILE_CALENDAR_YEAR"):
        raw["analysis"] = raw.get("analysis") or {}
        raw["analysis"]["calendar_year"] = calendar_year

    if log_level := os.environ.get("GHPROFILE_LOG_LEVEL"):
        raw["logging"] = raw.get("logging") or {}
        raw["logging"]["level"] = log_level

    return AppConfig.model_validate(raw)
