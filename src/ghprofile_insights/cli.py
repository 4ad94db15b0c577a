"""click CLI 엔트리포인트.

ghprofile-insights analyze / battle / timeline / personas 명령을 제공합니다.
입력은 스냅샷 JSON 파일이며 결과는 JSON으로 출력합니다.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

import click
import orjson
from pydantic import ValidationError

from ghprofile_insights import __version__
from ghprofile_insights.analyzer import analyze_snapshot
from ghprofile_insights.config import AppConfig, load_config
from ghprofile_insights.logging_config import setup_logging
from ghprofile_insights.models import ProfileSnapshot
from ghprofile_insights.persona import (
    CLASSIFIABLE_PERSONAS,
    PERSONA_PROFILES,
    PERSONA_RULES,
    RESERVED_PERSONAS,
)
from ghprofile_insights.scoring import (
    MAX_POSSIBLE_SCORE,
    AccountKindMismatchError,
    compare_profiles,
    ensure_same_account_kind,
)
from ghprofile_insights.snapshot import load_snapshot
from ghprofile_insights.timeline import (
    EVENT_TYPES,
    filter_events,
    highlight_events,
    sort_events,
    synthesize_timeline,
)

logger = logging.getLogger(__name__)

_CONFIG_OPTION = click.option(
    "--config",
    "config_path",
    default=None,
    type=click.Path(exists=True, path_type=Path),
    help="설정 파일 경로 (기본: 프로젝트 루트 config.yaml)",
)
_OUTPUT_OPTION = click.option(
    "--output",
    "output_path",
    default=None,
    type=click.Path(path_type=Path),
    help="결과 JSON 파일 경로 (기본: 표준 출력)",
)
_JSON_LOG_OPTION = click.option(
    "--json-log/--no-json-log", default=None, help="JSON 로그 포맷 (기본: 설정 파일 값)"
)


def _prepare(config_path: Path | None, json_log: bool | None) -> AppConfig:
    """설정 로딩 + 로깅 초기화."""
    config = load_config(config_path)
    json_format = config.logging.json_format if json_log is None else json_log
    setup_logging(json_format=json_format, level=config.logging.level)
    return config


def _read_snapshot(path: Path) -> ProfileSnapshot:
    try:
        return load_snapshot(path)
    except (ValidationError, ValueError) as exc:
        logger.error(
            "Invalid snapshot %s: %s",
            path,
            exc,
            extra={"event_code": "INVALID_SNAPSHOT"},
        )
        click.echo(f"스냅샷을 읽을 수 없습니다: {path}", err=True)
        raise SystemExit(1) from exc


def _emit(payload: Any, output_path: Path | None, config: AppConfig) -> None:
    """결과를 JSON으로 파일 또는 표준 출력에 쓴다."""
    option = orjson.OPT_INDENT_2 if config.output.indent else 0
    data = orjson.dumps(payload, option=option)

    if output_path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(data + b"\n")
        click.echo(f"Wrote {output_path}")
    else:
        click.echo(data.decode("utf-8"))


@click.group()
@click.version_option(version=__version__, prog_name="ghprofile-insights")
def main() -> None:
    """GitHub Profile Insights - 프로필 스냅샷에서 페르소나/배지/타임라인/배틀 점수를 도출합니다."""


@main.command()
@click.argument("snapshot_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--year", default=None, type=int, help="히트맵 그리드 연도 (기본: 기준 시각의 연도)")
@_OUTPUT_OPTION
@_CONFIG_OPTION
@_JSON_LOG_OPTION
def analyze(
    snapshot_path: Path,
    year: int | None,
    output_path: Path | None,
    config_path: Path | None,
    json_log: bool | None,
) -> None:
    """스냅샷 1건의 전체 분석 결과를 출력합니다."""
    config = _prepare(config_path, json_log)
    snapshot = _read_snapshot(snapshot_path)

    now = config.analysis.resolve_now()
    report = analyze_snapshot(snapshot, now, year or config.analysis.resolve_year(now))
    _emit(report, output_path, config)


@main.command()
@click.argument("first_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("second_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@_OUTPUT_OPTION
@_CONFIG_OPTION
@_JSON_LOG_OPTION
def battle(
    first_path: Path,
    second_path: Path,
    output_path: Path | None,
    config_path: Path | None,
    json_log: bool | None,
) -> None:
    """두 프로필의 배틀 점수를 비교합니다."""
    config = _prepare(config_path, json_log)
    first = _read_snapshot(first_path)
    second = _read_snapshot(second_path)

    try:
        ensure_same_account_kind(first.profile, second.profile)
    except AccountKindMismatchError as exc:
        logger.error(str(exc), extra={"event_code": "TYPE_MISMATCH"})
        click.echo(f"{exc}. 같은 유형의 계정끼리만 비교할 수 있습니다.", err=True)
        raise SystemExit(1) from exc

    result = compare_profiles(
        first,
        second,
        config.analysis.resolve_now(),
        parallel=config.battle.parallel,
        max_workers=config.battle.max_workers,
    )
    _emit({"result": result, "max_possible_score": MAX_POSSIBLE_SCORE}, output_path, config)


@main.command()
@click.argument("snapshot_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--type",
    "event_type",
    default="all",
    type=click.Choice(["all", *EVENT_TYPES]),
    help="이벤트 유형 필터",
)
@click.option("--highlights", is_flag=True, default=False, help="하이라이트 이벤트만 출력")
@click.option("--oldest-first", is_flag=True, default=False, help="오래된 순 정렬 (기본: 최신순)")
@_OUTPUT_OPTION
@_CONFIG_OPTION
@_JSON_LOG_OPTION
def timeline(
    snapshot_path: Path,
    event_type: str,
    highlights: bool,
    oldest_first: bool,
    output_path: Path | None,
    config_path: Path | None,
    json_log: bool | None,
) -> None:
    """개발 여정 타임라인을 출력합니다."""
    config = _prepare(config_path, json_log)
    snapshot = _read_snapshot(snapshot_path)

    events = synthesize_timeline(
        snapshot.profile,
        snapshot.repositories,
        snapshot.calendar,
        config.analysis.resolve_now(),
    )
    events = filter_events(events, event_type)
    if highlights:
        events = highlight_events(events)
    events = sort_events(events, newest_first=not oldest_first)

    _emit({"login": snapshot.profile.login, "events": events}, output_path, config)


@main.command()
@_CONFIG_OPTION
@_JSON_LOG_OPTION
def personas(config_path: Path | None, json_log: bool | None) -> None:
    """페르소나 목록과 분류 우선순위를 출력합니다."""
    config = _prepare(config_path, json_log)

    rules = {rule.persona: rule.summary for rule in PERSONA_RULES}
    catalogue = []
    for persona, info in PERSONA_PROFILES.items():
        priority = (
            CLASSIFIABLE_PERSONAS.index(persona) + 1 if persona in CLASSIFIABLE_PERSONAS else None
        )
        catalogue.append(
            {
                "persona": persona,
                "priority": priority,
                "rule": rules.get(persona, "default" if priority else None),
                "reserved": persona in RESERVED_PERSONAS,
                "description": info.description,
                "color": info.color,
                "icon": info.icon,
            }
        )
    catalogue.sort(key=lambda item: item["priority"] or sys.maxsize)
    _emit(catalogue, None, config)
