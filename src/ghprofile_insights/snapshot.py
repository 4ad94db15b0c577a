"""스냅샷 JSON 로딩.

입력 형식: {"user": {...}, "repos": [...], "contributions": {...} | null}
- user: GitHub /users/{login} 응답
- repos: GitHub /users/{login}/repos 응답
- contributions: GraphQL contributionsCollection.contributionCalendar

검증에 실패한 개별 저장소는 경고 로그 후 건너뛴다. user 가 잘못되면 ValidationError.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import orjson
from pydantic import ValidationError

from ghprofile_insights.models import (
    ContributionCalendar,
    Profile,
    ProfileSnapshot,
    Repository,
)

logger = logging.getLogger(__name__)


def safe_parse_repository(raw: Any) -> Repository | None:
    """raw 항목을 Repository로 안전하게 변환한다.

    ValidationError 발생 시 None을 반환하고 경고 로그를 남긴다. 객체가 아닌 항목도 같은 경로로 건너뛴다.
    """
    try:
        return Repository.model_validate(raw)
    except ValidationError:
        fields = raw if isinstance(raw, dict) else {}
        logger.warning(
            "Repository validation failed: id=%s, name=%s",
            fields.get("id", "unknown"),
            fields.get("name", "unknown"),
            extra={"event_code": "VALIDATION_ERROR"},
        )
        return None


def parse_snapshot(raw: dict[str, Any]) -> ProfileSnapshot:
    profile = Profile.model_validate(raw.get("user"))

    repositories: list[Repository] = []
    for item in raw.get("repos") or []:
        repo = safe_parse_repository(item)
        if repo is not None:
            repositories.append(repo)

    contributions = raw.get("contributions")
    calendar = (
        ContributionCalendar.model_validate(contributions) if contributions is not None else None
    )

    return ProfileSnapshot(profile=profile, repositories=tuple(repositories), calendar=calendar)


def load_snapshot(path: Path) -> ProfileSnapshot:
    """스냅샷 JSON 파일을 읽는다."""
    with open(path, "rb") as f:
        raw = orjson.loads(f.read())

    if not isinstance(raw, dict):
        raise ValueError(f"Snapshot must be a JSON object: {path}")

    snapshot = parse_snapshot(raw)
    logger.info(
        "Loaded snapshot for %s from %s",
        snapshot.profile.login,
        path,
        extra={
            "login": snapshot.profile.login,
            "counts": {
                "repositories": len(snapshot.repositories),
                "has_calendar": snapshot.calendar is not None,
            },
        },
    )
    return snapshot
