"""공통 fixture."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, date, datetime, timedelta
from pathlib import Path
from typing import Any

import orjson
import pytest
import yaml
from ghprofile_insights.models import (
    ContributionCalendar,
    Profile,
    ProfileSnapshot,
    Repository,
)

NOW = datetime(2025, 6, 15, 12, 0, tzinfo=UTC)


def _make_repo(
    repo_id: int = 1,
    *,
    name: str | None = None,
    language: str | None = "Python",
    stars: int = 0,
    forks: int = 0,
    fork: bool = False,
    description: str | None = None,
    created_at: str = "2020-01-01T00:00:00Z",
    updated_at: str = "2024-01-01T00:00:00Z",
) -> Repository:
    """테스트용 Repository 헬퍼."""
    return Repository.model_validate(
        {
            "id": repo_id,
            "name": name or f"repo-{repo_id}",
            "description": description,
            "language": language,
            "stargazers_count": stars,
            "forks_count": forks,
            "fork": fork,
            "created_at": created_at,
            "updated_at": updated_at,
        }
    )


def _make_profile(**overrides: Any) -> Profile:
    """테스트용 Profile 헬퍼."""
    data: dict[str, Any] = {
        "login": "octocat",
        "name": "The Octocat",
        "bio": None,
        "created_at": "2015-03-10T08:00:00Z",
        "followers": 0,
        "public_repos": 0,
        "type": "User",
        "site_admin": False,
    }
    data.update(overrides)
    return Profile.model_validate(data)


def _make_calendar(
    counts: list[int],
    start: date = date(2025, 1, 1),
    total: int | None = None,
) -> ContributionCalendar:
    """start 부터 하루씩 counts 를 채운 캘린더 (7일 단위 주)."""
    days = [
        {
            "date": (start + timedelta(days=i)).isoformat(),
            "contributionCount": count,
            "color": "#40c463" if count else "#ebedf0",
        }
        for i, count in enumerate(counts)
    ]
    weeks = [{"contributionDays": days[i : i + 7]} for i in range(0, len(days), 7)]
    return ContributionCalendar.model_validate(
        {"totalContributions": sum(counts) if total is None else total, "weeks": weeks}
    )


@pytest.fixture()
def now() -> datetime:
    return NOW


@pytest.fixture()
def make_repo() -> Callable[..., Repository]:
    """Repository 팩토리."""
    return _make_repo


@pytest.fixture()
def make_profile() -> Callable[..., Profile]:
    """Profile 팩토리 (기본값 octocat, 팔로워 0)."""
    return _make_profile


@pytest.fixture()
def make_calendar() -> Callable[..., ContributionCalendar]:
    """2025-01-01 부터 하루씩 채우는 캘린더 팩토리."""
    return _make_calendar


@pytest.fixture()
def sample_user_data() -> dict[str, Any]:
    """GitHub /users/{login} 응답 샘플."""
    return {
        "login": "octocat",
        "id": 583231,
        "name": "The Octocat",
        "bio": "GitHub mascot",
        "created_at": "2011-01-25T18:44:36Z",
        "followers": 120,
        "public_repos": 8,
        "type": "User",
        "site_admin": False,
        "avatar_url": "https://avatars.githubusercontent.com/u/583231?v=4",
    }


@pytest.fixture()
def sample_repos_data() -> list[dict[str, Any]]:
    """GitHub /users/{login}/repos 응답 샘플."""
    return [
        {
            "id": 1,
            "name": "hello-world",
            "description": "My first repository on GitHub, saying hello",
            "language": "Python",
            "stargazers_count": 12,
            "forks_count": 4,
            "fork": False,
            "created_at": "2012-02-01T00:00:00Z",
            "updated_at": "2025-06-01T00:00:00Z",
        },
        {
            "id": 2,
            "name": "spoon-knife",
            "description": None,
            "language": "HTML",
            "stargazers_count": 3,
            "forks_count": 20,
            "fork": True,
            "created_at": "2013-05-01T00:00:00Z",
            "updated_at": "2023-01-01T00:00:00Z",
        },
        {
            "id": 3,
            "name": "linguist",
            "description": "Language savant",
            "language": "Ruby",
            "stargazers_count": 0,
            "forks_count": 0,
            "fork": False,
            "created_at": "2014-07-01T00:00:00Z",
            "updated_at": "2022-01-01T00:00:00Z",
        },
    ]


@pytest.fixture()
def sample_calendar_data() -> dict[str, Any]:
    """GraphQL contributionCalendar 응답 샘플 (2025-01-01 ~ 2025-01-14)."""
    counts = [1, 2, 3, 4, 5, 0, 0, 1, 1, 0, 2, 0, 0, 1]
    days = [
        {
            "date": (date(2025, 1, 1) + timedelta(days=i)).isoformat(),
            "contributionCount": c,
            "color": "#40c463" if c else "#ebedf0",
        }
        for i, c in enumerate(counts)
    ]
    return {
        "totalContributions": sum(counts),
        "weeks": [{"contributionDays": days[:7]}, {"contributionDays": days[7:]}],
    }


@pytest.fixture()
def sample_snapshot_data(
    sample_user_data: dict[str, Any],
    sample_repos_data: list[dict[str, Any]],
    sample_calendar_data: dict[str, Any],
) -> dict[str, Any]:
    return {
        "user": sample_user_data,
        "repos": sample_repos_data,
        "contributions": sample_calendar_data,
    }


@pytest.fixture()
def sample_snapshot(sample_snapshot_data: dict[str, Any]) -> ProfileSnapshot:
    return ProfileSnapshot.model_validate(sample_snapshot_data)


@pytest.fixture()
def snapshot_file(tmp_path: Path, sample_snapshot_data: dict[str, Any]) -> Path:
    """임시 스냅샷 JSON 파일."""
    path = tmp_path / "octocat.json"
    path.write_bytes(orjson.dumps(sample_snapshot_data))
    return path


@pytest.fixture()
def tmp_config_file(tmp_path: Path) -> Path:
    """기준 시각이 고정된 임시 YAML 설정 파일."""
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        yaml.dump(
            {
                "analysis": {"reference_time": "2025-06-15T12:00:00Z", "calendar_year": 2025},
                "battle": {"parallel": False},
                "logging": {"json_format": True, "level": "INFO"},
            }
        ),
        encoding="utf-8",
    )
    return config_path
