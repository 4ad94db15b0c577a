"""스냅샷 1건 → ProfileReport 파이프라인.

ProfileAnalyzer 는 마지막 입력 스냅샷과 결과만 보관한다.
- 같은 스냅샷(값 동일)이 다시 들어오면 캐시된 결과를 그대로 반환
- 새 스냅샷이 들어오면 이전 결과를 버리고 새로 계산 (last-write-wins)
"""

from __future__ import annotations

import logging
import time
from datetime import datetime

from ghprofile_insights.badges import evaluate_badges
from ghprofile_insights.contributions import build_year_grid, flatten_days, weekday_histogram
from ghprofile_insights.insights import generate_insights, profile_level
from ghprofile_insights.metrics import extract_metrics
from ghprofile_insights.models import ProfileReport, ProfileSnapshot
from ghprofile_insights.persona import classify_persona, personality_text
from ghprofile_insights.scoring import score_snapshot
from ghprofile_insights.streaks import detect_streaks
from ghprofile_insights.timeline import sort_events, synthesize_timeline

logger = logging.getLogger(__name__)


def analyze_snapshot(
    snapshot: ProfileSnapshot,
    now: datetime,
    year: int | None = None,
) -> ProfileReport:
    """스냅샷 전체 분석.

    저장소가 없으면 metrics/persona 는 None, 배지/타임라인은 빈 목록이다.

    Args:
        snapshot: 프로필 + 저장소 + 선택적 캘린더
        now: 평가 기준 시각 (tz-aware)
        year: 히트맵 그리드 연도 (기본: now.year)
    """
    started = time.perf_counter()
    profile, repos, calendar = snapshot.profile, snapshot.repositories, snapshot.calendar
    grid_year = year or now.year

    metrics = extract_metrics(profile, repos, calendar) if repos else None
    persona = classify_persona(metrics) if metrics is not None else None
    text = personality_text(persona, metrics, profile) if persona and metrics else ""

    report = ProfileReport(
        login=profile.login,
        metrics=metrics,
        persona=persona,
        personality_text=text,
        badges=tuple(evaluate_badges(repos, calendar, now)),
        timeline=tuple(sort_events(synthesize_timeline(profile, repos, calendar, now))),
        streaks=detect_streaks(flatten_days(calendar)),
        weekday_histogram=weekday_histogram(calendar),
        grid=build_year_grid(calendar, grid_year, now.date()),
        score=score_snapshot(snapshot, now),
        insights=tuple(generate_insights(profile, repos, calendar, now)),
        profile_level=profile_level(profile, repos, calendar, now),
    )

    duration_ms = (time.perf_counter() - started) * 1000
    logger.info(
        "Analyzed profile %s: persona=%s, badges=%d, events=%d",
        profile.login,
        persona.persona.value if persona else None,
        len(report.badges),
        len(report.timeline),
        extra={
            "event_code": "PROFILE_ANALYZED",
            "login": profile.login,
            "duration_ms": round(duration_ms, 2),
            "counts": {
                "repositories": len(repos),
                "badges": len(report.badges),
                "timeline_events": len(report.timeline),
            },
        },
    )
    return report


class ProfileAnalyzer:
    """입력이 바뀔 때만 재계산하는 분석기."""

    def __init__(self, now: datetime, year: int | None = None) -> None:
        self._now = now
        self._year = year
        self._snapshot: ProfileSnapshot | None = None
        self._report: ProfileReport | None = None

    @property
    def report(self) -> ProfileReport | None:
        return self._report

    def analyze(self, snapshot: ProfileSnapshot) -> ProfileReport:
        if self._report is not None and snapshot == self._snapshot:
            logger.debug("Snapshot unchanged for %s, reusing report", snapshot.profile.login)
            return self._report

        # 계산 도중 새 스냅샷이 들어와도 이전 결과와 섞이지 않도록 완료 후 한 번에 교체
        report = analyze_snapshot(snapshot, self._now, self._year)
        self._snapshot = snapshot
        self._report = report
        return report

    def invalidate(self) -> None:
        self._snapshot = None
        self._report = None
