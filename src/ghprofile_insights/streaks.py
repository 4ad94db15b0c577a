"""연속 기여(streak) 탐지.

날짜 오름차순 일별 기록을 한 번 순회하며 다음을 구한다.
- 최장 streak (시작/종료일, 동률이면 먼저 나온 것)
- 현재 streak (가장 최근 활동 구간)
- 끊어진 streak 중 min_broken_length 일 초과 구간 전부
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ghprofile_insights.contributions import parse_day
from ghprofile_insights.models import ContributionDay, Streak, StreakSummary

logger = logging.getLogger(__name__)

BROKEN_STREAK_MIN_DAYS = 3
PERSONAL_BEST_MIN_DAYS = 5


def detect_streaks(
    days: Iterable[ContributionDay],
    min_broken_length: int = BROKEN_STREAK_MIN_DAYS,
) -> StreakSummary:
    """일별 기록에서 streak 요약을 계산한다.

    잘못된 날짜 값은 해당 일자만 건너뛰고 계산을 계속한다.

    Args:
        days: 날짜 오름차순 ContributionDay 시퀀스
        min_broken_length: 끊어진 streak 기록 기준 (이 값 초과만 기록)
    """
    current = 0
    current_start: str | None = None
    prev_date: str | None = None
    longest: Streak | None = None
    broken: list[Streak] = []
    last_run: Streak | None = None
    skipped = 0

    for day in days:
        if parse_day(day.date) is None:
            skipped += 1
            continue

        if day.contribution_count > 0:
            if current == 0:
                current_start = day.date
            current += 1
            assert current_start is not None
            last_run = Streak(start=current_start, end=day.date, length=current)
            if longest is None or current > longest.length:
                longest = last_run
        else:
            if current > min_broken_length:
                assert current_start is not None and prev_date is not None
                broken.append(Streak(start=current_start, end=prev_date, length=current))
            current = 0
            current_start = None

        prev_date = day.date

    if skipped:
        logger.warning(
            "Streak detection skipped %d day(s) with invalid dates",
            skipped,
            extra={"event_code": "INVALID_DATE", "counts": {"skipped_days": skipped}},
        )

    return StreakSummary(
        longest=longest,
        current=last_run,
        broken=tuple(broken),
        skipped_days=skipped,
    )


def personal_best(summary: StreakSummary, min_length: int = PERSONAL_BEST_MIN_DAYS) -> Streak | None:
    """최장 streak 가 min_length 일 이상이면 반환한다."""
    if summary.longest is not None and summary.longest.length >= min_length:
        return summary.longest
    return None
