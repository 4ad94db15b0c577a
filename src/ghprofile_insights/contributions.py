"""기여 캘린더 집계.

원본 캘린더(weeks → contributionDays)를 다음 형태로 정규화한다.
- 날짜 오름차순 일별 목록 (연도 필터 선택)
- 요일별 기여 합계 (일요일=0 ~ 토요일=6)
- 히트맵 표시용 53주 × 7일 고정 그리드
"""

from __future__ import annotations

import logging
from datetime import date

from ghprofile_insights.models import ContributionCalendar, ContributionDay, GridCell, YearGrid

logger = logging.getLogger(__name__)

GRID_WEEKS = 53
GRID_DAYS = 7
WEEKDAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


def parse_day(value: str) -> date | None:
    """YYYY-MM-DD 문자열을 date로 변환한다. 실패 시 None + 경고 로그."""
    try:
        return date.fromisoformat(value[:10])
    except (ValueError, TypeError):
        logger.warning(
            "Skipping contribution day with invalid date: %r",
            value,
            extra={"event_code": "INVALID_DATE"},
        )
        return None


def sunday_weekday(d: date) -> int:
    """일요일 기준 요일 인덱스 (일=0, 토=6)."""
    return (d.weekday() + 1) % 7


def dated_days(calendar: ContributionCalendar | None) -> list[tuple[date, ContributionDay]]:
    """파싱 가능한 일자만 (date, day) 쌍으로 날짜 오름차순 정렬해 반환한다."""
    if calendar is None:
        return []

    result: list[tuple[date, ContributionDay]] = []
    for day in calendar.iter_days():
        parsed = parse_day(day.date)
        if parsed is None:
            continue
        result.append((parsed, day))

    result.sort(key=lambda pair: pair[0])
    return result


def flatten_days(
    calendar: ContributionCalendar | None,
    year: int | None = None,
) -> list[ContributionDay]:
    """캘린더를 날짜순 일별 목록으로 펼친다.

    Args:
        calendar: 기여 캘린더 (None 허용)
        year: 지정 시 해당 연도의 일자만 남긴다

    Returns:
        ContributionDay 리스트. 캘린더가 없으면 빈 리스트.
    """
    return [day for d, day in dated_days(calendar) if year is None or d.year == year]


def weekday_histogram(calendar: ContributionCalendar | None) -> tuple[int, ...]:
    """요일별 기여 합계 7칸을 반환한다."""
    buckets = [0] * GRID_DAYS
    for d, day in dated_days(calendar):
        buckets[sunday_weekday(d)] += day.contribution_count
    return tuple(buckets)


def most_active_weekday(calendar: ContributionCalendar | None) -> str | None:
    """기여가 가장 많은 요일 이름. 모든 요일이 0이면 None."""
    buckets = weekday_histogram(calendar)
    peak = max(buckets)
    if peak <= 0:
        return None
    return WEEKDAY_NAMES[buckets.index(peak)]


def grid_position(d: date) -> tuple[int, int]:
    """연중 날짜의 (주 인덱스, 요일 인덱스).

    주 인덱스 = floor((연중 일차 + 1월 1일 요일 오프셋) / 7), 일차는 0부터.
    """
    jan_first = date(d.year, 1, 1)
    offset = sunday_weekday(jan_first)
    ordinal = (d - jan_first).days
    return (ordinal + offset) // GRID_DAYS, sunday_weekday(d)


def build_year_grid(
    calendar: ContributionCalendar | None,
    year: int,
    today: date,
) -> YearGrid:
    """해당 연도의 53 × 7 히트맵 그리드를 만든다.

    - 연도 범위 밖이거나 데이터가 없는 칸은 empty
    - today 이후 날짜는 future 로 표시 (카운트 0)
    - 53주 상한을 넘는 날짜는 버린다
    """
    by_date = {d: day for d, day in dated_days(calendar) if d.year == year}

    cells: list[list[GridCell]] = [
        [GridCell(week=w, weekday=wd) for wd in range(GRID_DAYS)] for w in range(GRID_WEEKS)
    ]

    total = 0
    current = date(year, 1, 1)
    while current.year == year:
        week, weekday = grid_position(current)
        if week >= GRID_WEEKS:
            logger.debug("Date %s falls outside the %d-week grid", current, GRID_WEEKS)
        elif current > today:
            cells[week][weekday] = GridCell(
                week=week, weekday=weekday, date=current.isoformat(), empty=False, future=True
            )
        elif current in by_date:
            day = by_date[current]
            total += day.contribution_count
            cells[week][weekday] = GridCell(
                week=week,
                weekday=weekday,
                date=current.isoformat(),
                count=day.contribution_count,
                color=day.color,
                empty=False,
            )
        current = date.fromordinal(current.toordinal() + 1)

    return YearGrid(year=year, cells=tuple(tuple(row) for row in cells), total=total)
