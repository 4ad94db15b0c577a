"""기여 캘린더 집계 테스트."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date

from ghprofile_insights.contributions import (
    GRID_DAYS,
    GRID_WEEKS,
    build_year_grid,
    flatten_days,
    grid_position,
    most_active_weekday,
    parse_day,
    sunday_weekday,
    weekday_histogram,
)
from ghprofile_insights.models import ContributionCalendar

SAMPLE_COUNTS = [1, 2, 3, 4, 5, 0, 0, 1, 1, 0, 2, 0, 0, 1]


class TestParseDay:
    def test_valid(self) -> None:
        assert parse_day("2025-01-05") == date(2025, 1, 5)

    def test_datetime_prefix(self) -> None:
        assert parse_day("2025-01-05T00:00:00Z") == date(2025, 1, 5)

    def test_invalid_returns_none(self) -> None:
        assert parse_day("2025-13-40") is None
        assert parse_day("") is None


class TestFlattenDays:
    def test_none_calendar(self) -> None:
        assert flatten_days(None) == []

    def test_sorted_ascending(self) -> None:
        # 주 순서가 뒤섞여 있어도 날짜순으로 정렬
        calendar = ContributionCalendar.model_validate(
            {
                "weeks": [
                    {"contributionDays": [{"date": "2025-01-09", "contributionCount": 2}]},
                    {"contributionDays": [{"date": "2025-01-02", "contributionCount": 1}]},
                ]
            }
        )
        assert [d.date for d in flatten_days(calendar)] == ["2025-01-02", "2025-01-09"]

    def test_year_filter(
        self,
        make_calendar: Callable[..., ContributionCalendar],
    ) -> None:
        calendar = make_calendar([1, 1, 1, 1], start=date(2024, 12, 30))
        days = flatten_days(calendar, year=2025)
        assert [d.date for d in days] == ["2025-01-01", "2025-01-02"]

    def test_invalid_dates_dropped(self) -> None:
        calendar = ContributionCalendar.model_validate(
            {
                "weeks": [
                    {
                        "contributionDays": [
                            {"date": "2025-01-01", "contributionCount": 1},
                            {"date": "bogus", "contributionCount": 9},
                        ]
                    }
                ]
            }
        )
        assert len(flatten_days(calendar)) == 1


class TestWeekdayHistogram:
    def test_sample_distribution(
        self,
        make_calendar: Callable[..., ContributionCalendar],
    ) -> None:
        # 2025-01-01 은 수요일
        histogram = weekday_histogram(make_calendar(SAMPLE_COUNTS))
        assert histogram == (5, 0, 1, 2, 3, 3, 6)
        assert sum(histogram) == sum(SAMPLE_COUNTS)

    def test_none_calendar(self) -> None:
        assert weekday_histogram(None) == (0,) * 7

    def test_most_active_weekday(
        self,
        make_calendar: Callable[..., ContributionCalendar],
    ) -> None:
        assert most_active_weekday(make_calendar(SAMPLE_COUNTS)) == "Saturday"

    def test_most_active_weekday_all_zero(
        self,
        make_calendar: Callable[..., ContributionCalendar],
    ) -> None:
        assert most_active_weekday(make_calendar([0, 0, 0])) is None

    def test_most_active_weekday_tie_prefers_sunday_first(
        self,
        make_calendar: Callable[..., ContributionCalendar],
    ) -> None:
        # 2025-01-04 토요일, 2025-01-05 일요일 동률
        calendar = make_calendar([1, 1], start=date(2025, 1, 4))
        assert most_active_weekday(calendar) == "Sunday"


class TestGridPosition:
    def test_sunday_weekday(self) -> None:
        assert sunday_weekday(date(2025, 1, 5)) == 0
        assert sunday_weekday(date(2025, 1, 4)) == 6

    def test_first_day_offset(self) -> None:
        assert grid_position(date(2025, 1, 1)) == (0, 3)
        assert grid_position(date(2025, 1, 5)) == (1, 0)

    def test_last_day_of_year(self) -> None:
        assert grid_position(date(2025, 12, 31)) == (52, 3)

    def test_overflow_week(self) -> None:
        # 2000 년은 토요일 시작 윤년
        assert grid_position(date(2000, 12, 31)) == (53, 0)


class TestBuildYearGrid:
    def test_shape(
        self,
        make_calendar: Callable[..., ContributionCalendar],
    ) -> None:
        grid = build_year_grid(make_calendar(SAMPLE_COUNTS), 2025, date(2025, 12, 31))
        assert len(grid.cells) == GRID_WEEKS
        assert all(len(week) == GRID_DAYS for week in grid.cells)

    def test_cells_before_jan_first_empty(
        self,
        make_calendar: Callable[..., ContributionCalendar],
    ) -> None:
        grid = build_year_grid(make_calendar(SAMPLE_COUNTS), 2025, date(2025, 12, 31))
        for weekday in range(3):
            assert grid.cells[0][weekday].empty
            assert grid.cells[0][weekday].date is None

    def test_data_cells_populated(
        self,
        make_calendar: Callable[..., ContributionCalendar],
    ) -> None:
        grid = build_year_grid(make_calendar(SAMPLE_COUNTS), 2025, date(2025, 12, 31))
        cell = grid.cells[0][3]
        assert cell.date == "2025-01-01"
        assert cell.count == 1
        assert cell.empty is False
        assert grid.total == sum(SAMPLE_COUNTS)

    def test_days_without_data_are_empty(
        self,
        make_calendar: Callable[..., ContributionCalendar],
    ) -> None:
        grid = build_year_grid(make_calendar(SAMPLE_COUNTS), 2025, date(2025, 12, 31))
        cell = grid.cells[52][3]
        assert cell.empty is True
        assert cell.future is False

    def test_future_days_flagged(
        self,
        make_calendar: Callable[..., ContributionCalendar],
    ) -> None:
        grid = build_year_grid(make_calendar(SAMPLE_COUNTS), 2025, date(2025, 1, 3))
        cell = grid.cells[0][6]
        assert cell.date == "2025-01-04"
        assert cell.future is True
        assert cell.count == 0
        assert grid.total == 1 + 2 + 3

    def test_other_year_data_ignored(
        self,
        make_calendar: Callable[..., ContributionCalendar],
    ) -> None:
        calendar = make_calendar([7, 7], start=date(2024, 12, 31))
        grid = build_year_grid(calendar, 2025, date(2025, 12, 31))
        assert grid.total == 7

    def test_overflow_days_dropped(
        self,
        make_calendar: Callable[..., ContributionCalendar],
    ) -> None:
        calendar = make_calendar([1] * 366, start=date(2000, 1, 1))
        grid = build_year_grid(calendar, 2000, date(2000, 12, 31))
        assert grid.total == 365
        assert all(cell.date != "2000-12-31" for week in grid.cells for cell in week)

    def test_none_calendar(self) -> None:
        grid = build_year_grid(None, 2025, date(2025, 6, 1))
        assert grid.total == 0
        assert grid.cells[10][2].empty is True
