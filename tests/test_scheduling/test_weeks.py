from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from squadplanner.scheduling.weeks import (
    current_monday,
    format_week_range,
    is_monday,
    monday_of,
    reference_today,
    week_dates,
    week_end,
    week_monday,
    week_offset,
)

PARIS = ZoneInfo("Europe/Paris")
NOW = datetime(2024, 6, 5, 10, 0, tzinfo=timezone.utc)


class TestReferenceToday:
    def test_uses_org_calendar_not_utc(self) -> None:
        # Sunday 23:30 UTC is already Monday 01:30 in Paris
        late_sunday = datetime(2024, 6, 9, 23, 30, tzinfo=timezone.utc)
        assert reference_today(timezone.utc, late_sunday) == date(2024, 6, 9)
        assert reference_today(PARIS, late_sunday) == date(2024, 6, 10)

    def test_naive_now_is_treated_as_utc(self) -> None:
        assert reference_today(PARIS, datetime(2024, 6, 9, 23, 30)) == date(2024, 6, 10)

    def test_defaults_to_current_time(self) -> None:
        today = reference_today(timezone.utc)
        assert abs((today - datetime.now(timezone.utc).date()).days) <= 1


class TestMondayOf:
    @pytest.mark.parametrize(
        "day",
        [date(2024, 6, 3) + timedelta(days=i) for i in range(7)],
    )
    def test_every_day_of_week_maps_to_same_monday(self, day: date) -> None:
        assert monday_of(day) == date(2024, 6, 3)

    def test_sunday_steps_back_six_days(self) -> None:
        assert monday_of(date(2024, 6, 9)) == date(2024, 6, 3)

    def test_across_month_boundary(self) -> None:
        assert monday_of(date(2024, 3, 2)) == date(2024, 2, 26)


class TestWeekWindow:
    def test_current_monday(self) -> None:
        assert current_monday(PARIS, NOW) == date(2024, 6, 3)

    def test_offset_two_example(self) -> None:
        monday = week_monday(2, PARIS, NOW)
        assert monday == date(2024, 6, 17)
        assert week_dates(monday)[0] == date(2024, 6, 17)
        assert week_dates(monday)[-1] == date(2024, 6, 23)

    @pytest.mark.parametrize("offset", [0, 1, 2])
    def test_dates_are_consecutive_from_monday(self, offset: int) -> None:
        dates = week_dates(week_monday(offset, PARIS, NOW))
        assert len(dates) == 7
        assert dates[0].weekday() == 0
        for earlier, later in zip(dates, dates[1:]):
            assert later - earlier == timedelta(days=1)

    def test_offset_zero_is_current_week(self) -> None:
        dates = week_dates(week_monday(0, PARIS, NOW))
        assert dates[0] == date(2024, 6, 3)
        assert dates[-1] == date(2024, 6, 9)

    def test_negative_offset(self) -> None:
        assert week_monday(-1, PARIS, NOW) == date(2024, 5, 27)

    def test_week_end_and_offset(self) -> None:
        assert week_end(date(2024, 6, 3)) == date(2024, 6, 9)
        assert week_offset(date(2024, 6, 24), date(2024, 6, 3)) == 3
        assert week_offset(date(2024, 5, 27), date(2024, 6, 3)) == -1

    def test_is_monday(self) -> None:
        assert is_monday(date(2024, 6, 3))
        assert not is_monday(date(2024, 6, 4))

    def test_format_week_range(self) -> None:
        assert format_week_range(date(2024, 6, 3)) == "Jun 3 - Jun 9, 2024"
        assert format_week_range(date(2024, 12, 30)) == "Dec 30 - Jan 5, 2025"
