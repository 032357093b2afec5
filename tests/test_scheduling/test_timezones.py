from datetime import date, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from squadplanner.scheduling.timezones import (
    hour_offset,
    parse_viewer_timezone,
    resolve_org_timezone,
    to_org,
    to_viewer,
)

# Organisation calendar pinned to a fixed UTC+1
ORG_FIXED = timezone(timedelta(hours=1))
PARIS = ZoneInfo("Europe/Paris")


class TestParseViewerTimezone:
    @pytest.mark.parametrize(
        ("label", "hours"),
        [("UTC+0", 0), ("UTC+1", 1), ("UTC+3", 3), ("UTC-5", -5), ("UTC+14", 14)],
    )
    def test_valid_labels(self, label: str, hours: int) -> None:
        tz = parse_viewer_timezone(label)
        assert tz.offset == timedelta(hours=hours)
        assert tz.label == label

    def test_half_hour_offset(self) -> None:
        tz = parse_viewer_timezone("UTC+5:30")
        assert tz.offset == timedelta(hours=5, minutes=30)
        assert tz.label == "UTC+5:30"

    def test_canonicalizes(self) -> None:
        assert parse_viewer_timezone("UTC+01").label == "UTC+1"
        assert parse_viewer_timezone("UTC-0").label == "UTC+0"

    @pytest.mark.parametrize("label", ["CET", "UTC", "UTC+15", "UTC-13", "GMT+1", "UTC+1:75"])
    def test_invalid_labels(self, label: str) -> None:
        with pytest.raises(ValueError):
            parse_viewer_timezone(label)

    def test_short_names(self) -> None:
        assert parse_viewer_timezone("UTC+0").short_name == "GMT"
        assert parse_viewer_timezone("UTC+1").short_name == "CET"
        assert parse_viewer_timezone("UTC+2").short_name == "EET"
        assert parse_viewer_timezone("UTC+3").short_name == "MSK"
        assert parse_viewer_timezone("UTC-5").short_name == "UTC-5"


class TestResolveOrgTimezone:
    def test_iana_name(self) -> None:
        assert resolve_org_timezone("Europe/Paris") == PARIS

    def test_offset_label(self) -> None:
        tz = resolve_org_timezone("UTC+1")
        assert tz.utcoffset(None) == timedelta(hours=1)

    def test_utc(self) -> None:
        assert resolve_org_timezone("UTC") is timezone.utc

    def test_unknown(self) -> None:
        with pytest.raises(ValueError):
            resolve_org_timezone("Mars/Olympus_Mons")


class TestToViewer:
    day = date(2024, 1, 15)

    def test_same_zone_is_identity(self) -> None:
        shown = to_viewer(self.day, 15, parse_viewer_timezone("UTC+1"), ORG_FIXED)
        assert (shown.date, shown.hour, shown.label, shown.day_shift) == (self.day, 15, "3:00 PM", 0)

    def test_viewer_behind_org(self) -> None:
        shown = to_viewer(self.day, 15, parse_viewer_timezone("UTC+0"), ORG_FIXED)
        assert shown.label == "2:00 PM"
        assert shown.day_shift == 0

    def test_viewer_ahead_of_org(self) -> None:
        shown = to_viewer(self.day, 15, parse_viewer_timezone("UTC+3"), ORG_FIXED)
        assert shown.label == "5:00 PM"

    def test_rolls_over_to_next_day(self) -> None:
        shown = to_viewer(self.day, 23, parse_viewer_timezone("UTC+3"), ORG_FIXED)
        assert shown.date == date(2024, 1, 16)
        assert shown.hour == 1
        assert shown.label == "1:00 AM"
        assert shown.day_shift == 1

    def test_rolls_back_to_previous_day(self) -> None:
        shown = to_viewer(self.day, 0, parse_viewer_timezone("UTC-5"), ORG_FIXED)
        assert shown.date == date(2024, 1, 14)
        assert shown.hour == 18
        assert shown.day_shift == -1

    def test_half_hour_label(self) -> None:
        shown = to_viewer(self.day, 15, parse_viewer_timezone("UTC+5:30"), ORG_FIXED)
        assert shown.label == "7:30 PM"

    def test_iana_org_follows_daylight_saving(self) -> None:
        viewer = parse_viewer_timezone("UTC+1")
        winter = to_viewer(date(2024, 1, 15), 15, viewer, PARIS)
        summer = to_viewer(date(2024, 6, 3), 15, viewer, PARIS)
        assert winter.label == "3:00 PM"
        assert summer.label == "2:00 PM"

    def test_to_org_inverts_to_viewer(self) -> None:
        viewer = parse_viewer_timezone("UTC+3")
        shown = to_viewer(self.day, 23, viewer, ORG_FIXED)
        assert to_org(shown.date, shown.hour, viewer, ORG_FIXED) == (self.day, 23)


class TestHourOffset:
    def test_fixed_org(self) -> None:
        day = date(2024, 1, 15)
        assert hour_offset(parse_viewer_timezone("UTC+0"), ORG_FIXED, day) == -1
        assert hour_offset(parse_viewer_timezone("UTC+3"), ORG_FIXED, day) == 2

    def test_iana_org(self) -> None:
        viewer = parse_viewer_timezone("UTC+0")
        assert hour_offset(viewer, PARIS, date(2024, 1, 15)) == -1
        assert hour_offset(viewer, PARIS, date(2024, 6, 3)) == -2
