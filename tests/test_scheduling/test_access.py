from datetime import date, timedelta

import pytest

from squadplanner.scheduling.access import (
    availability_access,
    is_staff,
    is_week_accessible_for_player,
    is_week_in_past,
    schedule_access,
)

M = date(2024, 6, 3)


class TestPlayerWindow:
    def test_boundaries_inclusive(self) -> None:
        assert is_week_accessible_for_player(M, M)
        assert is_week_accessible_for_player(M + timedelta(days=21), M)

    def test_outside_window(self) -> None:
        assert not is_week_accessible_for_player(M - timedelta(days=7), M)
        assert not is_week_accessible_for_player(M + timedelta(days=28), M)

    def test_example_offsets(self) -> None:
        # offset 3 (2024-06-24) is the last accepted week, offset 4 is refused
        assert is_week_accessible_for_player(date(2024, 6, 24), M)
        assert not is_week_accessible_for_player(date(2024, 7, 1), M)

    def test_custom_weeks_ahead(self) -> None:
        assert not is_week_accessible_for_player(M + timedelta(days=14), M, weeks_ahead=1)

    def test_past(self) -> None:
        assert is_week_in_past(M - timedelta(days=7), M)
        assert not is_week_in_past(M, M)


class TestAvailabilityAccess:
    def test_current_week_player(self) -> None:
        access = availability_access("player", M, M)
        assert access.viewable
        assert not access.read_only
        assert not access.can_go_prev
        assert access.can_go_next

    def test_last_week_of_window(self) -> None:
        access = availability_access("player", M + timedelta(days=21), M)
        assert access.viewable
        assert access.can_go_prev
        assert not access.can_go_next

    def test_past_week_is_read_only_for_player(self) -> None:
        access = availability_access("player", M - timedelta(days=7), M)
        assert access.viewable
        assert access.read_only

    def test_beyond_window_closed_for_player(self) -> None:
        assert not availability_access("player", M + timedelta(days=28), M).viewable

    @pytest.mark.parametrize("role", ["manager", "admin"])
    def test_staff_unrestricted(self, role: str) -> None:
        for week in (M - timedelta(days=70), M, M + timedelta(days=70)):
            access = availability_access(role, week, M)
            assert access.viewable
            assert not access.read_only
            assert access.can_go_prev and access.can_go_next


class TestScheduleAccess:
    @pytest.mark.parametrize(("offset", "viewable"), [(-1, False), (0, True), (2, True), (3, False)])
    def test_player_offsets(self, offset: int, viewable: bool) -> None:
        assert schedule_access("player", offset).viewable is viewable

    def test_player_navigation_flags(self) -> None:
        assert not schedule_access("player", 0).can_go_prev
        assert schedule_access("player", 0).can_go_next
        assert schedule_access("player", 2).can_go_prev
        assert not schedule_access("player", 2).can_go_next

    def test_staff_any_offset(self) -> None:
        assert schedule_access("manager", 10).viewable
        assert schedule_access("admin", -3).viewable

    def test_is_staff(self) -> None:
        assert is_staff("admin")
        assert is_staff("manager")
        assert not is_staff("player")
