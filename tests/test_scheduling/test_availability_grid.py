import json

import pytest

from squadplanner.scheduling.availability import (
    AvailabilityGrid,
    build_heatmap,
    quick_fill,
)

HOURS = list(range(14, 24))


class TestAvailabilityGrid:
    def test_empty_grid(self) -> None:
        grid = AvailabilityGrid(HOURS)
        assert not grid.has_any()
        assert grid.count() == 0
        assert grid.to_sparse() == {}

    def test_from_sparse_mapping(self) -> None:
        grid = AvailabilityGrid.from_time_slots(
            {"monday": {15: True, 16: False}, "friday": {"20": True}}, HOURS
        )
        assert grid.get(0, 15)
        assert not grid.get(0, 16)
        assert grid.get(4, 20)
        assert grid.count() == 2

    def test_false_and_absent_are_the_same(self) -> None:
        explicit = AvailabilityGrid.from_time_slots({"monday": {15: False}}, HOURS)
        absent = AvailabilityGrid.from_time_slots({}, HOURS)
        assert explicit.to_time_slots() == absent.to_time_slots()

    def test_full_mapping_has_every_key(self) -> None:
        slots = AvailabilityGrid(HOURS).to_time_slots()
        assert list(slots) == [
            "monday",
            "tuesday",
            "wednesday",
            "thursday",
            "friday",
            "saturday",
            "sunday",
        ]
        assert all(list(day) == HOURS for day in slots.values())

    def test_day_names_case_insensitive(self) -> None:
        grid = AvailabilityGrid.from_time_slots({"Sunday": {23: True}}, HOURS)
        assert grid.get(6, 23)

    @pytest.mark.parametrize(
        "slots",
        [{"funday": {15: True}}, {"monday": {9: True}}, {"monday": {"noon": True}}],
    )
    def test_rejects_unknown_keys(self, slots: dict) -> None:
        with pytest.raises(ValueError):
            AvailabilityGrid.from_time_slots(slots, HOURS)

    def test_json_stores_only_selected(self) -> None:
        grid = AvailabilityGrid.from_time_slots({"tuesday": {18: True, 19: False}}, HOURS)
        assert json.loads(grid.to_json()) == {"tuesday": {"18": True}}

    def test_json_round_trip_drops_out_of_window_hours(self) -> None:
        raw = json.dumps({"monday": {"10": True, "15": True}, "holiday": {"15": True}})
        grid = AvailabilityGrid.from_json(raw, HOURS)
        assert grid.to_sparse() == {"monday": {15: True}}

    def test_from_json_empty(self) -> None:
        assert not AvailabilityGrid.from_json(None, HOURS).has_any()
        assert not AvailabilityGrid.from_json("", HOURS).has_any()


class TestQuickFill:
    def test_all_and_clear(self) -> None:
        assert quick_fill("all", HOURS).count() == 70
        assert quick_fill("clear", HOURS).count() == 0

    def test_evenings(self) -> None:
        grid = quick_fill("evenings", HOURS)
        assert grid.count() == 7 * 6
        assert not grid.get(0, 17)
        assert grid.get(0, 18)

    def test_weekends_and_weekdays(self) -> None:
        weekends = quick_fill("weekends", HOURS)
        weekdays = quick_fill("weekdays", HOURS)
        assert set(weekends.to_sparse()) == {"saturday", "sunday"}
        assert set(weekdays.to_sparse()) == {"monday", "tuesday", "wednesday", "thursday", "friday"}

    def test_unknown_preset(self) -> None:
        with pytest.raises(ValueError):
            quick_fill("mornings", HOURS)


class TestHeatmap:
    def test_counts_players_per_slot(self) -> None:
        alice = AvailabilityGrid.from_time_slots({"monday": {15: True, 16: True}}, HOURS)
        bob = AvailabilityGrid.from_time_slots({"monday": {15: True}}, HOURS)
        cells = {(c.day, c.hour): c for c in build_heatmap([("alice", alice), ("bob", bob)], HOURS)}

        assert len(cells) == 70
        assert cells[("monday", 15)].count == 2
        assert cells[("monday", 15)].players == ["alice", "bob"]
        assert cells[("monday", 16)].players == ["alice"]
        assert cells[("tuesday", 15)].count == 0

    def test_no_submissions(self) -> None:
        assert all(c.count == 0 for c in build_heatmap([], HOURS))
