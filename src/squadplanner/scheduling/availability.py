"""Weekly availability grid, quick-fill presets and the team heatmap.

The wire format is a sparse mapping ``{"monday": {15: True, 16: False}}``
where absent keys mean "not available". Internally it is held as a dense
7 x N boolean grid so "false" and "absent" cannot be told apart.
"""

import json
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field

from squadplanner.scheduling.weeks import DAY_NAMES

EVENING_START_HOUR = 18
WEEKDAYS = DAY_NAMES[:5]
WEEKEND = DAY_NAMES[5:]

QUICK_FILL_PRESETS = ("all", "clear", "evenings", "weekends", "weekdays")

TimeSlotsMap = dict[str, dict[int, bool]]


class AvailabilityGrid:
    """Dense day x hour availability for one week."""

    def __init__(self, hours: Sequence[int]) -> None:
        self.hours = list(hours)
        self._cells = [[False] * len(self.hours) for _ in DAY_NAMES]

    @classmethod
    def from_time_slots(
        cls, time_slots: Mapping[str, Mapping[int | str, bool]], hours: Sequence[int]
    ) -> "AvailabilityGrid":
        """Build a grid from the sparse wire mapping.

        Raises ValueError for unknown day names or hours outside the window.
        """
        grid = cls(hours)
        for day, slots in time_slots.items():
            day_key = day.lower()
            if day_key not in DAY_NAMES:
                raise ValueError(f"Unknown day: {day!r}")
            for hour, available in (slots or {}).items():
                try:
                    hour_int = int(hour)
                except (TypeError, ValueError) as e:
                    raise ValueError(f"Invalid hour {hour!r} for {day_key}") from e
                if hour_int not in grid.hours:
                    raise ValueError(f"Hour {hour_int} is outside the schedule window")
                grid.set(DAY_NAMES.index(day_key), hour_int, bool(available))
        return grid

    @classmethod
    def from_json(cls, raw: str | None, hours: Sequence[int]) -> "AvailabilityGrid":
        """Load a stored grid, ignoring hours that fell out of the window."""
        data = json.loads(raw) if raw else {}
        grid = cls(hours)
        for day, slots in data.items():
            if day not in DAY_NAMES:
                continue
            for hour, available in slots.items():
                if int(hour) in grid.hours:
                    grid.set(DAY_NAMES.index(day), int(hour), bool(available))
        return grid

    def set(self, day_index: int, hour: int, available: bool) -> None:
        self._cells[day_index][self.hours.index(hour)] = available

    def get(self, day_index: int, hour: int) -> bool:
        return self._cells[day_index][self.hours.index(hour)]

    def has_any(self) -> bool:
        return any(any(row) for row in self._cells)

    def count(self) -> int:
        return sum(sum(row) for row in self._cells)

    def to_time_slots(self) -> TimeSlotsMap:
        """Full mapping with an explicit boolean for every day and hour."""
        return {
            day: {hour: self._cells[i][j] for j, hour in enumerate(self.hours)}
            for i, day in enumerate(DAY_NAMES)
        }

    def to_sparse(self) -> TimeSlotsMap:
        """Only the available slots; days with none are omitted."""
        sparse: TimeSlotsMap = {}
        for i, day in enumerate(DAY_NAMES):
            selected = {hour: True for j, hour in enumerate(self.hours) if self._cells[i][j]}
            if selected:
                sparse[day] = selected
        return sparse

    def to_json(self) -> str:
        sparse = self.to_sparse()
        return json.dumps(
            {day: {str(hour): value for hour, value in slots.items()} for day, slots in sparse.items()}
        )


def quick_fill(preset: str, hours: Sequence[int]) -> AvailabilityGrid:
    """Pre-filled grid for one of QUICK_FILL_PRESETS.

    Raises ValueError for an unknown preset.
    """
    if preset not in QUICK_FILL_PRESETS:
        raise ValueError(f"Unknown quick-fill preset: {preset!r}")
    grid = AvailabilityGrid(hours)
    for i, day in enumerate(DAY_NAMES):
        for hour in grid.hours:
            if preset == "all":
                value = True
            elif preset == "evenings":
                value = hour >= EVENING_START_HOUR
            elif preset == "weekends":
                value = day in WEEKEND
            elif preset == "weekdays":
                value = day in WEEKDAYS
            else:
                value = False
            grid.set(i, hour, value)
    return grid


@dataclass
class HeatmapCell:
    day: str
    hour: int
    count: int = 0
    players: list[str] = field(default_factory=list)


def build_heatmap(
    submissions: Iterable[tuple[str, AvailabilityGrid]], hours: Sequence[int]
) -> list[HeatmapCell]:
    """Count available players per (day, hour) across `submissions`.

    Each submission is a (player name, grid) pair. Cells come back in day
    order, then hour order.
    """
    cells = {(day, hour): HeatmapCell(day=day, hour=hour) for day in DAY_NAMES for hour in hours}
    for player_name, grid in submissions:
        for i, day in enumerate(DAY_NAMES):
            for hour in hours:
                if hour in grid.hours and grid.get(i, hour):
                    cell = cells[(day, hour)]
                    cell.count += 1
                    cell.players.append(player_name)
    return list(cells.values())
