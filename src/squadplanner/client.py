"""Async HTTP client for the schedule API, plus week navigation state.

WeekNavigator mirrors what the availability form does in the browser: it
keeps one selected week, refuses navigation outside the caller's access
window, and drops fetch results for a week that is no longer selected so a
slow response cannot overwrite newer state.
"""

import logging
from datetime import date, timedelta
from typing import Any

import httpx

from squadplanner.scheduling.access import (
    WeekAccess,
    availability_access,
    is_staff,
    is_week_accessible_for_player,
)

logger = logging.getLogger(__name__)


class ScheduleClientError(Exception):
    """The API answered with an error status."""

    def __init__(self, status_code: int, detail: str) -> None:
        super().__init__(f"{status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


class AvailabilityValidationError(ValueError):
    """Submission rejected locally; nothing was sent."""


def has_selected_slot(time_slots: dict[str, dict[Any, bool]]) -> bool:
    return any(
        available is True for day in time_slots.values() for available in (day or {}).values()
    )


class ScheduleClient:
    def __init__(self, http: httpx.AsyncClient, user_id: int) -> None:
        self._http = http
        self._headers = {"X-User-Id": str(user_id)}

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        response = await self._http.request(method, url, headers=self._headers, **kwargs)
        if response.status_code >= 400:
            try:
                detail = response.json().get("detail", response.text)
            except ValueError:
                detail = response.text
            logger.warning("%s %s failed: %s %s", method, url, response.status_code, detail)
            raise ScheduleClientError(response.status_code, str(detail))
        if response.status_code == 204:
            return None
        return response.json()

    async def week_grid(self, team_id: int, week_offset: int = 0) -> dict[str, Any]:
        return await self._request(
            "GET", "/api/schedule/week", params={"team_id": team_id, "week_offset": week_offset}
        )

    async def activities(self, team_id: int) -> list[dict[str, Any]]:
        return await self._request("GET", "/api/schedule/activities", params={"team_id": team_id})

    async def availability(
        self, team_id: int, week_start: date, player_id: int | None = None
    ) -> dict[str, Any]:
        params: dict[str, Any] = {"team_id": team_id, "week_start": week_start.isoformat()}
        if player_id is not None:
            params["player_id"] = player_id
        return await self._request("GET", "/api/availability", params=params)

    async def save_availability(
        self,
        team_id: int,
        week_start: date,
        time_slots: dict[str, dict[Any, bool]],
        notes: str | None = None,
    ) -> dict[str, Any]:
        """Submit one week. Raises AvailabilityValidationError without any
        request when no slot is marked available."""
        if not has_selected_slot(time_slots):
            raise AvailabilityValidationError(
                "Please select at least one time slot when you are available"
            )
        payload = {
            "team_id": team_id,
            "week_start": week_start.isoformat(),
            "time_slots": {
                day: {str(hour): value for hour, value in (slots or {}).items()}
                for day, slots in time_slots.items()
            },
            "notes": notes,
        }
        return await self._request("POST", "/api/availability", json=payload)


class WeekNavigator:
    """Selected-week state for one player's availability form."""

    def __init__(
        self,
        client: ScheduleClient,
        team_id: int,
        current_monday: date,
        role: str = "player",
        weeks_ahead: int = 3,
    ) -> None:
        self.client = client
        self.team_id = team_id
        self.current_monday = current_monday
        self.role = role
        self.weeks_ahead = weeks_ahead
        self.selected = current_monday
        self.data: dict[str, Any] | None = None
        self.error: str | None = None
        self._generation = 0

    @property
    def can_go_prev(self) -> bool:
        return self._access(self.selected).can_go_prev

    @property
    def can_go_next(self) -> bool:
        return self._access(self.selected).can_go_next

    @property
    def read_only(self) -> bool:
        return self._access(self.selected).read_only

    def _access(self, week_start: date) -> WeekAccess:
        return availability_access(self.role, week_start, self.current_monday, self.weeks_ahead)

    def can_select(self, week_start: date) -> bool:
        """Players may only move within the current week and the weeks ahead.

        A selected week that slides into the past when `current_monday`
        advances stays selected, read-only.
        """
        if is_staff(self.role):
            return True
        return is_week_accessible_for_player(week_start, self.current_monday, self.weeks_ahead)

    async def go_prev(self) -> bool:
        if not self.can_go_prev:
            return False
        return await self.go_to(self.selected - timedelta(days=7))

    async def go_next(self) -> bool:
        if not self.can_go_next:
            return False
        return await self.go_to(self.selected + timedelta(days=7))

    async def go_to(self, week_start: date) -> bool:
        """Select `week_start` and load it. Returns False if navigation was refused."""
        if not self.can_select(week_start):
            return False
        self.selected = week_start
        await self.refresh()
        return True

    async def refresh(self) -> bool:
        """Load the selected week. Returns False if the result arrived stale."""
        self._generation += 1
        generation = self._generation
        week_start = self.selected
        try:
            result = await self.client.availability(self.team_id, week_start)
        except (ScheduleClientError, httpx.HTTPError) as e:
            if generation != self._generation:
                return False
            logger.error("Loading availability for %s failed: %s", week_start, e)
            self.error = "Failed to load your availability"
            return False

        if generation != self._generation or week_start != self.selected:
            logger.debug("Discarding stale availability response for %s", week_start)
            return False
        self.data = result
        self.error = None
        return True

    async def save(
        self, time_slots: dict[str, dict[Any, bool]], notes: str | None = None
    ) -> bool:
        """Save the selected week. Errors land in `error`; the caller keeps its
        form state and may simply call save again."""
        if self.read_only:
            self.error = "This week is in the past and cannot be edited"
            return False
        try:
            self.data = await self.client.save_availability(
                self.team_id, self.selected, time_slots, notes
            )
        except AvailabilityValidationError as e:
            self.error = str(e)
            return False
        except (ScheduleClientError, httpx.HTTPError) as e:
            logger.error("Saving availability for %s failed: %s", self.selected, e)
            self.error = "Failed to save your availability. Please try again."
            return False
        self.error = None
        return True
