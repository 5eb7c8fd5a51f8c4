"""Calendar provider interface."""

from typing import Protocol

from calsync.core.events import CalendarEvent


class CalendarProvider(Protocol):
    """Interface for reading and writing events on one calendar."""

    def list_events(self, time_min: str) -> list[CalendarEvent]:
        """List single-occurrence events ending after time_min, ordered by start."""
        ...

    def insert_event(self, event: CalendarEvent) -> CalendarEvent:
        """Create an event and return the provider's record of it."""
        ...
