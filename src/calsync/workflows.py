"""Event sync workflow: list upcoming events and create without duplicating.

Callers hand in a credential from CredentialStore.resolve(). Nothing here
persists state.
"""

import logging
from datetime import datetime, timezone
from typing import Callable

from .adapters.google_calendar import GoogleCalendarAdapter
from .core.events import CalendarEvent, CreationResult, filter_upcoming, find_duplicate
from .ports import CalendarProvider

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class EventSyncWorkflow:
    """Check-then-act event creation against a single calendar.

    The duplicate check and the insert are separate provider calls, so an
    event created elsewhere in between is not detected.
    """

    def __init__(
        self,
        calendar_id: str = "primary",
        provider_factory: Callable[..., CalendarProvider] | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.calendar_id = calendar_id
        self.provider_factory = provider_factory or GoogleCalendarAdapter
        self.clock = clock

    def _provider(self, credential) -> CalendarProvider:
        return self.provider_factory(credential, self.calendar_id)

    def list_upcoming(self, credential, provider: CalendarProvider | None = None) -> list[CalendarEvent]:
        """Events on the calendar starting from now, ordered by start time."""
        provider = provider or self._provider(credential)
        now = self.clock()
        if now.tzinfo is None:
            # naive clocks are taken as local time
            now = now.astimezone(timezone.utc)
        events = provider.list_events(now.isoformat().replace("+00:00", "Z"))
        return filter_upcoming(events, now)

    def create_if_absent(self, credential, candidate: CalendarEvent) -> CreationResult:
        """Insert candidate unless an upcoming event shares its start or end dateTime."""
        candidate.validate()
        provider = self._provider(credential)

        existing = self.list_upcoming(credential, provider=provider)
        duplicate = find_duplicate(existing, candidate)
        if duplicate is not None:
            logger.info(
                f"Event already exists: {duplicate.summary!r} "
                f"({duplicate.start.date_time} - {duplicate.end.date_time})"
            )
            return CreationResult.skipped(duplicate)

        created = provider.insert_event(candidate)
        logger.info(f"Event created: {created.html_link}")
        return CreationResult.created(created)
