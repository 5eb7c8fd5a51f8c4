"""Google Calendar API adapter."""

import logging

from calsync.core.events import CalendarEvent
from calsync.errors import ProviderError

logger = logging.getLogger(__name__)


class GoogleCalendarAdapter:
    """
    Google Calendar API adapter for a single calendar.

    Implements CalendarProvider protocol. Every call is one blocking request
    that returns a result or raises ProviderError. No business logic - just I/O.
    """

    def __init__(self, credentials, calendar_id: str = "primary"):
        self.credentials = credentials
        self.calendar_id = calendar_id
        self._service = None

    def _build_service(self):
        """Build a Google Calendar API service."""
        from googleapiclient.discovery import build

        return build("calendar", "v3", credentials=self.credentials, cache_discovery=False)

    @property
    def service(self):
        if self._service is None:
            self._service = self._call("build calendar service", self._build_service)
        return self._service

    def _call(self, what: str, fn, *args, **kwargs):
        """Run fn, translating API, auth and network failures into ProviderError."""
        import httplib2
        from google.auth.exceptions import GoogleAuthError, RefreshError
        from googleapiclient.errors import HttpError

        try:
            return fn(*args, **kwargs)
        except HttpError as e:
            status = e.resp.status if e.resp is not None else None
            raise ProviderError(f"Google Calendar API error ({what}): {e}", status=status) from e
        except RefreshError as e:
            raise ProviderError(f"Credentials rejected ({what}): {e}", status=401) from e
        except GoogleAuthError as e:
            raise ProviderError(f"Google auth error ({what}): {e}") from e
        except OSError as e:
            raise ProviderError(f"Network error ({what}): {e}") from e
        except httplib2.HttpLib2Error as e:
            raise ProviderError(f"Network error ({what}): {e}") from e

    def list_events(self, time_min: str) -> list[CalendarEvent]:
        """List single-occurrence events from time_min on, ordered by start time."""
        items: list[dict] = []
        page_token = None
        while True:
            request = self.service.events().list(
                calendarId=self.calendar_id,
                timeMin=time_min,
                singleEvents=True,
                orderBy="startTime",
                pageToken=page_token,
            )
            result = self._call("list events", request.execute)
            items.extend(result.get("items", []))
            page_token = result.get("nextPageToken")
            if not page_token:
                break

        logger.debug(f"Fetched {len(items)} events from {self.calendar_id}")
        return [CalendarEvent.from_api(item) for item in items]

    def insert_event(self, event: CalendarEvent) -> CalendarEvent:
        """Create event on the calendar and return the created record."""
        request = self.service.events().insert(calendarId=self.calendar_id, body=event.to_api())
        created = self._call("insert event", request.execute)
        return CalendarEvent.from_api(created)
