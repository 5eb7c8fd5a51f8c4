"""Pure event domain logic - no I/O dependencies."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum

from calsync.errors import InvalidEventError

# Tolerated clock skew between us and the provider when filtering upcoming events.
CLOCK_SKEW = timedelta(seconds=5)


@dataclass
class EventTime:
    """Start or end of an event, as the provider represents it."""

    date_time: str | None = None
    time_zone: str | None = None
    date: str | None = None

    @classmethod
    def from_api(cls, data: dict | None) -> "EventTime":
        data = data or {}
        return cls(
            date_time=data.get("dateTime"),
            time_zone=data.get("timeZone"),
            date=data.get("date"),
        )

    def to_api(self) -> dict:
        result = {}
        if self.date_time is not None:
            result["dateTime"] = self.date_time
        if self.date is not None:
            result["date"] = self.date
        if self.time_zone is not None:
            result["timeZone"] = self.time_zone
        return result

    def parsed(self) -> datetime | None:
        """Parse dateTime into an aware datetime, or None for all-day/unparseable values."""
        if not self.date_time:
            return None
        try:
            return datetime.fromisoformat(self.date_time.replace("Z", "+00:00"))
        except ValueError:
            return None


@dataclass
class ReminderOverride:
    method: str
    minutes: int

    @classmethod
    def from_api(cls, data: dict) -> "ReminderOverride":
        return cls(method=data["method"], minutes=int(data["minutes"]))

    def to_api(self) -> dict:
        return {"method": self.method, "minutes": self.minutes}


@dataclass
class Reminders:
    use_default: bool = True
    overrides: list[ReminderOverride] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict) -> "Reminders":
        return cls(
            use_default=bool(data.get("useDefault", True)),
            overrides=[ReminderOverride.from_api(o) for o in data.get("overrides", [])],
        )

    def to_api(self) -> dict:
        result: dict = {"useDefault": self.use_default}
        if self.overrides:
            result["overrides"] = [o.to_api() for o in self.overrides]
        return result


@dataclass
class CalendarEvent:
    """A calendar event.

    Events read from the provider keep their original record in ``raw`` so
    they can be handed back out unchanged.
    """

    summary: str
    start: EventTime
    end: EventTime
    location: str = ""
    description: str = ""
    color_id: str | None = None
    reminders: Reminders | None = None
    id: str | None = None
    html_link: str | None = None
    raw: dict = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_api(cls, data: dict) -> "CalendarEvent":
        reminders = data.get("reminders")
        return cls(
            summary=data.get("summary", ""),
            start=EventTime.from_api(data.get("start")),
            end=EventTime.from_api(data.get("end")),
            location=data.get("location", ""),
            description=data.get("description", ""),
            color_id=data.get("colorId"),
            reminders=Reminders.from_api(reminders) if reminders else None,
            id=data.get("id"),
            html_link=data.get("htmlLink"),
            raw=data,
        )

    def to_api(self) -> dict:
        """Build the request body for events.insert."""
        body: dict = {
            "summary": self.summary,
            "start": self.start.to_api(),
            "end": self.end.to_api(),
        }
        if self.location:
            body["location"] = self.location
        if self.description:
            body["description"] = self.description
        if self.color_id is not None:
            body["colorId"] = self.color_id
        if self.reminders is not None:
            body["reminders"] = self.reminders.to_api()
        return body

    def as_json(self) -> dict:
        """The provider record if we have one, otherwise the insert body."""
        return self.raw or self.to_api()

    def validate(self) -> None:
        """Check start < end, raising InvalidEventError otherwise."""
        start, end = self.start.parsed(), self.end.parsed()
        if start is not None and end is not None:
            try:
                ordered = start < end
            except TypeError:
                raise InvalidEventError(
                    f"Cannot compare naive and aware times in {self.summary!r}"
                ) from None
            if not ordered:
                raise InvalidEventError(
                    f"Event {self.summary!r} ends ({self.end.date_time}) before it starts ({self.start.date_time})"
                )
        elif self.start.date and self.end.date:
            if not self.start.date < self.end.date:
                raise InvalidEventError(f"Event {self.summary!r} ends before it starts")
        else:
            raise InvalidEventError(f"Event {self.summary!r} needs both a start and an end")


class CreationStatus(Enum):
    CREATED = "created"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class CreationResult:
    """Outcome of a create-if-absent attempt."""

    status: CreationStatus
    event: CalendarEvent | None = None
    duplicate: CalendarEvent | None = None

    @classmethod
    def created(cls, event: CalendarEvent) -> "CreationResult":
        return cls(status=CreationStatus.CREATED, event=event)

    @classmethod
    def skipped(cls, duplicate: CalendarEvent) -> "CreationResult":
        return cls(status=CreationStatus.SKIPPED, duplicate=duplicate)

    @property
    def html_link(self) -> str | None:
        return self.event.html_link if self.event else None


def is_duplicate(existing: CalendarEvent, candidate: CalendarEvent) -> bool:
    """Same raw start dateTime OR same raw end dateTime.

    Plain string comparison: the same instant written with different offsets
    does not match. A missing value on the candidate side never matches.
    """
    if candidate.start.date_time is not None and existing.start.date_time == candidate.start.date_time:
        return True
    if candidate.end.date_time is not None and existing.end.date_time == candidate.end.date_time:
        return True
    return False


def find_duplicate(existing: list[CalendarEvent], candidate: CalendarEvent) -> CalendarEvent | None:
    """Return the first existing event that counts as a duplicate of candidate."""
    for event in existing:
        if is_duplicate(event, candidate):
            return event
    return None


def filter_upcoming(events: list[CalendarEvent], now: datetime) -> list[CalendarEvent]:
    """Drop timed events that started before now (minus CLOCK_SKEW).

    All-day events and events with unparseable times are kept.
    """
    cutoff = now - CLOCK_SKEW
    result = []
    for event in events:
        start = event.start.parsed()
        if start is not None and start.tzinfo is not None and start < cutoff:
            continue
        result.append(event)
    return result
