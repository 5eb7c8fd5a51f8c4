"""Core domain logic - pure functions, no I/O."""

from .events import (
    CalendarEvent,
    CreationResult,
    CreationStatus,
    EventTime,
    ReminderOverride,
    Reminders,
    filter_upcoming,
    find_duplicate,
    is_duplicate,
)

__all__ = [
    "CalendarEvent",
    "CreationResult",
    "CreationStatus",
    "EventTime",
    "ReminderOverride",
    "Reminders",
    "filter_upcoming",
    "find_duplicate",
    "is_duplicate",
]
