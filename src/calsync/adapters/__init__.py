"""Adapters - I/O implementations of ports."""

from .credential_store import CredentialStore
from .google_calendar import GoogleCalendarAdapter

__all__ = [
    "CredentialStore",
    "GoogleCalendarAdapter",
]
