"""calsync - keep a Google Calendar in step with events you hand it."""

__version__ = "0.1.0"
