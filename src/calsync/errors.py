"""Exceptions raised by calsync."""


class CalsyncError(Exception):
    """Base class for calsync errors."""

    pass


class AuthorizationError(CalsyncError):
    """Raised when the interactive OAuth flow fails or is denied."""

    pass


class PersistenceError(CalsyncError):
    """Raised when the token file cannot be written or the client secret read."""

    pass


class InvalidEventError(CalsyncError, ValueError):
    """Raised when a candidate event is malformed (e.g. end before start)."""

    pass


class ProviderError(CalsyncError):
    """Raised when a Google Calendar API call fails."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status

    @property
    def auth_failure(self) -> bool:
        """True when the provider rejected the credential."""
        return self.status == 401
