"""Exceptions raised at the I/O boundary."""


class PaperdeskError(Exception):
    """Base class for paperdesk errors."""

    pass


class AuthenticationError(PaperdeskError):
    """Raised when authentication fails or no session is available."""

    pass


class PaperworkAPIError(PaperdeskError):
    """Raised when the paperwork API returns an error response."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class InvalidPaperworkError(PaperdeskError, ValueError):
    """Raised when a paperwork record or submission fails validation."""

    pass
