"""Application error types mapped to HTTP responses by the API layer."""


class CalorieTrackerError(Exception):
    """Base class for expected, user-facing failures."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(CalorieTrackerError):
    """A required field is missing or has an invalid value."""

    status_code = 400


class AuthenticationError(CalorieTrackerError):
    """The request carries no valid identity."""

    status_code = 401


class AuthorizationError(CalorieTrackerError):
    """The requester does not own the referenced record."""

    status_code = 403


class NotFoundError(CalorieTrackerError):
    """The referenced record does not exist."""

    status_code = 404
