"""Application error taxonomy rendered as HTTP error payloads."""

from http import HTTPStatus


class DailyDietError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def error(self) -> str:
        """Return the HTTP reason phrase for the status code."""
        return HTTPStatus(self.status_code).phrase

    def to_payload(self) -> dict[str, object]:
        """Return the JSON error body."""
        return {
            "error": self.error,
            "message": self.message,
            "statusCode": int(self.status_code),
        }


class ValidationError(DailyDietError):
    """Raised for missing, malformed or empty request fields."""

    status_code = HTTPStatus.BAD_REQUEST


class DuplicateEmailError(ValidationError):
    """Raised when an email address already belongs to another user."""

    def __init__(self, message: str = "email address is invalid") -> None:
        super().__init__(message)


class UnauthorizedError(DailyDietError):
    """Raised for any missing, malformed or unknown session credential."""

    status_code = HTTPStatus.UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class NotFoundError(DailyDietError):
    """Raised when a resource is absent or not owned by the caller."""

    status_code = HTTPStatus.NOT_FOUND


def invalid_id_error() -> ValidationError:
    """Return the error for a path id that is not a UUID."""
    return ValidationError("params id must be a valid UUID")
