"""Domain errors raised by the campus services and mapped to HTTP responses in app.main."""


class CampusError(Exception):
    """Base class for user-facing campus service errors."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailed(CampusError):
    """A required field is empty or a submitted value is out of bounds."""

    status_code = 400


class AlreadyExists(CampusError):
    """A user with the same identifier (case-insensitive) is already registered."""

    status_code = 409
