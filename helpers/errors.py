class ClinicError(Exception):
    """Base for errors that map straight onto an HTTP response."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ClinicError):
    status_code = 400


class Unauthorized(ClinicError):
    status_code = 401


class NotFound(ClinicError):
    status_code = 404


class Conflict(ClinicError):
    status_code = 409


class StorageFailure(ClinicError):
    status_code = 500


class NotificationFailure(Exception):
    """A notification could not be delivered. Never turned into an HTTP error."""
