class ServiceError(Exception):
    """Business-rule failure that maps to a plain-text HTTP response."""

    status_code = 500
    message = "Server Error"

    def __init__(self, message=None, status_code=None):
        super().__init__(message or self.message)
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ServiceError):
    status_code = 400
    message = "Invalid input"


class AuthRejected(ServiceError):
    status_code = 400
    message = "User not found"


class Forbidden(ServiceError):
    status_code = 403
    message = "Forbidden"


class NotFound(ServiceError):
    status_code = 404
    message = "Not found"


class CapacityExceeded(ServiceError):
    status_code = 400
    message = "Game is full"


class Conflict(ServiceError):
    status_code = 409
    message = "Conflict"
