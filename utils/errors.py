"""Exceptions raised by the service layer and translated to HTTP responses by the routes."""


class ApiError(Exception):
    status_code = 500
    message = "Server Error"

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class ValidationError(ApiError):
    """Malformed, missing or conflicting input. Carries per-field messages."""

    status_code = 422
    message = "Validation Error."

    def __init__(self, errors, message=None):
        super().__init__(message)
        self.errors = errors


class NotFoundError(ApiError):
    status_code = 404
    message = "Resource not found."


class PersistenceError(ApiError):
    """Unexpected storage failure. The transaction has already been rolled back."""

    status_code = 500
