"""Application errors translated to JSON responses by the app error handlers."""


class APIError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code = 500

    def __init__(self, message: str, status_code: int = None, details: str = None):
        super().__init__(message)
        self.message = message
        self.details = details
        if status_code is not None:
            self.status_code = status_code


class BadRequestError(APIError):
    """Missing or invalid input, or a rule violation."""
    status_code = 400


class UnauthorizedError(APIError):
    status_code = 401


class ForbiddenError(APIError):
    """The record exists but is outside the caller's scope."""
    status_code = 403


class NotFoundError(APIError):
    status_code = 404
