"""
admin_api/errors.py
-------------------
Exceptions raised by services and repositories. Each carries the HTTP
status the presentation layer answers with.
"""


class ApiError(Exception):
    """Base class for errors that map onto a failure envelope."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ApiError):
    """A required field is missing or a value has the wrong shape."""

    status_code = 400


class DuplicateError(ApiError):
    """A unique constraint visible to the caller was violated."""

    status_code = 400


class NotFoundError(ApiError):
    """A lookup by id matched no row."""

    status_code = 404

    def __init__(self, entity: str):
        super().__init__(f"{entity} not found")
        self.entity = entity


class AuthenticationError(ApiError):
    status_code = 401


class AuthorizationError(ApiError):
    status_code = 403
