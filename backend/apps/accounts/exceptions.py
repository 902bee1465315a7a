"""
Exceptions for accounts app.

Each deletion error carries the error code and HTTP status the API
returns for it.
"""


class UserDeletionError(Exception):
    """Base exception for user deletion errors."""

    code = "internal"
    status_code = 500


class UnauthenticatedError(UserDeletionError):
    """Caller is not authenticated."""

    code = "unauthenticated"
    status_code = 401


class PermissionDeniedError(UserDeletionError):
    """Caller is not an admin."""

    code = "permission-denied"
    status_code = 403


class InvalidArgumentError(UserDeletionError):
    """Request is missing the target uid."""

    code = "invalid-argument"
    status_code = 400


class FailedPreconditionError(UserDeletionError):
    """Request is well-formed but not allowed in the current state."""

    code = "failed-precondition"
    status_code = 400


class NotFoundError(UserDeletionError):
    """Target user does not exist."""

    code = "not-found"
    status_code = 404


class InternalError(UserDeletionError):
    """Unexpected failure after the workflow started mutating data."""

    code = "internal"
    status_code = 500
