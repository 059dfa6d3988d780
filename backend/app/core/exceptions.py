"""
Domain exceptions

Services raise these; app.main maps each one to an HTTP response using
its status_code.
"""
from fastapi import status


class AppError(Exception):
    """Base class for errors that carry a user-facing message"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(AppError):
    """Missing or malformed input, raised before any I/O"""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class ArtifactNotAvailableError(NotFoundError):
    """Requested export format has not been generated for a version"""


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT


class AuthenticationError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED


class IdentityError(AppError):
    """Sign-in / sign-up refusal; the message is shown to the user verbatim"""

    status_code = status.HTTP_400_BAD_REQUEST


class StorageError(AppError):
    """Blob storage I/O failure"""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
