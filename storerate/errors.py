"""Domain errors raised by services and rendered by the API layer."""

from fastapi import status


class AppError(Exception):
    """Base class for errors with a known HTTP category."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "UNEXPECTED"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Malformed input that slipped past schema validation."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_ERROR"


class InvalidRatingValue(ValidationError):
    """Rating value outside the 1-5 range."""

    code = "INVALID_RATING_VALUE"


class NotFoundError(AppError):
    """Referenced store, user or rating does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"


class ConflictError(AppError):
    """Write would violate a uniqueness rule."""

    status_code = status.HTTP_409_CONFLICT
    code = "CONFLICT"


class UnauthenticatedError(AppError):
    """Missing or invalid identity assertion."""

    status_code = status.HTTP_401_UNAUTHORIZED
    code = "UNAUTHENTICATED"


class PolicyDeniedError(AppError):
    """Authenticated principal is not allowed to perform the operation."""

    status_code = status.HTTP_403_FORBIDDEN
    code = "FORBIDDEN"

    def __init__(self, message: str, reason: str):
        super().__init__(message)
        self.reason = reason
        self.code = reason
