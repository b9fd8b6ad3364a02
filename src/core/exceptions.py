"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"

    # Not found errors (404)
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    THEME_NOT_FOUND = "THEME_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Conflict errors (409)
    USERNAME_TAKEN = "USERNAME_TAKEN"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    SCHEMA_MISMATCH = "SCHEMA_MISMATCH"
    PROFILE_LOAD_FAILED = "PROFILE_LOAD_FAILED"

    # Upstream data service errors (502)
    DATABASE_ERROR = "DATABASE_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class ProfileNotFoundError(AppException):
    """Profile not found."""

    def __init__(self, username: str = "") -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            message="Profile not found",
            status_code=404,
            details={"username": username} if username else None,
        )


class ThemeNotFoundError(AppException):
    """The profile has no theme settings row yet."""

    def __init__(self, profile_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.THEME_NOT_FOUND,
            message=f"Theme settings not found for profile: {profile_id}",
            status_code=404,
            details={"profile_id": profile_id},
        )


class UsernameTakenError(AppException):
    """Username is already used by another profile."""

    def __init__(self, username: str) -> None:
        super().__init__(
            error_code=ErrorCode.USERNAME_TAKEN,
            message=f"Username already taken: {username}",
            status_code=409,
            details={"username": username},
        )


class SchemaMismatchError(AppException):
    """None of the configured table names exist for a logical entity."""

    def __init__(self, entity: str, candidates: list[str]) -> None:
        super().__init__(
            error_code=ErrorCode.SCHEMA_MISMATCH,
            message=f"No table found for '{entity}' among: {', '.join(candidates)}",
            status_code=500,
            details={"entity": entity, "candidates": candidates},
        )


class DataServiceError(AppException):
    """The relational store rejected or failed a request."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(
            error_code=ErrorCode.DATABASE_ERROR,
            message=f"Data service failure during {operation}",
            status_code=502,
            details={"operation": operation, "reason": reason},
        )


class ProfileLoadError(AppException):
    """Loading the owner's profile failed."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_LOAD_FAILED,
            message="Failed to load profile data",
            status_code=500,
            details={"reason": reason},
        )
