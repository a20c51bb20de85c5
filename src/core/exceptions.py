"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    MALFORMED_TOKEN = "MALFORMED_TOKEN"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"

    # Authorization errors (403)
    FORBIDDEN = "FORBIDDEN"

    # Not found errors (404)
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
    POST_NOT_FOUND = "POST_NOT_FOUND"
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    LIKE_NOT_FOUND = "LIKE_NOT_FOUND"
    COMMENT_NOT_FOUND = "COMMENT_NOT_FOUND"
    EXPERIENCE_NOT_FOUND = "EXPERIENCE_NOT_FOUND"
    EDUCATION_NOT_FOUND = "EDUCATION_NOT_FOUND"

    # Validation errors (422)
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Conflict errors (409)
    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"
    CONCURRENT_MODIFICATION = "CONCURRENT_MODIFICATION"

    # Server errors (5xx)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"


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


class MalformedTokenError(AuthenticationError):
    """Token is not a structurally valid identity token."""

    def __init__(self) -> None:
        super().__init__("Malformed token", ErrorCode.MALFORMED_TOKEN)


class InvalidSignatureError(AuthenticationError):
    """Token signature does not verify against the signing secret."""

    def __init__(self) -> None:
        super().__init__("Invalid token", ErrorCode.INVALID_TOKEN)


class TokenExpiredError(AuthenticationError):
    """Token is past its expiry."""

    def __init__(self) -> None:
        super().__init__("Token has expired", ErrorCode.TOKEN_EXPIRED)


class InvalidCredentialsError(AuthenticationError):
    """Email/password pair does not match an account."""

    def __init__(self) -> None:
        super().__init__("Invalid credentials", ErrorCode.INVALID_CREDENTIALS)


class AuthorizationError(AppException):
    """Authorization failed."""

    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(
            error_code=ErrorCode.FORBIDDEN,
            message=message,
            status_code=403,
        )


class NotFoundError(AppException):
    """Base class for missing entities.

    Malformed identifiers are reported through the same error so callers
    cannot tell "bad id" from "no such entity".
    """

    error_code: ErrorCode = ErrorCode.ACCOUNT_NOT_FOUND
    label: str = "Entity"
    id_field: str = "id"

    def __init__(self, entity_id: str = "") -> None:
        super().__init__(
            error_code=self.error_code,
            message=f"{self.label} not found",
            status_code=404,
            details={self.id_field: entity_id} if entity_id else None,
        )


class AccountNotFoundError(NotFoundError):
    """Account not found."""

    error_code = ErrorCode.ACCOUNT_NOT_FOUND
    label = "Account"
    id_field = "account_id"


class PostNotFoundError(NotFoundError):
    """Post not found."""

    error_code = ErrorCode.POST_NOT_FOUND
    label = "Post"
    id_field = "post_id"


class ProfileNotFoundError(NotFoundError):
    """Profile not found."""

    error_code = ErrorCode.PROFILE_NOT_FOUND
    label = "Profile"
    id_field = "user_id"


class LikeNotFoundError(NotFoundError):
    """Post has not been liked by the actor."""

    error_code = ErrorCode.LIKE_NOT_FOUND
    label = "Like"
    id_field = "post_id"


class CommentNotFoundError(NotFoundError):
    """Comment not found."""

    error_code = ErrorCode.COMMENT_NOT_FOUND
    label = "Comment"
    id_field = "comment_id"


class ExperienceNotFoundError(NotFoundError):
    """Experience entry not found."""

    error_code = ErrorCode.EXPERIENCE_NOT_FOUND
    label = "Experience entry"
    id_field = "experience_id"


class EducationNotFoundError(NotFoundError):
    """Education entry not found."""

    error_code = ErrorCode.EDUCATION_NOT_FOUND
    label = "Education entry"
    id_field = "education_id"


class DuplicateEntryError(AppException):
    """A uniqueness rule was violated (email, like, profile)."""

    def __init__(self, message: str, details: Any | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.DUPLICATE_ENTRY,
            message=message,
            status_code=409,
            details=details,
        )


class ConcurrentModificationError(AppException):
    """Nested collection write kept losing to concurrent writers."""

    def __init__(self, collection: str) -> None:
        super().__init__(
            error_code=ErrorCode.CONCURRENT_MODIFICATION,
            message="The resource was modified concurrently, please retry",
            status_code=409,
            details={"collection": collection},
        )


class ServiceUnavailableError(AppException):
    """The backing store failed or timed out."""

    def __init__(self, message: str = "Service temporarily unavailable") -> None:
        super().__init__(
            error_code=ErrorCode.SERVICE_UNAVAILABLE,
            message=message,
            status_code=503,
        )
