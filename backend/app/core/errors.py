"""Domain error types.

Services raise these and never deal with HTTP. The API layer maps each
``ErrorKind`` to a status code in ``app.api.errors``.
"""

import enum


class ErrorKind(str, enum.Enum):
    """Error taxonomy shared by services and the API boundary."""

    NOT_FOUND = "not_found"
    EXPIRED = "expired"
    DOWNLOAD_LIMIT_REACHED = "download_limit_reached"
    BAD_PASSWORD = "bad_password"
    QUOTA_EXCEEDED = "quota_exceeded"
    FILE_TOO_LARGE = "file_too_large"
    DUPLICATE_CONTENT = "duplicate_content"
    CONFLICT = "conflict"
    VALIDATION_ERROR = "validation_error"
    AUTH_INVALID = "auth_invalid"
    STORAGE_BACKEND_FAILURE = "storage_backend_failure"
    RATE_LIMITED = "rate_limited"


class AppError(Exception):
    """Base class for recoverable domain errors."""

    kind: ErrorKind = ErrorKind.VALIDATION_ERROR
    default_message = "Request could not be processed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(AppError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Not found"


class ShareExpiredError(AppError):
    kind = ErrorKind.EXPIRED
    default_message = "Share link has expired"


class DownloadLimitReachedError(AppError):
    kind = ErrorKind.DOWNLOAD_LIMIT_REACHED
    default_message = "Download limit reached"


class BadPasswordError(AppError):
    kind = ErrorKind.BAD_PASSWORD
    default_message = "Invalid password"


class QuotaExceededError(AppError):
    kind = ErrorKind.QUOTA_EXCEEDED
    default_message = "Storage quota exceeded"


class FileTooLargeError(AppError):
    kind = ErrorKind.FILE_TOO_LARGE
    default_message = "File exceeds the maximum upload size"


class DuplicateContentError(AppError):
    kind = ErrorKind.DUPLICATE_CONTENT
    default_message = "File already exists"


class ConflictError(AppError):
    kind = ErrorKind.CONFLICT
    default_message = "Resource already exists"


class InvalidInputError(AppError):
    kind = ErrorKind.VALIDATION_ERROR
    default_message = "Invalid input"


class AuthInvalidError(AppError):
    kind = ErrorKind.AUTH_INVALID
    default_message = "Invalid or missing credentials"


class StorageBackendError(AppError):
    """Blob store failure. Fatal for the current request, never retried."""

    kind = ErrorKind.STORAGE_BACKEND_FAILURE
    default_message = "Storage backend unavailable"


class RateLimitedError(AppError):
    kind = ErrorKind.RATE_LIMITED
    default_message = "Too many requests, please try again later"
