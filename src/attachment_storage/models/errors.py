"""Custom exception classes for the attachment storage package.

These cover failures raised by the package itself. Errors coming from the
S3 client are never wrapped and reach the caller unchanged.
"""

from typing import Any

from attachment_storage.utils.constants import (
    ERROR_CODE_INTERPOLATION_FAILED,
    ERROR_CODE_UPLOADED_FILE_UNAVAILABLE,
)


class AttachmentStorageError(Exception):
    """
    Base exception for all attachment storage errors.

    Callers must explicitly provide a message and error code.
    Optional contextual information can be supplied via `details`.
    """

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}

        super().__init__(self.message)


class InterpolationError(AttachmentStorageError):
    """Raised when a naming template cannot be expanded into an object key."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_INTERPOLATION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class UploadedFileError(AttachmentStorageError):
    """Raised when an uploaded file handle has no location on disk."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_UPLOADED_FILE_UNAVAILABLE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )
