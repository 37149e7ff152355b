"""
Unit tests for attachment_storage.models.errors
"""

from typing import cast

from attachment_storage.models.errors import (
    AttachmentStorageError,
    InterpolationError,
    UploadedFileError,
)


class TestAttachmentStorageError:
    def test_base_error(self) -> None:
        err = AttachmentStorageError(
            message="Something went wrong",
            error_code="TEST_ERROR",
            details={"foo": "bar"},
        )

        assert isinstance(err, Exception)
        assert err.message == "Something went wrong"
        assert err.error_code == "TEST_ERROR"
        assert err.details == {"foo": "bar"}
        assert str(err) == "Something went wrong"


class TestInterpolationError:
    def test_interpolation_error_defaults(self) -> None:
        err = InterpolationError(message="Unknown placeholder")
        typed = cast(InterpolationError, err)

        assert isinstance(typed, AttachmentStorageError)
        assert typed.error_code == "INTERPOLATION_FAILED"
        assert typed.details == {}

    def test_interpolation_error_with_details(self) -> None:
        err = InterpolationError(
            message="Unknown placeholder",
            details={"template": "{slug}"},
        )

        assert err.details == {"template": "{slug}"}


class TestUploadedFileError:
    def test_uploaded_file_error(self) -> None:
        err = UploadedFileError(message="Uploaded file is gone")
        typed = cast(UploadedFileError, err)

        assert isinstance(typed, AttachmentStorageError)
        assert typed.error_code == "UPLOADED_FILE_UNAVAILABLE"
