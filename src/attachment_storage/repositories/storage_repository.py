"""Abstract contract for attachment file storage."""

from abc import ABC, abstractmethod

from attachment_storage.models.attachment import Style
from attachment_storage.models.sources import SourceInput


class AttachmentStorageRepository(ABC):
    """Contract for storing the style variants of one attachment.

    Implementations could be S3, GCS, local disk, etc.
    The attachment layer depends on this interface, not the implementation.
    """

    @abstractmethod
    def resolve_url(self, style_name: str | None = None) -> str:
        """Return the URL for a style of the attachment.

        Args:
            style_name: Style to address; the default style when omitted

        Returns:
            Publicly addressable URL of the stored variant
        """

    @abstractmethod
    def resolve_path(self, style_name: str) -> str:
        """Return the key the style is stored under.

        Args:
            style_name: Style to address

        Returns:
            Storage key (path) for the style
        """

    @abstractmethod
    def reset(self) -> None:
        """Clear the attachment, removing every stored style."""

    @abstractmethod
    def remove(self) -> None:
        """Delete the stored file of every configured style."""

    @abstractmethod
    def move(self, source: SourceInput, style: Style) -> None:
        """Move a file to the storage location of ``style``.

        Args:
            source: Uploaded file handle, PathSource or a plain path on disk
            style: Style the file is stored as
        """
