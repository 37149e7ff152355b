"""S3-backed implementation of AttachmentStorageRepository."""

import os
import posixpath

from aws_lambda_powertools import Logger

from attachment_storage.infrastructure.adapters.s3_adapter import (
    S3Adapter,
    S3AdapterProtocol,
)
from attachment_storage.interpolation.interpolator import (
    Interpolator,
    TemplateInterpolator,
)
from attachment_storage.models.attachment import AttachmentDescriptor, Style
from attachment_storage.models.sources import PathSource, SourceInput, UploadedSource
from attachment_storage.repositories.storage_repository import (
    AttachmentStorageRepository,
)
from attachment_storage.utils.constants import DEFAULT_PRESIGNED_URL_EXPIRY

logger = Logger(service="attachment-storage", UTC=True)


class S3AttachmentStorage(AttachmentStorageRepository):
    """Attachment storage backed by Amazon S3.

    One instance serves one attachment-processing operation (a save or a
    delete). S3 errors are not caught here and reach the caller unchanged.
    """

    def __init__(
        self,
        attachment: AttachmentDescriptor,
        *,
        interpolator: Interpolator | None = None,
        adapter: S3AdapterProtocol | None = None,
    ) -> None:
        """Create storage for ``attachment``.

        The S3 adapter is built from the attachment's credentials
        unless one is provided.
        """
        self._attachment = attachment
        self._interpolator = interpolator or TemplateInterpolator()
        self._s3 = adapter or S3Adapter.from_credentials(attachment.credentials)
        self._bucket_exists = False

    @property
    def attachment(self) -> AttachmentDescriptor:
        return self._attachment

    @property
    def bucket_exists(self) -> bool:
        return self._bucket_exists

    def resolve_url(self, style_name: str | None = None) -> str:
        """Return the public URL for a style of the attachment."""
        key = self.resolve_path(self._style_or_default(style_name))
        return self._s3.get_object_url(bucket=self._get_bucket(), key=key)

    def presigned_url(
        self,
        style_name: str | None = None,
        *,
        expires_in: int = DEFAULT_PRESIGNED_URL_EXPIRY,
    ) -> str:
        """Return a time-limited signed URL, for attachments with private ACLs."""
        key = self.resolve_path(self._style_or_default(style_name))

        logger.debug(
            "Generating pre-signed S3 URL",
            extra={"key": key, "expires_in": expires_in},
        )
        return self._s3.generate_presigned_url(
            bucket=self._get_bucket(),
            key=key,
            expires_in=expires_in,
        )

    def resolve_path(self, style_name: str) -> str:
        """Return the key a style is stored under within the bucket."""
        return self._interpolator.interpolate(
            self._attachment.path,
            self._attachment,
            style_name,
        )

    def reset(self) -> None:
        self.remove()

    def remove(self) -> None:
        """Delete every style of the attachment in a single batch request."""
        keys = self._get_keys()
        bucket = self._get_bucket()

        logger.debug(
            "Deleting attachment styles",
            extra={"bucket": bucket, "keys": keys},
        )
        self._s3.delete_objects(bucket=bucket, keys=keys)
        logger.info(
            "Attachment styles deleted",
            extra={"bucket": bucket, "count": len(keys)},
        )

    def move(self, source: SourceInput, style: Style) -> None:
        """Store a file as ``style``.

        The source is an uploaded file handle, a PathSource, or a plain
        path of a file on disk (e.g. a resized image). Unless ``keep_old_files`` is set,
        objects already stored under the style's directory are purged first.
        """
        self._clean_directory(style.name)

        key = self.resolve_path(style.name)
        source = self._as_source(source)
        source_file = source.real_path()
        bucket = self._get_bucket()

        logger.debug(
            "Uploading attachment style",
            extra={
                "bucket": bucket,
                "key": key,
                "style": style.name,
                "source_kind": source.kind,
            },
        )
        self._s3.put_object(
            bucket=bucket,
            key=key,
            source_file=source_file,
            acl=self._attachment.acl,
        )
        logger.info("Attachment style uploaded", extra={"bucket": bucket, "key": key})

    def build_bucket(self, bucket_name: str) -> None:
        """Create the bucket unless it already exists."""
        if not self._s3.bucket_exists(bucket=bucket_name, accept_forbidden=True):
            logger.info(
                "Creating bucket",
                extra={"bucket": bucket_name, "region": self._attachment.region},
            )
            self._s3.create_bucket(
                bucket=bucket_name,
                acl=self._attachment.acl,
                region=self._attachment.region,
            )

        self._bucket_exists = True

    def _style_or_default(self, style_name: str | None) -> str:
        if style_name is None:
            return self._attachment.default_style
        return style_name

    @staticmethod
    def _as_source(source: SourceInput) -> UploadedSource | PathSource:
        """Wrap plain paths (e.g. a resized image on disk) in a PathSource."""
        if isinstance(source, (UploadedSource, PathSource)):
            return source
        return PathSource(path=os.fspath(source))

    def _get_keys(self) -> list[str]:
        """Return one key per configured style."""
        return [self.resolve_path(name) for name in self._attachment.style_names]

    def _clean_directory(self, style_name: str) -> None:
        if self._attachment.keep_old_files:
            return

        directory = posixpath.dirname(self.resolve_path(style_name))
        if not directory:
            # An empty prefix would match the whole bucket.
            return

        # Trailing slash keeps sibling directories (42/ vs 4/) out of the purge.
        self._empty_directory(directory.rstrip("/") + "/")

    def _empty_directory(self, prefix: str) -> None:
        bucket = self._get_bucket()
        deleted = self._s3.delete_matching_objects(bucket=bucket, prefix=prefix)
        logger.debug(
            "Emptied attachment directory",
            extra={"bucket": bucket, "prefix": prefix, "deleted": deleted},
        )

    def _get_bucket(self) -> str:
        """Return the bucket name, building the bucket on first use."""
        bucket_name = self._attachment.bucket
        if not self._bucket_exists:
            self.build_bucket(bucket_name)

        return bucket_name
