"""Thin adapter for interacting with Amazon S3."""

from collections.abc import Iterator, Mapping, Sequence
import os
from typing import Any, Protocol

import boto3
from botocore import UNSIGNED
from botocore.config import Config
from botocore.exceptions import ClientError

from attachment_storage.models.attachment import S3Credentials
from attachment_storage.utils.constants import (
    DEFAULT_REGION,
    ENV_AWS_ENDPOINT_URL,
    HTTP_FORBIDDEN_CODES,
    HTTP_NOT_FOUND_CODES,
    MAX_DELETE_BATCH_SIZE,
)


class _Boto3S3Client(Protocol):
    """Internal typing for boto3 S3 client (AWS-facing only)."""

    def upload_file(
        self,
        Filename: str,
        Bucket: str,
        Key: str,
        ExtraArgs: Mapping[str, Any] | None = None,
    ) -> None: ...

    def delete_objects(
        self,
        *,
        Bucket: str,
        Delete: Mapping[str, Any],
    ) -> Mapping[str, Any]: ...

    def get_paginator(self, operation_name: str) -> Any: ...

    def head_bucket(self, *, Bucket: str) -> Mapping[str, Any]: ...

    def create_bucket(self, **kwargs: Any) -> Mapping[str, Any]: ...

    def generate_presigned_url(
        self,
        ClientMethod: str,
        Params: Mapping[str, Any],
        ExpiresIn: int = 3600,
    ) -> str: ...


class S3AdapterProtocol(Protocol):
    """Object storage client contract used by the attachment storage."""

    def get_object_url(self, *, bucket: str, key: str) -> str: ...

    def generate_presigned_url(self, *, bucket: str, key: str, expires_in: int) -> str: ...

    def delete_objects(self, *, bucket: str, keys: Sequence[str]) -> None: ...

    def delete_matching_objects(self, *, bucket: str, prefix: str) -> int: ...

    def put_object(self, *, bucket: str, key: str, source_file: str, acl: str) -> None: ...

    def bucket_exists(self, *, bucket: str, accept_forbidden: bool = True) -> bool: ...

    def create_bucket(self, *, bucket: str, acl: str, region: str) -> None: ...


class S3Adapter:
    """Low-level S3 operations (mechanical, no error handling).

    This adapter:
    - Wraps boto3 S3 client
    - Does NOT handle errors (lets them bubble up)
    - Callers decide whether and how to recover
    """

    def __init__(
        self,
        *,
        key: str | None = None,
        secret: str | None = None,
        region: str = DEFAULT_REGION,
        scheme: str = "https",
    ) -> None:
        """Create S3 clients from explicit credentials.

        Missing credentials fall back to boto3's default credential chain.
        ``AWS_ENDPOINT_URL`` points the clients at LocalStack or another
        S3-compatible store.
        """
        options: dict[str, Any] = {
            "region_name": region,
            "endpoint_url": os.getenv(ENV_AWS_ENDPOINT_URL),
            "use_ssl": scheme == "https",
            "aws_access_key_id": key,
            "aws_secret_access_key": secret,
        }

        self._client: _Boto3S3Client = boto3.client("s3", **options)
        # Public URLs are built without a signature.
        self._url_client: _Boto3S3Client = boto3.client(
            "s3",
            config=Config(signature_version=UNSIGNED),
            **options,
        )

    @classmethod
    def from_credentials(cls, credentials: S3Credentials) -> "S3Adapter":
        return cls(
            key=credentials.key,
            secret=credentials.secret,
            region=credentials.region,
            scheme=credentials.scheme,
        )

    def get_object_url(self, *, bucket: str, key: str) -> str:
        """Return the plain (unsigned) URL of an object. No network call."""
        url = self._url_client.generate_presigned_url(
            "get_object",
            Params={"Bucket": bucket, "Key": key},
        )
        return url.split("?", 1)[0]

    def generate_presigned_url(self, *, bucket: str, key: str, expires_in: int) -> str:
        """Generate a pre-signed S3 GET URL."""
        return self._client.generate_presigned_url(
            "get_object",
            Params={"Bucket": bucket, "Key": key},
            ExpiresIn=expires_in,
        )

    def delete_objects(self, *, bucket: str, keys: Sequence[str]) -> None:
        """Delete the given keys in one batch request.
        Raises boto3 exceptions, including a ClientError for keys S3
        reports as not deleted.
        """
        response = self._client.delete_objects(
            Bucket=bucket,
            Delete={"Objects": [{"Key": key} for key in keys]},
        )

        # Per-key failures come back in a 200 response.
        errors = response.get("Errors") or []
        if errors:
            first = errors[0]
            raise ClientError(
                {
                    "Error": {
                        "Code": first.get("Code", "DeleteObjectsFailed"),
                        "Message": first.get("Message", "Failed to delete objects"),
                        "Key": first.get("Key"),
                    },
                    "FailedKeys": [error.get("Key") for error in errors],
                },
                "DeleteObjects",
            )

    def delete_matching_objects(self, *, bucket: str, prefix: str) -> int:
        """Delete every object whose key starts with ``prefix``.

        Deletes page by page as the listing is paginated.
        Returns the number of keys deleted.
        """
        deleted = 0
        for keys in self._iter_key_pages(bucket=bucket, prefix=prefix):
            for start in range(0, len(keys), MAX_DELETE_BATCH_SIZE):
                batch = keys[start : start + MAX_DELETE_BATCH_SIZE]
                self.delete_objects(bucket=bucket, keys=batch)
                deleted += len(batch)
        return deleted

    def put_object(self, *, bucket: str, key: str, source_file: str, acl: str) -> None:
        """Upload a local file to S3.

        Uses boto3's managed transfer, which switches to multipart
        uploads for large files.
        Raises boto3 exceptions.
        """
        self._client.upload_file(
            source_file,
            bucket,
            key,
            ExtraArgs={"ACL": acl},
        )

    def bucket_exists(self, *, bucket: str, accept_forbidden: bool = True) -> bool:
        """Return whether ``bucket`` exists.

        With ``accept_forbidden`` a 403 counts as existing: the bucket is
        there but owned by another account or not listable by us.
        """
        try:
            self._client.head_bucket(Bucket=bucket)
        except ClientError as exc:
            code = str(exc.response.get("Error", {}).get("Code", ""))
            if code in HTTP_NOT_FOUND_CODES:
                return False
            if code in HTTP_FORBIDDEN_CODES:
                return accept_forbidden
            raise
        return True

    def create_bucket(self, *, bucket: str, acl: str, region: str) -> None:
        """Create a bucket in ``region``.
        Raises boto3 exceptions.
        """
        params: dict[str, Any] = {"Bucket": bucket, "ACL": acl}

        # us-east-1 rejects an explicit location constraint.
        if region and region != DEFAULT_REGION:
            params["CreateBucketConfiguration"] = {"LocationConstraint": region}

        self._client.create_bucket(**params)

    def _iter_key_pages(self, *, bucket: str, prefix: str) -> Iterator[list[str]]:
        paginator = self._client.get_paginator("list_objects_v2")
        for page in paginator.paginate(Bucket=bucket, Prefix=prefix):
            keys = [obj["Key"] for obj in page.get("Contents", [])]
            if keys:
                yield keys
