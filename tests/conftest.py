"""
Pytest configuration and fixtures for attachment storage tests.
Provides AWS mocking, S3 fixtures with proper cleanup and attachment factories.
"""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws

from attachment_storage.models.attachment import (
    AttachmentDescriptor,
    S3Credentials,
    Style,
)

TEST_REGION = "us-east-1"
TEST_BUCKET = "photos"


@pytest.fixture(autouse=True)
def aws_env(monkeypatch):
    """Fake credentials so nothing can reach a real AWS account."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_REGION", TEST_REGION)
    monkeypatch.setenv("AWS_DEFAULT_REGION", TEST_REGION)
    monkeypatch.delenv("AWS_ENDPOINT_URL", raising=False)
    monkeypatch.delenv("ATTACHMENT_S3_SCHEME", raising=False)


@pytest.fixture(scope="function")
def aws_mock():
    with mock_aws():
        yield


@pytest.fixture(scope="function")
def s3_client(aws_mock):
    """S3 client for bucket operations."""
    return boto3.client("s3", region_name=TEST_REGION)


def _cleanup_s3_objects(s3_client, bucket_name):
    """Helper to delete all objects from S3 bucket efficiently."""
    try:
        paginator = s3_client.get_paginator("list_objects_v2")
        for page in paginator.paginate(Bucket=bucket_name):
            objects = page.get("Contents", [])
            if objects:
                delete_keys = [{"Key": obj["Key"]} for obj in objects]
                s3_client.delete_objects(
                    Bucket=bucket_name, Delete={"Objects": delete_keys}
                )
    except ClientError as e:
        if e.response["Error"]["Code"] != "NoSuchBucket":
            raise


@pytest.fixture(scope="function")
def s3_bucket(s3_client):
    """
    Create and manage S3 bucket for testing.

    Cleanup Strategy:
    - Objects are deleted after each test (teardown)
    - Bucket is NOT deleted (moto cleans up on context exit)
    """
    try:
        s3_client.head_bucket(Bucket=TEST_BUCKET)
    except ClientError:
        s3_client.create_bucket(Bucket=TEST_BUCKET)

    yield s3_client

    _cleanup_s3_objects(s3_client, TEST_BUCKET)


@pytest.fixture
def s3_put_object(s3_client) -> Callable[..., dict[str, Any]]:
    """
    Helper to upload an object to S3.

    Usage:
        s3_put_object("photos/thumb/42.jpg", b"bytes")
    """

    def _put(key: str, body: bytes = b"data", bucket: str = TEST_BUCKET):
        return s3_client.put_object(Bucket=bucket, Key=key, Body=body)

    return _put


@pytest.fixture
def s3_get_object(s3_client) -> Callable[..., bytes]:
    """
    Helper to get an object's content from S3.

    Usage:
        content = s3_get_object("photos/thumb/42.jpg")
    """

    def _get(key: str, bucket: str = TEST_BUCKET) -> bytes:
        response: dict[str, Any] = s3_client.get_object(Bucket=bucket, Key=key)
        data: bytes = response["Body"].read()
        return data

    return _get


@pytest.fixture
def s3_list_keys(s3_client) -> Callable[..., list[str]]:
    """
    Helper to list every key in a bucket, sorted.

    Usage:
        keys = s3_list_keys()
    """

    def _list(bucket: str = TEST_BUCKET, prefix: str = "") -> list[str]:
        keys: list[str] = []
        paginator = s3_client.get_paginator("list_objects_v2")
        for page in paginator.paginate(Bucket=bucket, Prefix=prefix):
            keys.extend(obj["Key"] for obj in page.get("Contents", []))
        return sorted(keys)

    return _list


@pytest.fixture
def make_attachment() -> Callable[..., AttachmentDescriptor]:
    """
    Factory for attachment descriptors with test defaults.

    Usage:
        attachment = make_attachment(keep_old_files=True)
    """

    def _make(**overrides: Any) -> AttachmentDescriptor:
        values: dict[str, Any] = {
            "name": "avatar",
            "bucket": TEST_BUCKET,
            "path": "{bucket}/{style}/{id}.jpg",
            "credentials": S3Credentials(
                key="testing",
                secret="testing",
                region=TEST_REGION,
            ),
            "styles": [Style(name="original"), Style(name="thumb", dimensions="100x100")],
            "attributes": {"id": 42, "file_name": "me.jpg"},
        }
        values.update(overrides)
        return AttachmentDescriptor(**values)

    return _make


@pytest.fixture
def attachment(make_attachment) -> AttachmentDescriptor:
    """Default descriptor: bucket 'photos', styles original/thumb, id 42."""
    return make_attachment()


@pytest.fixture
def local_file(tmp_path) -> Callable[..., Path]:
    """
    Helper to write a file on disk for upload.

    Usage:
        path = local_file(b"bytes", name="resized.jpg")
    """

    def _write(content: bytes = b"image-bytes", name: str = "upload.jpg") -> Path:
        path = tmp_path / name
        path.write_bytes(content)
        return path

    return _write


class FakeUploadedFile:
    """Uploaded file handle sitting in a temporary location."""

    def __init__(self, path: str | Path | None) -> None:
        self._path = path

    def get_real_path(self) -> str | None:
        return str(self._path) if self._path else None


@pytest.fixture
def uploaded_file() -> Callable[..., FakeUploadedFile]:
    """Factory for uploaded file handles."""

    def _make(path: str | Path | None) -> FakeUploadedFile:
        return FakeUploadedFile(path)

    return _make
