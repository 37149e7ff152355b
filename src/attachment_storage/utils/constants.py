"""Global constants used throughout the package.

This module centralizes error codes, defaults and environment variable names
shared by the storage adapter, the interpolator and the models.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================

ERROR_CODE_INTERPOLATION_FAILED = "INTERPOLATION_FAILED"
ERROR_CODE_UPLOADED_FILE_UNAVAILABLE = "UPLOADED_FILE_UNAVAILABLE"

# ============================================================================
# Attachment Defaults
# ============================================================================

DEFAULT_ACL: Final = "private"
DEFAULT_SCHEME: Final = "https"
DEFAULT_REGION: Final = "us-east-1"
DEFAULT_STYLE_NAME: Final = "original"
DEFAULT_PRESIGNED_URL_EXPIRY = 300  # seconds

ALLOWED_SCHEMES: Final[frozenset[str]] = frozenset({"http", "https"})

ALLOWED_ACLS: Final[frozenset[str]] = frozenset(
    {
        "private",
        "public-read",
        "public-read-write",
        "authenticated-read",
        "aws-exec-read",
        "bucket-owner-read",
        "bucket-owner-full-control",
    }
)

# ============================================================================
# Interpolation
# ============================================================================

ID_PARTITION_WIDTH = 9
ID_PARTITION_CHUNK = 3

# ============================================================================
# S3 Limits / Responses
# ============================================================================

MAX_DELETE_BATCH_SIZE = 1000
HTTP_NOT_FOUND_CODES: Final[frozenset[str]] = frozenset({"404", "NoSuchBucket", "NotFound"})
HTTP_FORBIDDEN_CODES: Final[frozenset[str]] = frozenset({"403", "Forbidden", "AccessDenied"})

# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_AWS_ENDPOINT_URL = "AWS_ENDPOINT_URL"
ENV_AWS_ACCESS_KEY_ID = "AWS_ACCESS_KEY_ID"
ENV_AWS_SECRET_ACCESS_KEY = "AWS_SECRET_ACCESS_KEY"
ENV_AWS_REGION = "AWS_REGION"
ENV_ATTACHMENT_S3_SCHEME = "ATTACHMENT_S3_SCHEME"
