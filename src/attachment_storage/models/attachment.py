"""Attachment descriptor models."""

import os
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator

from attachment_storage.utils.constants import (
    ALLOWED_ACLS,
    ALLOWED_SCHEMES,
    DEFAULT_ACL,
    DEFAULT_REGION,
    DEFAULT_SCHEME,
    DEFAULT_STYLE_NAME,
    ENV_ATTACHMENT_S3_SCHEME,
    ENV_AWS_ACCESS_KEY_ID,
    ENV_AWS_REGION,
    ENV_AWS_SECRET_ACCESS_KEY,
)


class Style(BaseModel):
    """A named variant of an attached file (e.g. a thumbnail)."""

    model_config = ConfigDict(frozen=True)

    name: StrictStr = Field(..., min_length=1, description="Style name, e.g. 'thumb'")
    dimensions: StrictStr | None = Field(
        None, description="Resize geometry used by image processing, e.g. '100x100#'"
    )


class S3Credentials(BaseModel):
    """Credentials and connection options for the S3 client."""

    model_config = ConfigDict(frozen=True)

    key: StrictStr | None = Field(None, description="AWS access key id")
    secret: StrictStr | None = Field(None, description="AWS secret access key")
    region: StrictStr = Field(DEFAULT_REGION, description="Bucket region")
    scheme: StrictStr = Field(DEFAULT_SCHEME, description="URL scheme: http or https")

    @field_validator("scheme")
    @classmethod
    def validate_scheme(cls, value: str) -> str:
        value = value.lower()
        if value not in ALLOWED_SCHEMES:
            raise ValueError(f"Invalid scheme '{value}', must be one of {sorted(ALLOWED_SCHEMES)}")
        return value

    @classmethod
    def from_env(cls) -> "S3Credentials":
        """Build credentials from the standard AWS environment variables."""
        return cls(
            key=os.getenv(ENV_AWS_ACCESS_KEY_ID),
            secret=os.getenv(ENV_AWS_SECRET_ACCESS_KEY),
            region=os.getenv(ENV_AWS_REGION) or DEFAULT_REGION,
            scheme=os.getenv(ENV_ATTACHMENT_S3_SCHEME) or DEFAULT_SCHEME,
        )


class AttachmentDescriptor(BaseModel):
    """Read-only configuration of one attached file.

    Owned by the attachment layer. Storage backends keep a reference to it
    but the descriptor never points back at its storage.
    """

    model_config = ConfigDict(frozen=True)

    name: StrictStr = Field(..., description="Attachment (model field) name")
    bucket: StrictStr = Field(..., min_length=3, description="Destination S3 bucket")
    path: StrictStr = Field(..., min_length=1, description="Naming template for object keys")
    credentials: S3Credentials = Field(default_factory=S3Credentials)
    acl: StrictStr = Field(DEFAULT_ACL, description="Canned ACL for buckets and objects")
    styles: tuple[Style, ...] = Field(
        default=(Style(name=DEFAULT_STYLE_NAME),),
        description="Configured style variants",
    )
    default_style: StrictStr = Field(DEFAULT_STYLE_NAME, description="Style used when none is given")
    keep_old_files: StrictBool = Field(False, description="Retain prior uploads on replace")
    attributes: dict[str, Any] = Field(
        default_factory=dict,
        description="Model attributes available to interpolation (id, file_name, ...)",
    )

    @field_validator("acl")
    @classmethod
    def validate_acl(cls, value: str) -> str:
        if value not in ALLOWED_ACLS:
            raise ValueError(f"Unsupported ACL '{value}'")
        return value

    @field_validator("styles")
    @classmethod
    def validate_styles(cls, value: tuple[Style, ...]) -> tuple[Style, ...]:
        if not value:
            raise ValueError("At least one style is required")

        names = [style.name for style in value]
        if len(names) != len(set(names)):
            raise ValueError("Style names must be unique")
        return value

    @property
    def region(self) -> str:
        return self.credentials.region

    @property
    def style_names(self) -> list[str]:
        return [style.name for style in self.styles]
