"""Expand naming templates into concrete S3 object keys."""

import posixpath
import string
from collections.abc import Mapping
from typing import Any, Protocol

from aws_lambda_powertools import Logger

from attachment_storage.models.attachment import AttachmentDescriptor
from attachment_storage.models.errors import InterpolationError
from attachment_storage.utils.constants import ID_PARTITION_CHUNK, ID_PARTITION_WIDTH

logger = Logger(service="attachment-interpolator", UTC=True)


class Interpolator(Protocol):
    """Turns a template, an attachment and a style name into a key."""

    def interpolate(
        self,
        template: str,
        attachment: AttachmentDescriptor,
        style_name: str,
    ) -> str: ...


class TemplateInterpolator:
    """Interpolator based on ``str.format`` placeholders.

    Available placeholders:
    - ``{attachment}``: attachment name
    - ``{bucket}``: bucket name
    - ``{style}``: style name
    - any key of ``attachment.attributes`` (``{id}``, ``{file_name}``, ...)
    - ``{id_partition}``: id zero padded and split, e.g. ``000/000/042``
    - ``{basename}`` / ``{extension}``: derived from ``file_name``

    Example:
        "{bucket}/{style}/{id}.jpg" -> "photos/thumb/42.jpg"
    """

    _formatter = string.Formatter()

    def interpolate(
        self,
        template: str,
        attachment: AttachmentDescriptor,
        style_name: str,
    ) -> str:
        values = self._values(attachment, style_name)

        try:
            return self._formatter.vformat(template, (), values)
        except (KeyError, IndexError, AttributeError) as exc:
            logger.debug(
                "Template placeholder could not be resolved",
                extra={"template": template, "attachment": attachment.name},
            )
            raise InterpolationError(
                message=f"Unknown placeholder {exc} in path template",
                details={"template": template, "style": style_name},
            ) from exc
        except ValueError as exc:
            raise InterpolationError(
                message="Malformed path template",
                details={"template": template, "style": style_name},
            ) from exc

    def _values(self, attachment: AttachmentDescriptor, style_name: str) -> dict[str, Any]:
        attributes: Mapping[str, Any] = attachment.attributes
        values: dict[str, Any] = dict(attributes)

        if "id" in attributes:
            values["id_partition"] = self.id_partition(attributes["id"])

        file_name = attributes.get("file_name")
        if file_name:
            basename, extension = posixpath.splitext(str(file_name))
            values["basename"] = basename
            values["extension"] = extension.lstrip(".")

        values["attachment"] = attachment.name
        values["bucket"] = attachment.bucket
        values["style"] = style_name
        return values

    @staticmethod
    def id_partition(model_id: Any) -> str:
        """Split an id into directory chunks: 42 -> '000/000/042'."""
        padded = str(model_id).zfill(ID_PARTITION_WIDTH)
        return "/".join(
            padded[i : i + ID_PARTITION_CHUNK]
            for i in range(0, len(padded), ID_PARTITION_CHUNK)
        )
