"""File sources accepted by storage backends when moving a file into place.

A file either arrives as an uploaded-file handle from the request layer or
as a plain path on disk (e.g. the output of a resize step).
"""

import os
from typing import Annotated, Literal, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from attachment_storage.models.errors import UploadedFileError


@runtime_checkable
class UploadedFileHandle(Protocol):
    """Uploaded file held in a temporary location by the request layer."""

    def get_real_path(self) -> str | None: ...


class UploadedSource(BaseModel):
    """An in-flight uploaded file."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: Literal["uploaded"] = "uploaded"
    handle: UploadedFileHandle

    def real_path(self) -> str:
        path = self.handle.get_real_path()
        if not path:
            raise UploadedFileError(
                message="Uploaded file is no longer available on disk",
                details={"handle": repr(self.handle)},
            )
        return str(path)


class PathSource(BaseModel):
    """A file already sitting on the local filesystem."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["path"] = "path"
    path: StrictStr = Field(..., min_length=1)

    def real_path(self) -> str:
        return self.path


FileSource = Annotated[UploadedSource | PathSource, Field(discriminator="kind")]

SourceInput = UploadedSource | PathSource | str | os.PathLike[str]
