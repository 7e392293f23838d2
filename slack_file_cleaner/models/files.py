"""
Models for the file listing and file deletion endpoints.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class FileRecord(BaseModel):
    """
    Metadata for a single remote file, as returned by the listing endpoint.
    Only the identifier and creation time are used; everything else the
    service sends along is kept as opaque extra data.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    id: str = Field(min_length=1, strict=True)
    "The service's identifier for the file."

    created: int = Field(ge=0, strict=True)
    "Creation time of the file, in unix seconds."

    name: Optional[str] = None
    title: Optional[str] = None
    size: Optional[int] = None

    @property
    def created_ms(self) -> int:
        return self.created * 1000


class PageInfo(BaseModel):
    """
    The paging envelope of a listing response.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    page: int = Field(ge=0)
    "The page number the service reports for this response."

    pages: int = Field(ge=0)
    "The total number of pages at fetch time."


class FilesListResponse(BaseModel):
    """
    A single page of the file listing.
    """

    model_config = ConfigDict(extra="allow")

    ok: bool = True
    error: Optional[str] = None

    files: list[FileRecord] = Field(default_factory=list)
    paging: PageInfo


class FileDeleteResponse(BaseModel):
    """
    Envelope returned by the delete endpoint.
    """

    model_config = ConfigDict(extra="allow")

    ok: bool = True
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.ok and self.error is None
