"""Document-operation result types."""

from dataclasses import dataclass
from typing import Optional


UPLOAD_CREATED = "created"
UPLOAD_MERGED = "merged"
UPLOAD_PLACEMENT_FAILED = "placement_failed"


@dataclass(frozen=True)
class PlacementResult:
    """
    Outcome of storing the file itself; exactly one of file_url and error is set.
    """
    file_url: Optional[str] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.file_url is not None


@dataclass(frozen=True)
class UploadResult:
    container_url: str
    status: str
    file_url: Optional[str] = None
    metadata_url: Optional[str] = None
    error: Optional[Exception] = None


@dataclass(frozen=True)
class DocumentRecord:
    """
    Metadata stored for one uploaded file.
    """
    url: str
    name: Optional[str]
    identifier: Optional[str]
    end_date: Optional[str]
    description: Optional[str]
