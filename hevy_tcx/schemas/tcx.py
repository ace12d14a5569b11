"""Pydantic schemas for TCX serialization and export results."""

from enum import Enum

from pydantic import BaseModel, Field


class TcxDocument(BaseModel):
    """Serialized TCX document plus caller-visible reporting."""

    content: str
    sample_count: int = Field(..., ge=0)  # real samples only, boundary points excluded
    start_time: str  # ISO-8601 with milliseconds, also the Activity Id
    warnings: list[str] = Field(default_factory=list)


class TcxExport(BaseModel):
    """Ready-to-deliver TCX artifact."""

    filename: str
    content: str
    media_type: str
    sample_count: int
    start_time: str


class ExportStatus(str, Enum):
    OK = "ok"
    NO_DATA = "no_data"
    ERROR = "error"


class ExportReport(BaseModel):
    """Outcome of an export attempt as shown to the user."""

    status: ExportStatus
    message: str
    filename: str | None = None
    sample_count: int | None = None
