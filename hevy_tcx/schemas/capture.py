"""Pydantic schemas for capture state and page location API."""

from pydantic import BaseModel, Field


class LocationUpdate(BaseModel):
    """Body for reporting the page location the user is viewing."""

    url: str = Field(..., min_length=1, max_length=2048)


class CaptureStatus(BaseModel):
    """Current capture slot and export control state."""

    captured: bool
    short_id: str | None = None
    location: str | None = None
    export_visible: bool
    export_label: str | None = None
