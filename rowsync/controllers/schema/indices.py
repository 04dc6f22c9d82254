"""Response schemas for the /indices admin routes."""

from typing import Any

from pydantic import BaseModel, Field


class LastIndexedResponse(BaseModel):
    """GET /indices/{index}/last-indexed response body."""

    index: str = Field(..., description="Index name or pattern searched")
    field: str = Field(..., description="Cursor field sorted on")
    value: Any = Field(..., description="Highest value found, or 0 when nothing is indexed")


class DeleteIndexResponse(BaseModel):
    """DELETE /indices/{index} response body."""

    index: str = Field(..., description="Index name")
    acknowledged: bool = Field(..., description="False when the index did not exist")
