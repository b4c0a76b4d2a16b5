from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class RenderReport(BaseModel):
    """Result of `slotgen render --report`."""
    model_config = ConfigDict(
        extra="forbid",
        populate_by_name=True,
    )
    format_version: Literal[1] = Field(1, alias="formatVersion")
    tool_version: str = Field(..., alias="toolVersion")
    page_type: str = Field(..., alias="pageType")
    language: str
    template_length: int = Field(..., alias="templateLength", ge=0)
    rendered: str
    rendered_length: int = Field(..., alias="renderedLength", ge=0)
    warnings: int = Field(0, ge=0)
