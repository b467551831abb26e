"""Pydantic models for diffview API requests and responses."""

from typing import Dict, List, Literal

from pydantic import BaseModel, Field, field_validator


class RenderRequest(BaseModel):
    """Request model for the render endpoint."""

    diff: str = Field(
        ...,
        description="Unified diff text",
        examples=["diff --git a/x b/x\n--- a/x\n+++ b/x\n@@ -1 +1 @@\n-a\n+b\n"],
    )
    format: str = Field(
        "html",
        description="Output format: html or json",
    )
    style: Literal["line", "side"] = Field(
        "line",
        description="HTML layout: line-by-line or side-by-side",
    )
    summary: Literal["closed", "open", "hidden"] = Field(
        "closed",
        description="File summary visibility",
    )
    diff_mode: Literal["word", "char", "none"] = Field(
        "word",
        alias="diffMode",
        description="Granularity of inline change highlights",
    )
    synchronised_scroll: Literal["enabled", "disabled"] = Field(
        "disabled",
        alias="synchronisedScroll",
        description="Synchronise side-by-side scrolling",
    )
    max_line_length_highlight: int = Field(
        10_000,
        alias="maxLineLengthHighlight",
        description="Lines longer than this are not highlighted",
        ge=0,
        le=1_000_000,
    )

    model_config = {"populate_by_name": True}

    @field_validator("diff")
    @classmethod
    def diff_must_not_be_blank(cls, v):
        """Reject empty input the same way the CLI does."""
        if not v.strip():
            raise ValueError("diff cannot be empty")
        return v


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: Literal["healthy", "degraded"] = Field(..., examples=["healthy"])
    version: str = Field(..., examples=["1.0.0"])
    assets: Dict[str, bool] = Field(
        ...,
        description="Readability of each bundled render asset",
        examples=[{"template": True, "css": True, "js_ui": True}],
    )


class VersionResponse(BaseModel):
    """Response model for version endpoint."""

    version: str = Field(..., examples=["1.0.0"])
    api_version: str = Field(..., examples=["v1"])
    supported_formats: List[str]
    supported_styles: List[str]
    diff_modes: List[str]
    summary_modes: List[str]
