"""Pydantic models for conversion results and collected reference pages."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator


class ConversionResult(BaseModel):
    """Output of one pipeline run over a single page."""

    markdown: str = ""
    title: str | None = None

    # Provenance: selector rule that chose the region, "body_fallback",
    # or "pre_fetched" when the input was already Markdown
    method: str = "body_fallback"
    region_text_length: int = 0

    # Usable-content signal; the Markdown is returned either way
    is_usable: bool = False
    reason: str | None = None

    @property
    def length(self) -> int:
        return len(self.markdown)


class ReferencePage(BaseModel):
    """A converted page ready to be rendered into a reference document."""

    url: str
    title: str = ""
    markdown: str = ""

    @field_validator("url", mode="before")
    @classmethod
    def strip_url(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v or ""


class ExtractionProfile(BaseModel):
    """Per-site extraction overrides, usually loaded from YAML."""

    # Tried before the built-in content selectors
    content_selectors: list[str] = Field(default_factory=list)
    # Removed in addition to the built-in boilerplate set
    boilerplate_selectors: list[str] = Field(default_factory=list)
    min_text_length: int = Field(default=100, ge=0)
    min_markdown_length: int = Field(default=100, ge=0)

    model_config = {"extra": "forbid"}
