"""
Pydantic Models and Schemas
===========================

Configuration and result models passed between the pipeline and the
rendering backend.
"""

from typing import Optional, Dict, Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


def default_mermaid_options() -> Dict[str, Any]:
    """Mermaid configuration applied when the caller supplies none."""
    return {"securityLevel": "loose", "flowchart": {"htmlLabels": False}}


class Viewport(BaseModel):
    """Browser viewport in CSS pixels."""

    model_config = ConfigDict(frozen=True)

    width: int = Field(default=200, gt=0, description="Viewport width in pixels")
    height: int = Field(default=200, gt=0, description="Viewport height in pixels")

    def as_playwright(self) -> Dict[str, int]:
        """Viewport in the shape Playwright expects."""
        return {"width": self.width, "height": self.height}


class PipelineConfig(BaseModel):
    """Per-invocation configuration for the substitution pipeline."""

    model_config = ConfigDict(frozen=True)

    language: str = Field(default="mermaid", description="Code block language tag to match")
    theme: str = Field(default="default", description="Mermaid theme name")
    viewport: Viewport = Field(default_factory=Viewport, description="Render page viewport")
    mermaid_options: Dict[str, Any] = Field(
        default_factory=default_mermaid_options,
        description="Options passed to mermaid.initialize",
    )


class RenderResult(BaseModel):
    """
    Outcome of rendering one diagram definition.

    Exactly one of ``svg`` and ``error`` is set. ``error`` carries the text
    of an exception raised by Mermaid inside the page; it is embedded in the
    output instead of failing the document.
    """

    svg: Optional[str] = Field(default=None, description="Rendered SVG markup")
    error: Optional[str] = Field(default=None, description="In-page Mermaid error text")

    @model_validator(mode="after")
    def validate_single_outcome(self) -> "RenderResult":
        """Require exactly one of svg and error."""
        if (self.svg is None) == (self.error is None):
            raise ValueError("RenderResult needs exactly one of svg or error")
        return self

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def output(self) -> str:
        """Markup to embed, either the diagram or the error text."""
        if self.error is not None:
            return self.error
        return self.svg or ""
