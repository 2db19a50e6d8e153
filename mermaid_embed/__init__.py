"""
Mermaid Embed
=============

Build-time markdown transformation that replaces fenced ``mermaid`` code
blocks with embedded SVG images rendered by Mermaid in headless Chromium.

This package provides:
- Option-string parsing for fenced code block annotations
- Node selection over markdown-it-py syntax trees
- Browser session management with Playwright
- Image tag encoding with base64 data URIs
- An async pipeline tying the above together
"""

from mermaid_embed.core.pipeline import transform_markdown, transform_tree
from mermaid_embed.core.rendering.browser_session import BrowserSession, MermaidRenderError
from mermaid_embed.models.schemas import PipelineConfig, RenderResult, Viewport

__version__ = "1.0.0"

__all__ = [
    "BrowserSession",
    "MermaidRenderError",
    "PipelineConfig",
    "RenderResult",
    "Viewport",
    "transform_markdown",
    "transform_tree",
]
