"""
Test Mocks
===========

Mock implementations for the browser session and Playwright objects.
"""

from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, Mock

from mermaid_embed.core.rendering.browser_session import MermaidRenderError
from mermaid_embed.models.schemas import RenderResult, Viewport


class FakeBrowserSession:
    """In-memory stand-in for BrowserSession."""

    def __init__(
        self,
        errors: Optional[Dict[str, str]] = None,
        failures: Optional[Dict[str, Exception]] = None,
        launch_error: Optional[Exception] = None,
    ):
        self.errors = errors or {}
        self.failures = failures or {}
        self.launch_error = launch_error
        self.launch_count = 0
        self.close_count = 0
        self.rendered: List[Dict[str, Any]] = []

    async def launch(self) -> None:
        self.launch_count += 1
        if self.launch_error:
            raise self.launch_error

    async def close(self) -> None:
        self.close_count += 1

    async def __aenter__(self) -> "FakeBrowserSession":
        try:
            await self.launch()
        except BaseException:
            await self.close()
            raise
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def render_one(
        self,
        definition: str,
        theme: str = "default",
        viewport: Optional[Viewport] = None,
        mermaid_options: Optional[Dict[str, Any]] = None,
    ) -> RenderResult:
        self.rendered.append(
            {
                "definition": definition,
                "theme": theme,
                "viewport": viewport,
                "mermaid_options": mermaid_options,
            }
        )
        key = definition.strip()
        if key in self.failures:
            raise self.failures[key]
        if key in self.errors:
            return RenderResult(error=self.errors[key])
        return RenderResult(svg=fake_svg(definition))


class SessionRecorder:
    """Session factory that remembers every session it built."""

    def __init__(self, **session_kwargs: Any):
        self.session_kwargs = session_kwargs
        self.sessions: List[FakeBrowserSession] = []

    def __call__(self) -> FakeBrowserSession:
        session = FakeBrowserSession(**self.session_kwargs)
        self.sessions.append(session)
        return session


def fake_svg(definition: str) -> str:
    """Deterministic markup for a definition."""
    return f'<svg xmlns="http://www.w3.org/2000/svg"><text>{definition.strip()}</text></svg>'


def infrastructure_failure(message: str = "Page crashed") -> MermaidRenderError:
    return MermaidRenderError(message)


def build_playwright_mocks(payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Build a mocked Playwright object graph.

    Returns:
        Dict with ``async_playwright``, ``playwright``, ``browser`` and ``page``
    """
    page = AsyncMock()
    page.set_default_timeout = Mock()
    page.eval_on_selector.return_value = payload if payload is not None else {"svg": "<svg></svg>"}

    browser = AsyncMock()
    browser.new_page.return_value = page

    playwright = AsyncMock()
    playwright.chromium.launch.return_value = browser

    async_playwright_instance = AsyncMock()
    async_playwright_instance.start = AsyncMock(return_value=playwright)
    async_playwright = Mock(return_value=async_playwright_instance)

    return {
        "async_playwright": async_playwright,
        "playwright": playwright,
        "browser": browser,
        "page": page,
    }
