"""
Browser Session
===============

Playwright-based Mermaid rendering.
Manages one headless Chromium instance per pipeline invocation and a
transient page per diagram.
"""

from typing import Optional, Dict, Any
import asyncio

from playwright.async_api import async_playwright, Browser, Page, Playwright

from mermaid_embed.config.logging import get_logger
from mermaid_embed.config.settings import Settings, get_settings
from mermaid_embed.models.schemas import RenderResult, Viewport

logger = get_logger(__name__)

CONTAINER_SELECTOR = "#container"

# Runs inside the page. Mermaid exceptions are returned as data so a broken
# diagram is embedded as text instead of aborting the document.
RENDER_SCRIPT = """
async (container, [definition, theme, mermaidOptions]) => {
  const diagram = document.createElement("div");
  diagram.className = "mermaid";
  diagram.textContent = definition;
  container.replaceChildren(diagram);

  try {
    window.mermaid.initialize({ ...mermaidOptions, theme, startOnLoad: false });
    if (typeof window.mermaid.run === "function") {
      await window.mermaid.run({ nodes: [diagram] });
    } else {
      window.mermaid.init(undefined, diagram);
    }
    return { svg: container.querySelector(".mermaid").innerHTML };
  } catch (e) {
    return { error: `${e}` };
  }
}
"""


class MermaidRenderError(Exception):
    """Exception raised when the rendering infrastructure fails."""

    pass


class BrowserSession:
    """One headless browser shared by all renders of a pipeline invocation."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.logger: Any = logger.bind(component="browser_session")  # structlog.BoundLoggerBase
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._closed = False

    @property
    def is_open(self) -> bool:
        return self._browser is not None and not self._closed

    async def launch(self) -> None:
        """Start Playwright and launch Chromium."""
        if self._browser is not None:
            raise MermaidRenderError("Browser session already launched")

        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(
                headless=self.settings.playwright_headless,
                args=list(self.settings.chromium_args),
            )
        except Exception as e:
            self.logger.error("Failed to launch browser", error=str(e))
            raise MermaidRenderError(f"Browser launch failed: {e}") from e

        self.logger.info("Browser launched", headless=self.settings.playwright_headless)

    async def close(self) -> None:
        """Close the browser and stop Playwright. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True

        try:
            if self._browser is not None:
                await self._browser.close()
        finally:
            if self._playwright is not None:
                await self._playwright.stop()

        self.logger.info("Browser closed")

    async def __aenter__(self) -> "BrowserSession":
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
        """
        Render one Mermaid definition to SVG.

        Args:
            definition: Mermaid diagram source
            theme: Mermaid theme name
            viewport: Page viewport, defaults to 200x200
            mermaid_options: Options merged into mermaid.initialize

        Returns:
            RenderResult with either the SVG markup or the in-page error text

        Raises:
            MermaidRenderError: If the page cannot be created, loaded or
                scripted, or the render exceeds the configured timeout
        """
        if not self.is_open:
            raise MermaidRenderError("Browser session not launched")

        render = self._render_page(
            definition, theme, viewport or Viewport(), dict(mermaid_options or {})
        )
        timeout = self.settings.render_timeout or None

        try:
            result = await asyncio.wait_for(render, timeout=timeout)
        except asyncio.TimeoutError as e:
            self.logger.error("Render timed out", timeout=timeout)
            raise MermaidRenderError(f"Render timed out after {timeout}s") from e
        except MermaidRenderError:
            raise
        except Exception as e:
            self.logger.error("Render failed", error=str(e))
            raise MermaidRenderError(f"Render failed: {e}") from e

        if not result.ok:
            self.logger.warning("Mermaid reported an error", error=result.error)
        else:
            self.logger.debug("Diagram rendered", svg_length=len(result.output))
        return result

    async def _render_page(
        self, definition: str, theme: str, viewport: Viewport, mermaid_options: Dict[str, Any]
    ) -> RenderResult:
        assert self._browser is not None
        page = await self._browser.new_page()
        try:
            await self._prepare_page(page, viewport)
            payload = await page.eval_on_selector(
                CONTAINER_SELECTOR, RENDER_SCRIPT, [definition, theme, mermaid_options]
            )
        finally:
            await page.close()

        return RenderResult(**payload)

    async def _prepare_page(self, page: Page, viewport: Viewport) -> None:
        """Size the page, load the harness and inject Mermaid."""
        page.set_default_timeout(self.settings.playwright_timeout)
        await page.set_viewport_size(viewport.as_playwright())
        await page.goto(self.settings.harness_path.resolve().as_uri())

        if self.settings.mermaid_script_path:
            await page.add_script_tag(path=str(self.settings.mermaid_script_path))
        else:
            await page.add_script_tag(url=self.settings.mermaid_script_url)
