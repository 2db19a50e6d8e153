"""
Pipeline Orchestrator
=====================

Replaces diagram code blocks in a markdown-it-py syntax tree with embedded
SVG images. One browser session is launched per invocation, only when the
document contains at least one diagram, and is always closed before
returning.
"""

from typing import Any, Callable, List, Optional
import asyncio

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from mermaid_embed.config.logging import get_logger
from mermaid_embed.core.markdown.selector import (
    OPTIONS_META_KEY,
    node_options,
    parse_markdown,
    select_nodes,
)
from mermaid_embed.core.rendering.browser_session import BrowserSession
from mermaid_embed.core.rendering.image_tag import generate_image_tag
from mermaid_embed.models.schemas import PipelineConfig

logger = get_logger(__name__)

EMBEDDED_TYPE = "html_block"

SessionFactory = Callable[[], BrowserSession]


async def transform_tree(
    tree: SyntaxTreeNode,
    config: Optional[PipelineConfig] = None,
    session_factory: Optional[SessionFactory] = None,
) -> int:
    """
    Render every diagram block in ``tree`` and substitute it in place.

    Args:
        tree: Root of the syntax tree, mutated in place
        config: Language, theme, viewport and Mermaid options
        session_factory: Builds the browser session, replaceable in tests

    Returns:
        Number of nodes replaced

    Raises:
        MermaidRenderError: If rendering infrastructure fails for any node.
            Nodes replaced before the failure stay replaced.
    """
    config = config or PipelineConfig()

    nodes = select_nodes(tree, config.language)
    if not nodes:
        return 0

    session = (session_factory or BrowserSession)()
    try:
        await session.launch()
        outcomes = await asyncio.gather(
            *(_substitute(session, node, config) for node in nodes),
            return_exceptions=True,
        )
    finally:
        await session.close()

    failures: List[BaseException] = [o for o in outcomes if isinstance(o, BaseException)]
    if failures:
        logger.error(
            "Diagram substitution failed",
            failed=len(failures),
            total=len(nodes),
            error=str(failures[0]),
        )
        raise failures[0]

    logger.info("Diagrams embedded", count=len(nodes), language=config.language)
    return len(nodes)


async def _substitute(session: BrowserSession, node: SyntaxTreeNode, config: PipelineConfig) -> None:
    """Render one node and rewrite it as an embedded image."""
    result = await session.render_one(
        node.content, config.theme, config.viewport, config.mermaid_options
    )
    token = node.token
    token.content = generate_image_tag(result.output, node_options(node)) + "\n"
    token.type = EMBEDDED_TYPE
    token.meta.pop(OPTIONS_META_KEY, None)


def render_tree_html(tree: SyntaxTreeNode, md: Optional[MarkdownIt] = None) -> str:
    """Render a (possibly transformed) syntax tree to HTML."""
    md = md or MarkdownIt("commonmark")
    return md.renderer.render(tree.to_tokens(), md.options, {})


async def transform_markdown(
    text: str,
    config: Optional[PipelineConfig] = None,
    session_factory: Optional[SessionFactory] = None,
    md: Any = None,
) -> str:
    """
    Convert markdown to HTML with diagrams embedded as images.

    Args:
        text: Markdown source
        config: Pipeline configuration
        session_factory: Builds the browser session
        md: Optional preconfigured MarkdownIt instance

    Returns:
        HTML output
    """
    md = md or MarkdownIt("commonmark")
    tree = parse_markdown(text, md)
    await transform_tree(tree, config, session_factory)
    return render_tree_html(tree, md)
