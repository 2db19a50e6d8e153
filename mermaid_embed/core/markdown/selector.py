"""
Node Selector
=============

Walks a markdown-it-py syntax tree and collects the fenced code blocks
whose language annotation matches the diagram language.
"""

from typing import Any, Dict, List

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from mermaid_embed.config.logging import get_logger
from mermaid_embed.core.markdown.options import resolve_options

logger = get_logger(__name__)

FENCE_TYPE = "fence"
OPTIONS_META_KEY = "mermaid_options"


def select_nodes(tree: SyntaxTreeNode, expected: str = "mermaid") -> List[SyntaxTreeNode]:
    """
    Find diagram code blocks in document order.

    Each selected node gets its parsed options attached to
    ``node.token.meta[OPTIONS_META_KEY]``. The node content is not touched.

    Args:
        tree: Root of the syntax tree
        expected: Language tag to match

    Returns:
        Selected nodes, empty when the document has no diagrams
    """
    selected: List[SyntaxTreeNode] = []
    for node in tree.walk():
        if node.type != FENCE_TYPE:
            continue
        options = resolve_options(node.info, expected)
        if options is None:
            continue
        node.token.meta[OPTIONS_META_KEY] = options
        selected.append(node)

    logger.debug("Selected diagram blocks", language=expected, count=len(selected))
    return selected


def node_options(node: SyntaxTreeNode) -> Dict[str, str]:
    """Options attached to a selected node by ``select_nodes``."""
    return node.token.meta.get(OPTIONS_META_KEY, {})


def parse_markdown(text: str, md: Any = None) -> SyntaxTreeNode:
    """Parse markdown text into a syntax tree."""
    md = md or MarkdownIt("commonmark")
    return SyntaxTreeNode(md.parse(text))
