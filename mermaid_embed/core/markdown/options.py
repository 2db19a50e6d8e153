"""
Option-String Parser
====================

Parses a fenced code block's language annotation, for example
``mermaid:width=small&height=large``, into a selection decision plus a
flat mapping of image attributes.
"""

from typing import Dict, Optional

from mermaid_embed.config.logging import get_logger
from mermaid_embed.core.rendering.image_tag import is_attribute_name

logger = get_logger(__name__)

OPTION_SEPARATOR = ":"
CLAUSE_SEPARATOR = "&"
VALUE_SEPARATOR = "="


def resolve_options(annotation: Optional[str], expected: str = "mermaid") -> Optional[Dict[str, str]]:
    """
    Decide whether a code block is a diagram and extract its options.

    Args:
        annotation: Text after the opening fence, may be None or empty
        expected: Language tag to match, compared case-insensitively

    Returns:
        None when the block is not selected, otherwise the option mapping
        (empty when the annotation carries no options)
    """
    if not annotation:
        return None

    language, separator, raw_options = annotation.partition(OPTION_SEPARATOR)
    if language.strip().lower() != expected.strip().lower():
        return None

    if not separator:
        return {}

    return parse_option_clauses(raw_options)


def parse_option_clauses(raw_options: str) -> Dict[str, str]:
    """
    Parse ``k1=v1&k2=v2`` into a dict.

    Keys and values keep their case. A clause without ``=`` maps its key to
    an empty string. Clauses whose key is empty or not a valid HTML
    attribute name are dropped. The last duplicate key wins.
    """
    options: Dict[str, str] = {}
    for clause in raw_options.split(CLAUSE_SEPARATOR):
        key, _, value = clause.partition(VALUE_SEPARATOR)
        key = key.strip()
        if not key:
            continue
        if not is_attribute_name(key):
            logger.warning("Dropping invalid option key", key=key)
            continue
        options[key] = value.strip()
    return options
