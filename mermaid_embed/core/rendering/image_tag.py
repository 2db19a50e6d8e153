"""
Image Tag Encoder
=================

Serializes rendered SVG markup into a self-contained ``<img>`` tag with a
base64 data URI. Every block option becomes both a plain and a ``data-``
prefixed attribute.
"""

from typing import Dict, Optional
import base64
import html
import re

SVG_MEDIA_TYPE = "image/svg+xml"
DATA_URI_PREFIX = f"data:{SVG_MEDIA_TYPE};base64,"

_SRC_PATTERN = re.compile(r'src="' + re.escape(DATA_URI_PREFIX) + r'([A-Za-z0-9+/=]*)"')
_ATTRIBUTE_NAME_PATTERN = re.compile(r"^[A-Za-z_:][-A-Za-z0-9_.:]*$")


def is_attribute_name(key: str) -> bool:
    """Whether ``key`` can be emitted as an HTML attribute name unescaped."""
    return bool(_ATTRIBUTE_NAME_PATTERN.match(key))


def encode_svg(svg: str) -> str:
    """Base64 encode SVG markup as UTF-8."""
    return base64.b64encode(svg.encode("utf-8")).decode("ascii")


def generate_image_tag(svg: str, options: Optional[Dict[str, str]] = None) -> str:
    """
    Build the embeddable image reference for a diagram.

    Args:
        svg: Rendered markup, or in-page error text
        options: Attributes parsed from the code block annotation. Keys
            that are not valid attribute names are skipped

    Returns:
        ``<img>`` tag string
    """
    attrs = "".join(
        f' {key}="{_escape(value)}" data-{key}="{_escape(value)}"'
        for key, value in (options or {}).items()
        if is_attribute_name(key)
    )
    return f'<img class="mermaid" src="{DATA_URI_PREFIX}{encode_svg(svg)}"{attrs} />'


def decode_image_tag(tag: str) -> str:
    """
    Recover the markup embedded by ``generate_image_tag``.

    Raises:
        ValueError: If the tag carries no SVG data URI
    """
    match = _SRC_PATTERN.search(tag)
    if not match:
        raise ValueError("No SVG data URI found in image tag")
    return base64.b64decode(match.group(1)).decode("utf-8")


def _escape(value: Optional[str]) -> str:
    return html.escape(value or "", quote=True)
