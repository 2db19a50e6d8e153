"""
Command Line Interface
======================

``convert`` turns a markdown file into HTML with embedded diagrams.
``diagnose`` renders a fixed example diagram and writes ``result.html`` and
``result.svg`` to an output directory, to check the browser setup.
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import List, Optional

from mermaid_embed.config.logging import get_logger, setup_logging
from mermaid_embed.core.markdown.options import resolve_options
from mermaid_embed.core.pipeline import transform_markdown
from mermaid_embed.core.rendering.browser_session import BrowserSession, MermaidRenderError
from mermaid_embed.core.rendering.image_tag import generate_image_tag
from mermaid_embed.models.schemas import PipelineConfig, Viewport, default_mermaid_options

logger = get_logger(__name__)

EXAMPLE_DEFINITION = """
    graph TD
      A[Christmas] -->|Get money| B(Go shopping)
      B --> C{Let me think}
      C -->|One| D[Laptop]
      C -->|Two| E[iPhone]
      C -->|Three| F[fa:fa-car Car]

    """
EXAMPLE_ANNOTATION = "mermaid:width=small&height=large"
DIAGNOSTIC_VIEWPORT = Viewport(width=2000, height=2000)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mermaid-embed",
        description="Replace mermaid code blocks with embedded SVG images.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    convert_parser = subparsers.add_parser("convert", help="Convert markdown to HTML")
    convert_parser.add_argument("input", type=Path, help="Input markdown file")
    convert_parser.add_argument("-o", "--output", type=Path, help="Output HTML file (default: stdout)")
    convert_parser.add_argument("--language", default="mermaid", help="Code block language to render")
    convert_parser.add_argument("--theme", default="default", help="Mermaid theme")
    convert_parser.add_argument("--width", type=int, default=200, help="Viewport width")
    convert_parser.add_argument("--height", type=int, default=200, help="Viewport height")

    diagnose_parser = subparsers.add_parser("diagnose", help="Render an example diagram")
    diagnose_parser.add_argument(
        "--output-dir", type=Path, default=Path("."), help="Directory for result.html and result.svg"
    )

    return parser


async def run_diagnose(output_dir: Path) -> None:
    """Render the example diagram and write both artifacts to ``output_dir``."""
    logger.info("Rendering example diagram", definition=EXAMPLE_DEFINITION)

    async with BrowserSession() as session:
        result = await session.render_one(
            EXAMPLE_DEFINITION, "default", DIAGNOSTIC_VIEWPORT, default_mermaid_options()
        )

    svg = result.output
    output_dir.mkdir(parents=True, exist_ok=True)
    (output_dir / "result.html").write_text(
        generate_image_tag(svg, resolve_options(EXAMPLE_ANNOTATION)), encoding="utf-8"
    )
    (output_dir / "result.svg").write_text(svg, encoding="utf-8")
    logger.info("Diagnostic artifacts written", output_dir=str(output_dir), ok=result.ok)


async def run_convert(args: argparse.Namespace) -> None:
    config = PipelineConfig(
        language=args.language,
        theme=args.theme,
        viewport=Viewport(width=args.width, height=args.height),
    )
    html_output = await transform_markdown(args.input.read_text(encoding="utf-8"), config)

    if args.output:
        args.output.write_text(html_output, encoding="utf-8")
        logger.info("HTML written", output=str(args.output))
    else:
        sys.stdout.write(html_output)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()

    try:
        if args.command == "diagnose":
            asyncio.run(run_diagnose(args.output_dir))
        else:
            asyncio.run(run_convert(args))
    except (MermaidRenderError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0
