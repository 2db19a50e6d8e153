"""Allow ``python -m mermaid_embed``."""

from mermaid_embed.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
