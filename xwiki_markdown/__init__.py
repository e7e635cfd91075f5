"""
xwiki-markdown: convert between Markdown and XWiki syntax, and render XWiki as HTML.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    xwiki-markdown md2xwiki README.md
    xwiki-markdown xwiki2md page.xwiki
    xwiki-markdown preview page.xwiki --output preview.html

Library Usage:
    from xwiki_markdown import (
        LocationHint,
        convert_markdown_to_xwiki,
        convert_xwiki_to_markdown,
        render_xwiki_html,
    )

    xwiki = convert_markdown_to_xwiki("# Title\\n\\nSome *text*.")
    markdown = convert_xwiki_to_markdown(xwiki)
    html = render_xwiki_html(xwiki, LocationHint("/docs/page.xwiki"))
"""

from .images import LocationHint, resolve_image_path
from .markdown_to_xwiki import convert_markdown_to_xwiki
from .preview import build_preview_page
from .renderer import render_xwiki_html
from .xwiki_to_markdown import convert_xwiki_to_markdown

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "convert_markdown_to_xwiki",
    "convert_xwiki_to_markdown",
    "render_xwiki_html",
    # Preview helpers
    "LocationHint",
    "resolve_image_path",
    "build_preview_page",
    # Version
    "__version__",
]
