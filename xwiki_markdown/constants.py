"""Constants used across the xwiki-markdown package."""

from __future__ import annotations

from .config import ConverterConfig

DEFAULT_CONFIG = ConverterConfig()

# File handling
MARKDOWN_EXTENSIONS = (".md", ".markdown")
XWIKI_EXTENSIONS = (".xwiki",)
DEFAULT_MAX_FILE_SIZE = DEFAULT_CONFIG.max_file_size

# Markup sentinels
DEFAULT_CODE_LANGUAGE = "none"
TOC_PLACEHOLDER = "{{toc/}}"
TOC_MARKDOWN_COMMENT = "<!-- Table of Contents -->"
TOC_TITLE = "📋 Table of Contents"
DEFAULT_IMAGE_ALT = "Image"

# Admonition macros, in the order they are rewritten
ADMONITION_KINDS = ("info", "warning", "error")
ADMONITION_LABELS = {"info": "Info", "warning": "Warning", "error": "Error"}
ADMONITION_ICONS = {"info": "ℹ️", "warning": "⚠️", "error": "❌"}

# Headings are rewritten deepest first so "======" is never read as three "=="
HEADING_LEVELS = (6, 5, 4, 3, 2, 1)

# Syntax highlighting
JAVASCRIPT_KEYWORDS = ("function", "return", "const", "let", "var", "if", "else", "for", "while")
