from __future__ import annotations

import logging

from xwiki_markdown.logging_utils import configure_logging
from xwiki_markdown.markdown_to_xwiki import convert_markdown_to_xwiki


def test_configure_logging_levels():
    assert configure_logging(verbose=True).level == logging.DEBUG
    assert configure_logging().level == logging.WARNING


def test_configure_logging_replaces_handlers():
    configure_logging()
    logger = configure_logging()

    assert len(logger.handlers) == 1
    assert logger.handlers[0].formatter._fmt == "%(levelname)s: [%(name)s] %(message)s"


def test_conversion_logs_protected_span_count(caplog):
    configure_logging(verbose=True)
    try:
        with caplog.at_level(logging.DEBUG, logger="xwiki_markdown"):
            convert_markdown_to_xwiki("`a` and `b`")
    finally:
        configure_logging()

    assert "Converted Markdown with 2 protected code spans" in caplog.text
