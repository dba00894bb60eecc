"""Remove attributes from table elements."""

from __future__ import annotations

import logging

try:
    from bs4 import BeautifulSoup
    from bs4.builder import ParserRejectedMarkup
    from bs4.element import Tag
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for HTML parsing (pip install beautifulsoup4)."
    ) from exc

logger = logging.getLogger(__name__)

TABLE_TAGS = ("table", "tr", "td", "th", "thead", "tbody", "tfoot")


def strip_table_attributes(html: str) -> str:
    """Drop every attribute from table, row, cell and row-group elements.

    Unlike the sanitizer this needs a parse: it has to know which attributes
    sit on which elements. Returns the inner markup of <body> when the input
    was a full document, the serialized fragment otherwise.
    """
    if not html:
        return ""
    try:
        soup = BeautifulSoup(html, "html.parser")
    except ParserRejectedMarkup as exc:
        logger.warning("Table cleanup skipped, markup rejected by parser: %s", exc)
        return html

    for tag in soup.find_all(TABLE_TAGS):
        _remove_all_attributes(tag)

    if soup.body:
        return soup.body.decode_contents()
    return soup.decode()


def _remove_all_attributes(tag: Tag) -> None:
    tag.attrs = {}
