"""Shared HTML utilities for markup processing."""

from __future__ import annotations

import re

try:
    from bs4 import BeautifulSoup
    from bs4.element import Tag
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for HTML parsing (pip install beautifulsoup4)."
    ) from exc


_HEADING_RE = re.compile(r"^h([1-6])$")


def find_document_root(soup: BeautifulSoup) -> Tag:
    """Find the element whose children form the linear markup stream.

    Returns the <body> element when the parser produced one, otherwise the
    soup itself (empty input, or a parser that does not synthesize a body).
    """
    if soup.body:
        return soup.body
    return soup


def top_level_elements(root: Tag) -> list[Tag]:
    """Return the element children of ``root``, skipping text and comments."""
    return [child for child in root.children if isinstance(child, Tag)]


def heading_level(tag: Tag) -> int | None:
    """Return 1-6 for ``h1``..``h6`` tags, ``None`` for anything else."""
    match = _HEADING_RE.match((tag.name or "").lower())
    if not match:
        return None
    return int(match.group(1))
