"""Reduce markup to plain text for exports that cannot carry formatting."""

from __future__ import annotations

import html as html_lib
import re

_LINE_BREAK_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)
_PARAGRAPH_END_RE = re.compile(r"</p\s*>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]+>")


def to_plain_text(html: str) -> str:
    """Turn line breaks and paragraph ends into newlines and drop all tags."""
    text = _LINE_BREAK_RE.sub("\n", html)
    text = _PARAGRAPH_END_RE.sub("\n", text)
    text = _TAG_RE.sub("", text)
    return html_lib.unescape(text)
