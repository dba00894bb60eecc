"""Flatten a section tree back into linear markup."""

from __future__ import annotations

from html import escape
from typing import Iterable

from wordtree.sanitizer import sanitize_markup
from wordtree.schemas import Section
from wordtree.tables import strip_table_attributes


def serialize_tree(tree: Iterable[Section], *, clean: bool = True) -> str:
    """Emit each section as ``<hN>title</hN>`` followed by its content.

    Sections are visited depth-first, parents before children. N is the
    section's ``level`` field as it is now, not its depth in the tree: moving
    a section without updating its level yields markup whose heading levels
    disagree with the nesting.

    Args:
        tree: Root sections in order.
        clean: Pass each section's content through ``clean_content_html``
            before emitting it. With ``False`` content is copied verbatim.
    """
    parts: list[str] = []
    for section in tree:
        _append_section(section, parts, clean=clean)
    return "".join(parts)


def clean_content_html(html: str) -> str:
    """Sanitize a content fragment and strip its table attributes."""
    return strip_table_attributes(sanitize_markup(html))


def _append_section(section: Section, parts: list[str], *, clean: bool) -> None:
    tag = f"h{section.level}"
    parts.append(f"<{tag}>{escape(section.title, quote=False)}</{tag}>")
    if section.content_html:
        parts.append(clean_content_html(section.content_html) if clean else section.content_html)
    for child in section.children:
        _append_section(child, parts, clean=clean)
