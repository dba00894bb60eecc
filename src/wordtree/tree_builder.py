"""Fold linear markup into a tree of sections keyed by heading level."""

from __future__ import annotations

import logging
from typing import Iterable

from wordtree.config import WORDTREE_INTRO_TITLE
from wordtree.html_utils import find_document_root, heading_level, top_level_elements
from wordtree.schemas import Section

try:
    from bs4 import BeautifulSoup
    from bs4.element import Tag
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for HTML parsing (pip install beautifulsoup4)."
    ) from exc

logger = logging.getLogger(__name__)


def build_tree_from_html(html: str) -> list[Section]:
    """Parse markup and build the section tree from its top-level elements."""
    soup = BeautifulSoup(html, "lxml")
    return build_tree(top_level_elements(find_document_root(soup)))


def build_tree(elements: Iterable[Tag]) -> list[Section]:
    """Build a section tree from a sequence of top-level elements.

    A heading of level L closes every open section whose level is >= L and
    becomes a child of whatever remains open (or a new root). Any other
    element is appended, as markup, to the innermost open section. Content
    seen before the first heading goes to a synthesized intro section, which
    is created at most once.

    Arbitrary heading sequences are accepted: jumps such as h1 -> h4 nest
    directly, without placeholder levels.
    """
    tree: list[Section] = []
    stack: list[Section] = []

    for element in elements:
        level = heading_level(element)
        if level is not None:
            while stack and stack[-1].level >= level:
                stack.pop()

            node = Section(title=element.get_text().strip(), level=level)
            if stack:
                stack[-1].children.append(node)
            else:
                tree.append(node)
            stack.append(node)
            continue

        fragment = str(element)
        if stack:
            stack[-1].content_html += fragment
        elif not tree:
            intro = Section(title=WORDTREE_INTRO_TITLE, level=1, content_html=fragment)
            tree.append(intro)
            stack.append(intro)
        else:
            tree[0].content_html += fragment

    logger.debug("Built section tree", extra={"roots": len(tree)})
    return tree
