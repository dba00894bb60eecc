"""Strip word-processor artifacts from markup before export.

The rewrites are plain regular expressions applied to the text, never a
parse, so fragments with unbalanced or broken tags pass through without
error. Each start tag is split into whole attributes and the rules look
at attribute names only; values are kept or dropped, never edited, except
for the ``style`` declarations.
"""

from __future__ import annotations

import re
from typing import Callable

VENDOR_NAMESPACE_PREFIXES = ("w", "o", "v")
VENDOR_STYLE_PREFIX = "mso-"

_NS = "|".join(VENDOR_NAMESPACE_PREFIXES)

# Quoted values may contain '>'. A stray '<' ends the attempt.
_START_TAG_RE = re.compile(
    r"""(<[a-zA-Z][^\s/>"'<]*)((?:"[^"]*"|'[^']*'|[^'"<>])*)>"""
)
_ATTRIBUTE_RE = re.compile(
    r"""(?P<space>\s+)(?P<name>[^\s"'=<>/`]+)"""
    r"""(?:\s*=\s*(?P<value>"[^"]*"|'[^']*'|[^\s"'=<>`]+))?"""
)
_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)
_VENDOR_ATTR_NAME_RE = re.compile(rf"(?:{_NS}):.+|xmlns:(?:{_NS})", re.IGNORECASE)
_VENDOR_STYLE_DECL_RE = re.compile(
    rf"""{re.escape(VENDOR_STYLE_PREFIX)}[^:;"']+:[^;"']+;?""", re.IGNORECASE
)

AttributeRewrite = Callable[[re.Match[str]], str]


def sanitize_markup(html: str) -> str:
    """Remove vendor attributes, vendor styles, comments and width hints.

    Steps, in order:

    1. attributes in a vendor namespace (``w:val``, ``o:gfxdata``) and their
       ``xmlns:`` declarations
    2. ``mso-`` declarations inside ``style`` values
    3. attributes whose name starts with ``@`` or ``_``
    4. ``<!-- ... -->`` comments
    5. ``width`` attributes
    6. ``style`` attributes whose value still holds ``@`` or ``mso-``
    """
    for step in _SANITIZE_STEPS:
        html = step(html)
    return html


def _rewrite_attributes(html: str, rewrite: AttributeRewrite) -> str:
    def rewrite_tag(tag: re.Match[str]) -> str:
        return tag.group(1) + _ATTRIBUTE_RE.sub(rewrite, tag.group(2)) + ">"

    return _START_TAG_RE.sub(rewrite_tag, html)


def _drop_attributes(html: str, predicate: Callable[[str], bool]) -> str:
    return _rewrite_attributes(
        html, lambda attr: "" if predicate(attr.group("name")) else attr.group(0)
    )


def _quoted_style(attr: re.Match[str]) -> tuple[str, str] | None:
    """Return ``(quote, value)`` for a quoted ``style`` attribute."""
    value = attr.group("value")
    if attr.group("name").lower() != "style" or not value or value[0] not in "\"'":
        return None
    return value[0], value[1:-1]


def _strip_vendor_attributes(html: str) -> str:
    return _drop_attributes(html, lambda name: _VENDOR_ATTR_NAME_RE.fullmatch(name) is not None)


def _strip_vendor_style_declarations(html: str) -> str:
    def rewrite_style(attr: re.Match[str]) -> str:
        style = _quoted_style(attr)
        if style is None:
            return attr.group(0)
        quote, value = style
        cleaned = _VENDOR_STYLE_DECL_RE.sub("", value).strip()
        if not cleaned:
            return ""
        return f" style={quote}{cleaned}{quote}"

    return _rewrite_attributes(html, rewrite_style)


def _strip_reserved_attributes(html: str) -> str:
    return _drop_attributes(html, lambda name: name[0] in "@_")


def _strip_comments(html: str) -> str:
    return _COMMENT_RE.sub("", html)


def _strip_width_attributes(html: str) -> str:
    return _drop_attributes(html, lambda name: name.lower() == "width")


def _drop_unsafe_styles(html: str) -> str:
    def drop_if_unsafe(attr: re.Match[str]) -> str:
        style = _quoted_style(attr)
        if style is not None and ("@" in style[1] or VENDOR_STYLE_PREFIX in style[1].lower()):
            return ""
        return attr.group(0)

    return _rewrite_attributes(html, drop_if_unsafe)


_SANITIZE_STEPS: tuple[Callable[[str], str], ...] = (
    _strip_vendor_attributes,
    _strip_vendor_style_declarations,
    _strip_reserved_attributes,
    _strip_comments,
    _strip_width_attributes,
    _drop_unsafe_styles,
)
