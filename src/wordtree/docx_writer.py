"""Write sanitized markup and section trees to .docx documents."""

from __future__ import annotations

import base64
import binascii
import logging
import re
from io import BytesIO
from typing import Iterable

from docx import Document as DocxDocument
from docx.document import Document as DocumentObject
from docx.image.exceptions import UnrecognizedImageError
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.text.paragraph import Paragraph
from docx.text.run import Run

from wordtree.config import WORDTREE_EXPORT_FONT
from wordtree.exceptions import DocumentExportError
from wordtree.html_utils import heading_level
from wordtree.interfaces import ImageResolver
from wordtree.plain_text import to_plain_text
from wordtree.schemas import Section

try:
    from bs4 import BeautifulSoup
    from bs4.element import (
        Comment,
        Declaration,
        Doctype,
        NavigableString,
        ProcessingInstruction,
        Tag,
    )
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for HTML parsing (pip install beautifulsoup4)."
    ) from exc

logger = logging.getLogger(__name__)

_DATA_URI_RE = re.compile(r"^data:image/[\w.+\-]+;base64,(.*)$", re.DOTALL)
_WHITESPACE_RE = re.compile(r"\s+")
_BLOCK_TAGS = {"p", "div", "blockquote", "pre", "figure", "figcaption", "center"}
_CONTAINER_TAGS = {"section", "article", "main", "header", "footer", "body", "html"}
_SKIPPED_TAGS = {"head", "script", "style", "title"}
_BOLD_TAGS = {"strong", "b"}
_ITALIC_TAGS = {"em", "i"}
_UNDERLINE_TAGS = {"u", "ins"}
_STRIKE_TAGS = {"s", "strike", "del"}


def resolve_data_uri_image(url: str) -> bytes | None:
    """Decode an inline ``data:image/...;base64,`` URI.

    Returns ``None`` for any other URL or an undecodable payload.
    """
    match = _DATA_URI_RE.match(url or "")
    if not match:
        return None
    try:
        return base64.b64decode(match.group(1), validate=False)
    except (binascii.Error, ValueError):
        logger.debug("Undecodable data URI image skipped")
        return None


class DocxMarkupExporter:
    """Assemble a .docx document from HTML markup.

    Handles headings, paragraphs with bold/italic/underline/strike runs, line
    breaks, lists, tables and images. Layout beyond that is not reproduced.
    """

    def __init__(self, *, font: str = WORDTREE_EXPORT_FONT, page_numbers: bool = True) -> None:
        self.font = font
        self.page_numbers = page_numbers

    def convert(self, markup: str, image_resolver: ImageResolver = resolve_data_uri_image) -> bytes:
        try:
            document = _new_document(self.font)
            soup = BeautifulSoup(markup, "html.parser")
            _HtmlToDocx(document, image_resolver).add_children(soup)
            if self.page_numbers:
                _add_page_number_footer(document)
            return _save(document)
        except (KeyError, ValueError) as exc:
            raise DocumentExportError(f"Failed to build Word document: {exc}") from exc


def build_plain_docx(tree: Iterable[Section], *, font: str = WORDTREE_EXPORT_FONT) -> bytes:
    """Write one heading per section and its content as a single plain paragraph.

    Sections whose content has no text are written as a heading only.
    """
    document = _new_document(font)

    def append(sections: Iterable[Section]) -> None:
        for section in sections:
            document.add_heading(section.title, level=section.level)
            plain = to_plain_text(section.content_html)
            if plain.strip():
                document.add_paragraph(plain)
            append(section.children)

    try:
        append(tree)
        return _save(document)
    except (KeyError, ValueError) as exc:
        raise DocumentExportError(f"Failed to build Word document: {exc}") from exc


class _HtmlToDocx:
    """Walks parsed markup and appends the equivalent Word content."""

    def __init__(self, document: DocumentObject, image_resolver: ImageResolver) -> None:
        self.document = document
        self.image_resolver = image_resolver

    def add_children(self, container: Tag) -> None:
        pending: list[Tag | NavigableString] = []
        for child in container.children:
            if isinstance(child, Tag) and child.name in _SKIPPED_TAGS:
                continue
            if isinstance(child, Tag) and not _is_inline(child):
                self._flush_inline(pending)
                self.add_block(child)
            elif isinstance(child, (Tag, NavigableString)) and not _is_comment(child):
                pending.append(child)
        self._flush_inline(pending)

    def add_block(self, tag: Tag) -> None:
        level = heading_level(tag)
        if level is not None:
            self.document.add_heading(tag.get_text().strip(), level=level)
        elif tag.name in {"ul", "ol"}:
            self._add_list(tag, depth=1)
        elif tag.name == "table":
            self._add_table(tag)
        elif tag.name in _CONTAINER_TAGS or _has_block_children(tag):
            self.add_children(tag)
        else:
            paragraph = self.document.add_paragraph()
            self.add_inline(paragraph, tag.children)

    def add_inline(
        self,
        paragraph: Paragraph,
        nodes: Iterable[Tag | NavigableString],
        formatting: frozenset[str] = frozenset(),
    ) -> None:
        for node in nodes:
            if isinstance(node, NavigableString):
                if _is_comment(node):
                    continue
                text = _WHITESPACE_RE.sub(" ", str(node))
                if text:
                    _apply_formatting(paragraph.add_run(text), formatting)
                continue
            if node.name == "br":
                paragraph.add_run().add_break()
            elif node.name == "img":
                self._add_image(paragraph, node)
            else:
                self.add_inline(paragraph, node.children, formatting | _formatting_for(node.name))

    def _flush_inline(self, pending: list[Tag | NavigableString]) -> None:
        if not pending:
            return
        if any(isinstance(node, Tag) or str(node).strip() for node in pending):
            paragraph = self.document.add_paragraph()
            self.add_inline(paragraph, pending)
        pending.clear()

    def _add_list(self, list_tag: Tag, depth: int) -> None:
        base_style = "List Number" if list_tag.name == "ol" else "List Bullet"
        style_name = base_style if depth == 1 else f"{base_style} {min(depth, 3)}"
        for item in list_tag.find_all("li", recursive=False):
            inline = [
                child
                for child in item.children
                if not (isinstance(child, Tag) and child.name in {"ul", "ol"})
            ]
            paragraph = self.document.add_paragraph(style=style_name)
            self.add_inline(paragraph, inline)
            for nested in item.find_all(["ul", "ol"], recursive=False):
                self._add_list(nested, depth + 1)

    def _add_table(self, table_tag: Tag) -> None:
        rows = [row for row in table_tag.find_all("tr") if row.find_parent("table") is table_tag]
        if not rows:
            return
        num_cols = max(len(row.find_all(["td", "th"], recursive=False)) for row in rows)
        if num_cols == 0:
            return

        table = self.document.add_table(rows=len(rows), cols=num_cols)
        table.style = "Table Grid"
        for i, row in enumerate(rows):
            _prevent_row_split(table.rows[i])
            for j, cell_tag in enumerate(row.find_all(["td", "th"], recursive=False)):
                paragraph = table.cell(i, j).paragraphs[0]
                bold = frozenset({"bold"}) if cell_tag.name == "th" else frozenset()
                self.add_inline(paragraph, _flatten_cell(cell_tag), bold)

    def _add_image(self, paragraph: Paragraph, img: Tag) -> None:
        src = img.get("src") or ""
        data = self.image_resolver(src)
        if data is None:
            logger.info("Image omitted, source not resolvable", extra={"src": src[:64]})
            return
        try:
            paragraph.add_run().add_picture(BytesIO(data))
        except (UnrecognizedImageError, ValueError, OSError) as exc:
            logger.warning("Image omitted, unreadable data: %s", exc)


def _new_document(font: str) -> DocumentObject:
    document = DocxDocument()
    document.styles["Normal"].font.name = font
    return document


def _save(document: DocumentObject) -> bytes:
    buffer = BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def _add_page_number_footer(document: DocumentObject) -> None:
    footer = document.sections[0].footer
    paragraph = footer.paragraphs[0] if footer.paragraphs else footer.add_paragraph()
    field = OxmlElement("w:fldSimple")
    field.set(qn("w:instr"), "PAGE")
    run = OxmlElement("w:r")
    text = OxmlElement("w:t")
    text.text = "1"
    run.append(text)
    field.append(run)
    paragraph._p.append(field)


def _prevent_row_split(row) -> None:
    tr_pr = row._tr.get_or_add_trPr()
    tr_pr.append(OxmlElement("w:cantSplit"))


def _flatten_cell(cell: Tag) -> list[Tag | NavigableString]:
    """Inline nodes of a cell, with a line break between its block children."""
    nodes: list[Tag | NavigableString] = []
    for child in cell.children:
        if isinstance(child, Tag) and child.name in _BLOCK_TAGS:
            if nodes:
                nodes.append(Tag(name="br"))
            nodes.extend(child.children)
        else:
            nodes.append(child)
    return nodes


def _apply_formatting(run: Run, formatting: frozenset[str]) -> None:
    if "bold" in formatting:
        run.bold = True
    if "italic" in formatting:
        run.italic = True
    if "underline" in formatting:
        run.underline = True
    if "strike" in formatting:
        run.font.strike = True


def _formatting_for(name: str) -> frozenset[str]:
    if name in _BOLD_TAGS:
        return frozenset({"bold"})
    if name in _ITALIC_TAGS:
        return frozenset({"italic"})
    if name in _UNDERLINE_TAGS:
        return frozenset({"underline"})
    if name in _STRIKE_TAGS:
        return frozenset({"strike"})
    return frozenset()


def _is_inline(tag: Tag) -> bool:
    return not (
        heading_level(tag) is not None
        or tag.name in _BLOCK_TAGS
        or tag.name in _CONTAINER_TAGS
        or tag.name in {"ul", "ol", "table"}
    )


def _has_block_children(tag: Tag) -> bool:
    return any(isinstance(child, Tag) and not _is_inline(child) for child in tag.children)


def _is_comment(node: Tag | NavigableString) -> bool:
    return isinstance(node, (Comment, Declaration, Doctype, ProcessingInstruction))
