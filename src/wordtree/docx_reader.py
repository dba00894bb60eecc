"""Read .docx documents into linear HTML markup."""

from __future__ import annotations

import base64
import logging
import re
from html import escape
from io import BytesIO
from zipfile import BadZipFile

from docx import Document as DocxDocument
from docx.opc.exceptions import PackageNotFoundError
from docx.table import Table, _Cell
from docx.text.hyperlink import Hyperlink
from docx.text.paragraph import Paragraph
from docx.text.run import Run
from lxml import etree

from wordtree.exceptions import DocumentImportError

logger = logging.getLogger(__name__)

_HEADING_STYLE_RE = re.compile(r"^heading\s+([1-6])$", re.IGNORECASE)
_LIST_STYLE_RE = re.compile(r"^list\s+(bullet|number)", re.IGNORECASE)

# Run formatting in nesting order, outermost first.
_RUN_TAGS = (
    ("bold", "strong"),
    ("italic", "em"),
    ("underline", "u"),
    ("strike", "s"),
)


class DocxMarkupImporter:
    """Convert .docx bytes into HTML: headings, paragraphs, lists, tables, images."""

    def __init__(self, *, ignore_empty_paragraphs: bool = False) -> None:
        self.ignore_empty_paragraphs = ignore_empty_paragraphs

    def convert(self, data: bytes) -> str:
        try:
            document = DocxDocument(BytesIO(data))
        except (
            PackageNotFoundError,
            BadZipFile,
            KeyError,
            ValueError,
            etree.XMLSyntaxError,
        ) as exc:
            raise DocumentImportError(f"Failed to read Word document: {exc}") from exc

        parts: list[str] = []
        open_list: str | None = None
        for block in document.iter_inner_content():
            list_tag = _list_tag(block) if isinstance(block, Paragraph) else None
            if open_list and list_tag != open_list:
                parts.append(f"</{open_list}>")
                open_list = None

            if isinstance(block, Table):
                parts.append(self._table_html(block))
                continue

            if list_tag:
                if open_list is None:
                    parts.append(f"<{list_tag}>")
                    open_list = list_tag
                parts.append(f"<li>{_inline_html(block)}</li>")
                continue

            html = self._paragraph_html(block)
            if html:
                parts.append(html)

        if open_list:
            parts.append(f"</{open_list}>")

        markup = "".join(parts)
        logger.debug("Converted Word document to markup", extra={"markup_length": len(markup)})
        return markup

    def _paragraph_html(self, paragraph: Paragraph) -> str:
        inner = _inline_html(paragraph)
        tag = _block_tag(paragraph)
        if not inner.strip() and tag == "p" and self.ignore_empty_paragraphs:
            return ""
        return f"<{tag}>{inner}</{tag}>"

    def _table_html(self, table: Table) -> str:
        rows: list[str] = []
        for row in table.rows:
            cells: list[str] = []
            seen: list[_Cell] = []
            for cell in row.cells:
                # Merged cells are reported once per grid column they span.
                if any(cell._tc is other._tc for other in seen):
                    continue
                seen.append(cell)
                cells.append(f"<td>{self._cell_html(cell)}</td>")
            rows.append(f"<tr>{''.join(cells)}</tr>")
        return f"<table>{''.join(rows)}</table>"

    def _cell_html(self, cell: _Cell) -> str:
        parts: list[str] = []
        for block in cell.iter_inner_content():
            if isinstance(block, Table):
                parts.append(self._table_html(block))
            else:
                parts.append(self._paragraph_html(block))
        return "".join(parts)


def _style_name(paragraph: Paragraph) -> str:
    style = paragraph.style
    return style.name if style is not None and style.name else ""


def _block_tag(paragraph: Paragraph) -> str:
    match = _HEADING_STYLE_RE.match(_style_name(paragraph))
    if match:
        return f"h{match.group(1)}"
    return "p"


def _list_tag(paragraph: Paragraph) -> str | None:
    match = _LIST_STYLE_RE.match(_style_name(paragraph))
    if not match:
        return None
    return "ul" if match.group(1).lower() == "bullet" else "ol"


def _inline_html(paragraph: Paragraph) -> str:
    parts: list[str] = []
    for item in paragraph.iter_inner_content():
        if isinstance(item, Hyperlink):
            text = "".join(_run_html(run, paragraph) for run in item.runs)
            if item.address:
                parts.append(f'<a href="{escape(item.url)}">{text}</a>')
            else:
                parts.append(text)
        else:
            parts.append(_run_html(item, paragraph))
    return "".join(parts)


def _run_html(run: Run, paragraph: Paragraph) -> str:
    html = escape(run.text, quote=False).replace("\n", "<br />")
    for attribute, tag in reversed(_RUN_TAGS):
        if html and getattr(run.font, attribute):
            html = f"<{tag}>{html}</{tag}>"
    return html + "".join(_run_images(run, paragraph))


def _run_images(run: Run, paragraph: Paragraph) -> list[str]:
    images: list[str] = []
    for r_id in run._element.xpath(".//a:blip/@r:embed"):
        part = paragraph.part.related_parts.get(r_id)
        if part is None:
            logger.debug("Image relationship %s not found, skipping", r_id)
            continue
        payload = base64.b64encode(part.blob).decode("ascii")
        images.append(f'<img src="data:{part.content_type};base64,{payload}" />')
    return images
