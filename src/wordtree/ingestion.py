"""Import pipeline (document -> section tree) and export pipeline (tree -> document)."""

from __future__ import annotations

import asyncio
import base64
import binascii
import logging
from typing import Iterable

from wordtree.docx_reader import DocxMarkupImporter
from wordtree.docx_writer import DocxMarkupExporter, build_plain_docx, resolve_data_uri_image
from wordtree.exceptions import DocumentImportError
from wordtree.interfaces import MarkupExporter, MarkupImporter
from wordtree.schemas import Section
from wordtree.sections import count_sections
from wordtree.serializer import serialize_tree
from wordtree.tree_builder import build_tree_from_html

logger = logging.getLogger(__name__)


async def import_document(
    data: bytes,
    *,
    importer: MarkupImporter | None = None,
) -> list[Section]:
    """Convert a binary document to markup and fold it into a section tree.

    The importer runs in a worker thread. Its errors propagate unchanged and
    no partial tree is returned.

    Args:
        data: Raw document bytes.
        importer: Markup importer to use. Defaults to ``DocxMarkupImporter``.

    Returns:
        The root sections of the document.

    Raises:
        DocumentImportError: If the importer cannot read the document.
    """
    converter = importer or DocxMarkupImporter()
    markup = await asyncio.to_thread(converter.convert, data)
    tree = build_tree_from_html(markup)
    logger.info(
        "Imported document",
        extra={"bytes": len(data), "markup_length": len(markup), "sections": count_sections(tree)},
    )
    return tree


def decode_base64_document(payload: str) -> bytes:
    """Decode a base64 document, with or without a ``data:...;base64,`` prefix.

    Raises:
        DocumentImportError: If the payload is empty or not valid base64.
    """
    if not payload or not payload.strip():
        raise DocumentImportError("No base64 document provided")
    encoded = payload.split(",", 1)[1] if "," in payload else payload
    try:
        return base64.b64decode("".join(encoded.split()), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DocumentImportError(f"Invalid base64 document: {exc}") from exc


async def export_document(
    tree: Iterable[Section],
    *,
    exporter: MarkupExporter | None = None,
    plain: bool = False,
) -> bytes:
    """Serialize a (possibly edited) section tree and assemble a document.

    Args:
        tree: Root sections in order.
        exporter: Markup exporter to use. Defaults to ``DocxMarkupExporter``.
        plain: Write headings and plain-text paragraphs only, ignoring
            inline formatting, tables and images.

    Returns:
        The document bytes.

    Raises:
        DocumentExportError: If the document cannot be assembled.
    """
    sections = list(tree)
    if plain:
        data = await asyncio.to_thread(build_plain_docx, sections)
        logger.info("Exported plain document", extra={"sections": count_sections(sections)})
        return data

    markup = serialize_tree(sections)
    converter = exporter or DocxMarkupExporter()
    data = await asyncio.to_thread(converter.convert, markup, resolve_data_uri_image)
    logger.info(
        "Exported document",
        extra={"markup_length": len(markup), "bytes": len(data), "sections": count_sections(sections)},
    )
    return data
