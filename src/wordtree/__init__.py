"""wordtree: edit Word documents as a tree of heading sections."""

from wordtree.exceptions import (
    DocumentExportError,
    DocumentImportError,
    WordtreeError,
)
from wordtree.ingestion import decode_base64_document, export_document, import_document
from wordtree.plain_text import to_plain_text
from wordtree.sanitizer import sanitize_markup
from wordtree.schemas import Section, TreeDocument
from wordtree.serializer import clean_content_html, serialize_tree
from wordtree.tables import strip_table_attributes
from wordtree.tree_builder import build_tree, build_tree_from_html

__all__ = [
    "DocumentExportError",
    "DocumentImportError",
    "Section",
    "TreeDocument",
    "WordtreeError",
    "build_tree",
    "build_tree_from_html",
    "clean_content_html",
    "decode_base64_document",
    "export_document",
    "import_document",
    "sanitize_markup",
    "serialize_tree",
    "strip_table_attributes",
    "to_plain_text",
]
