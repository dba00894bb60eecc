"""Tests for the .docx markup importer."""

from __future__ import annotations

import base64
import zipfile
from io import BytesIO

import pytest
from docx import Document

from wordtree.docx_reader import DocxMarkupImporter
from wordtree.exceptions import DocumentImportError


def _save(document) -> bytes:
    buffer = BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def _replace_part(data: bytes, name: str, content: bytes) -> bytes:
    buffer = BytesIO()
    with zipfile.ZipFile(BytesIO(data)) as source, zipfile.ZipFile(buffer, "w") as target:
        for item in source.infolist():
            payload = content if item.filename == name else source.read(item.filename)
            target.writestr(item, payload)
    return buffer.getvalue()


class TestDocxMarkupImporter:
    """Tests for DocxMarkupImporter.convert."""

    def test_converts_sample_document(self, sample_docx_bytes: bytes, png_bytes: bytes) -> None:
        """Headings, formatting, lists, tables and images all come through in order."""
        markup = DocxMarkupImporter().convert(sample_docx_bytes)

        image_src = "data:image/png;base64," + base64.b64encode(png_bytes).decode("ascii")
        assert markup == (
            "<p>Preface text</p>"
            "<h1>Chapter One</h1>"
            "<p><strong>Bold</strong> and <em>italic</em></p>"
            "<h2>Details</h2>"
            "<ul><li>first</li><li>second</li></ul>"
            "<table>"
            "<tr><td><p>A1</p></td><td><p>B1</p></td></tr>"
            "<tr><td><p>A2</p></td><td><p>B2</p></td></tr>"
            "</table>"
            "<h1>Chapter Two</h1>"
            f'<p><img src="{image_src}" /></p>'
        )

    def test_numbered_list_and_run_styles(self) -> None:
        """Numbered lists become <ol>, underline and strike map to <u> and <s>."""
        document = Document()
        document.add_paragraph("one", style="List Number")
        paragraph = document.add_paragraph()
        paragraph.add_run("under").underline = True
        struck = paragraph.add_run("gone")
        struck.font.strike = True

        markup = DocxMarkupImporter().convert(_save(document))

        assert markup == "<ol><li>one</li></ol><p><u>under</u><s>gone</s></p>"

    def test_escapes_text_and_keeps_line_breaks(self) -> None:
        """Text is escaped and manual line breaks become <br />."""
        document = Document()
        run = document.add_paragraph().add_run("a < b & c")
        run.add_break()
        run.add_text("next")

        markup = DocxMarkupImporter().convert(_save(document))

        assert markup == "<p>a &lt; b &amp; c<br />next</p>"

    def test_empty_paragraphs_kept_by_default(self) -> None:
        """Empty paragraphs survive unless asked otherwise."""
        document = Document()
        document.add_paragraph("")
        document.add_paragraph("x")
        data = _save(document)

        assert DocxMarkupImporter().convert(data) == "<p></p><p>x</p>"
        assert DocxMarkupImporter(ignore_empty_paragraphs=True).convert(data) == "<p>x</p>"

    def test_merged_cells_emitted_once(self) -> None:
        """A horizontally merged cell appears once in its row."""
        document = Document()
        table = document.add_table(rows=1, cols=3)
        merged = table.cell(0, 0).merge(table.cell(0, 1))
        merged.text = "wide"
        table.cell(0, 2).text = "narrow"

        markup = DocxMarkupImporter().convert(_save(document))

        assert markup.count("<td>") == 2
        assert "narrow" in markup

    @pytest.mark.parametrize("data", [b"", b"not a word document", b"PK\x03\x04broken"])
    def test_malformed_input_raises_import_error(self, data: bytes) -> None:
        """Unreadable input raises DocumentImportError."""
        with pytest.raises(DocumentImportError):
            DocxMarkupImporter().convert(data)

    @pytest.mark.parametrize("content", [b"<w:document><broken", b"not xml at all"])
    def test_corrupt_document_part_raises_import_error(
        self, sample_docx_bytes: bytes, content: bytes
    ) -> None:
        """A valid package whose main document part is not well-formed XML fails cleanly."""
        data = _replace_part(sample_docx_bytes, "word/document.xml", content)

        with pytest.raises(DocumentImportError):
            DocxMarkupImporter().convert(data)
