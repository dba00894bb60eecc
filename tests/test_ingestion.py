"""Tests for the import and export pipelines."""

from __future__ import annotations

import base64
from io import BytesIO
from unittest.mock import MagicMock

import pytest
from docx import Document

from wordtree.docx_writer import resolve_data_uri_image
from wordtree.exceptions import DocumentExportError, DocumentImportError
from wordtree.ingestion import decode_base64_document, export_document, import_document
from wordtree.schemas import Section


class TestImportDocument:
    """Tests for import_document."""

    @pytest.mark.asyncio
    async def test_builds_tree_from_word_document(self, sample_docx_bytes: bytes) -> None:
        """The sample document folds into Intro, two chapters and a nested subsection."""
        tree = await import_document(sample_docx_bytes)

        assert [(s.title, s.level) for s in tree] == [
            ("Intro", 1),
            ("Chapter One", 1),
            ("Chapter Two", 1),
        ]
        assert tree[0].content_html == "<p>Preface text</p>"
        assert tree[1].content_html == "<p><strong>Bold</strong> and <em>italic</em></p>"
        details = tree[1].children[0]
        assert details.title == "Details"
        assert details.level == 2
        assert details.content_html.startswith("<ul><li>first</li><li>second</li></ul><table>")
        assert tree[2].content_html.startswith('<p><img src="data:image/png;base64,')

    @pytest.mark.asyncio
    async def test_uses_given_importer(self) -> None:
        """Any object with a convert method can supply the markup."""
        importer = MagicMock()
        importer.convert.return_value = "<h1>A</h1><p>x</p>"

        tree = await import_document(b"raw", importer=importer)

        importer.convert.assert_called_once_with(b"raw")
        assert [(s.title, s.content_html) for s in tree] == [("A", "<p>x</p>")]

    @pytest.mark.asyncio
    async def test_importer_errors_propagate(self) -> None:
        """Import failures reach the caller unchanged."""
        error = DocumentImportError("broken")
        importer = MagicMock()
        importer.convert.side_effect = error

        with pytest.raises(DocumentImportError) as exc_info:
            await import_document(b"raw", importer=importer)

        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_malformed_document_raises(self) -> None:
        """The default importer rejects bytes that are not a Word document."""
        with pytest.raises(DocumentImportError):
            await import_document(b"definitely not a docx")


class TestDecodeBase64Document:
    """Tests for decode_base64_document."""

    def test_bare_base64(self) -> None:
        """A bare base64 payload decodes."""
        assert decode_base64_document(base64.b64encode(b"doc").decode()) == b"doc"

    def test_data_url(self) -> None:
        """The data URL prefix is dropped."""
        payload = (
            "data:application/vnd.openxmlformats-officedocument.wordprocessingml.document;base64,"
            + base64.b64encode(b"doc bytes").decode()
        )

        assert decode_base64_document(payload) == b"doc bytes"

    def test_line_wrapped_base64(self) -> None:
        """Whitespace inside the payload is ignored."""
        encoded = base64.b64encode(b"0123456789" * 10).decode()
        wrapped = "\n".join(encoded[i : i + 20] for i in range(0, len(encoded), 20))

        assert decode_base64_document(wrapped) == b"0123456789" * 10

    @pytest.mark.parametrize("payload", ["", "   ", "data:x;base64,@@@", "abc"])
    def test_invalid_payload_raises(self, payload: str) -> None:
        """Empty or undecodable payloads are import failures."""
        with pytest.raises(DocumentImportError):
            decode_base64_document(payload)


class TestExportDocument:
    """Tests for export_document."""

    @pytest.fixture
    def tree(self) -> list[Section]:
        """An edited tree with vendor artifacts left in its content."""
        return [
            Section(
                title="A",
                level=1,
                content_html='<p w:val="1" style="mso-x:y">x</p>',
                children=[
                    Section(
                        title="B",
                        level=2,
                        content_html='<table border="1"><tr><td width="3">c</td></tr></table>',
                    )
                ],
            )
        ]

    @pytest.mark.asyncio
    async def test_passes_cleaned_markup_to_exporter(self, tree: list[Section]) -> None:
        """The exporter receives serialized, sanitized markup and the data URI resolver."""
        exporter = MagicMock()
        exporter.convert.return_value = b"bytes"

        result = await export_document(tree, exporter=exporter)

        assert result == b"bytes"
        exporter.convert.assert_called_once_with(
            "<h1>A</h1><p>x</p><h2>B</h2><table><tr><td>c</td></tr></table>",
            resolve_data_uri_image,
        )

    @pytest.mark.asyncio
    async def test_default_exporter_writes_docx(self, tree: list[Section]) -> None:
        """The default exporter produces a readable Word document."""
        data = await export_document(tree)

        document = Document(BytesIO(data))
        assert [(p.style.name, p.text) for p in document.paragraphs] == [
            ("Heading 1", "A"),
            ("Normal", "x"),
            ("Heading 2", "B"),
        ]
        assert document.tables[0].cell(0, 0).text == "c"

    @pytest.mark.asyncio
    async def test_plain_export(self, tree: list[Section]) -> None:
        """Plain export writes text only."""
        data = await export_document(tree, plain=True)

        document = Document(BytesIO(data))
        assert [p.text for p in document.paragraphs] == ["A", "x\n", "B", "c"]
        assert document.tables == []

    @pytest.mark.asyncio
    async def test_exporter_errors_propagate(self, tree: list[Section]) -> None:
        """Export failures reach the caller unchanged."""
        exporter = MagicMock()
        exporter.convert.side_effect = DocumentExportError("cannot assemble")

        with pytest.raises(DocumentExportError, match="cannot assemble"):
            await export_document(tree, exporter=exporter)

    @pytest.mark.asyncio
    async def test_import_export_round_trip(self, sample_docx_bytes: bytes) -> None:
        """An imported document re-exports with the same headings."""
        tree = await import_document(sample_docx_bytes)

        document = Document(BytesIO(await export_document(tree)))

        headings = [p.text for p in document.paragraphs if p.style.name.startswith("Heading")]
        assert headings == ["Intro", "Chapter One", "Details", "Chapter Two"]
        assert len(document.tables) == 1
        assert len(document.inline_shapes) == 1
