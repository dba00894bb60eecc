"""Test setup for wordtree."""

from __future__ import annotations

import base64
import sys
from io import BytesIO
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

# 1x1 PNG.
PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


@pytest.fixture
def png_bytes() -> bytes:
    """A tiny valid PNG image."""
    return PNG_BYTES


@pytest.fixture
def sample_docx_bytes(png_bytes: bytes) -> bytes:
    """A Word document with an intro paragraph, nested headings, a list, a table and an image."""
    from docx import Document

    document = Document()
    document.add_paragraph("Preface text")
    document.add_heading("Chapter One", level=1)
    paragraph = document.add_paragraph()
    paragraph.add_run("Bold").bold = True
    paragraph.add_run(" and ")
    paragraph.add_run("italic").italic = True
    document.add_heading("Details", level=2)
    document.add_paragraph("first", style="List Bullet")
    document.add_paragraph("second", style="List Bullet")
    table = document.add_table(rows=2, cols=2)
    table.cell(0, 0).text = "A1"
    table.cell(0, 1).text = "B1"
    table.cell(1, 0).text = "A2"
    table.cell(1, 1).text = "B2"
    document.add_heading("Chapter Two", level=1)
    document.add_paragraph().add_run().add_picture(BytesIO(png_bytes))

    buffer = BytesIO()
    document.save(buffer)
    return buffer.getvalue()
