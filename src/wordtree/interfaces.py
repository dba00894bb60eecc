"""Contracts for the binary-format collaborators around the core."""

from __future__ import annotations

from typing import Callable, Optional, Protocol

ImageResolver = Callable[[str], Optional[bytes]]


class MarkupImporter(Protocol):
    """Converts a binary document into linear markup."""

    def convert(self, data: bytes) -> str:
        """Return markup with images inlined as ``data:`` URIs.

        Raises:
            DocumentImportError: If the document cannot be read.
        """


class MarkupExporter(Protocol):
    """Assembles a binary document from sanitized markup."""

    def convert(self, markup: str, image_resolver: ImageResolver) -> bytes:
        """Return document bytes.

        ``image_resolver`` maps an image ``src`` to raw bytes, or ``None``
        when it cannot; such images are left out.

        Raises:
            DocumentExportError: If the document cannot be assembled.
        """
