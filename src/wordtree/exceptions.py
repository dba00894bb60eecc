"""Custom exceptions for wordtree."""


class WordtreeError(Exception):
    """Base exception for wordtree operations."""


class DocumentImportError(WordtreeError):
    """The source document could not be converted to markup."""


class DocumentExportError(WordtreeError):
    """Markup could not be assembled into an output document."""
