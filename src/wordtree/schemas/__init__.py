"""Shared schemas for wordtree."""

from wordtree.schemas.sections import Section, TreeDocument, new_section_id

__all__ = ["Section", "TreeDocument", "new_section_id"]
