"""Section tree models."""

from __future__ import annotations

from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from wordtree.config import WORDTREE_SECTION_ID_PREFIX


def new_section_id() -> str:
    """Return a process-local unique section identifier."""
    return f"{WORDTREE_SECTION_ID_PREFIX}{uuid4().hex[:12]}"


class Section(BaseModel):
    """A heading and the content that follows it, with nested subsections.

    Attributes:
        id: Opaque identifier, unique within one tree's lifetime.
        title: Trimmed heading text. May be empty.
        level: Heading depth (1-6). Editors may reassign it; serialization
            always emits the current value.
        content_html: Markup between this heading and the next heading.
            Exchanged as ``contentHtml``.
        children: Subsections, each with a greater level.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=new_section_id)
    title: str = ""
    level: int = Field(..., ge=1, le=6)
    content_html: str = Field(default="", alias="contentHtml")
    children: list["Section"] = Field(default_factory=list)


class TreeDocument(BaseModel):
    """Section tree as exchanged with the editing surface."""

    tree: list[Section] = Field(default_factory=list)
