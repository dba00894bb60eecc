"""Section tree walking and display utilities."""

from __future__ import annotations

from typing import Iterable, Iterator

from wordtree.schemas import Section


def iter_sections(sections: Iterable[Section]) -> Iterator[Section]:
    """Yield every section in document (pre-)order."""
    for section in sections:
        yield section
        yield from iter_sections(section.children)


def count_sections(sections: Iterable[Section]) -> int:
    """Count total sections in the tree."""
    return sum(1 for _ in iter_sections(sections))


def find_section(sections: Iterable[Section], section_id: str) -> Section | None:
    """Return the section with ``section_id``, or ``None``."""
    for section in iter_sections(sections):
        if section.id == section_id:
            return section
    return None


def render_outline(sections: list[Section], indent: int = 0) -> str:
    """Render titles as an indented outline, four spaces per depth."""
    lines: list[str] = []
    for section in sections:
        title = section.title or "(untitled)"
        lines.append(" " * (indent * 4) + f"{title} [h{section.level}]")
        if section.children:
            lines.append(render_outline(section.children, indent + 1))
    return "\n".join(lines)
