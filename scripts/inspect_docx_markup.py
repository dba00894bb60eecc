"""Inspect the markup produced for a Word document to tune sanitizer rules."""

from __future__ import annotations

import argparse
from collections import Counter
from pathlib import Path

from bs4 import BeautifulSoup

from wordtree.docx_reader import DocxMarkupImporter
from wordtree.sanitizer import sanitize_markup


def main() -> None:
    parser = argparse.ArgumentParser(description="Inspect tags and attributes of converted Word markup.")
    parser.add_argument("--docx", help="Word document to convert first")
    parser.add_argument("--file", help="Local HTML file path")
    parser.add_argument("--sanitized", action="store_true", help="Report on sanitized markup")
    args = parser.parse_args()

    if not args.docx and not args.file:
        parser.error("Provide --docx or --file")

    html = load_markup(docx_path=args.docx, file_path=args.file)
    if args.sanitized:
        html = sanitize_markup(html)
    soup = BeautifulSoup(html, "html.parser")
    tags, attrs = collect_stats(soup)

    print("Tags:")
    for name, count in tags.most_common():
        print(f"{name}: {count}")

    print("\nAttributes:")
    for name, count in attrs.most_common():
        print(f"{name}: {count}")


def load_markup(*, docx_path: str | None, file_path: str | None) -> str:
    if docx_path:
        return DocxMarkupImporter().convert(Path(docx_path).read_bytes())

    path = Path(file_path or "")
    if not path.is_file():
        raise FileNotFoundError(f"HTML file not found: {path}")
    return path.read_text(encoding="utf-8")


def collect_stats(soup: BeautifulSoup) -> tuple[Counter, Counter]:
    tags = Counter()
    attrs = Counter()

    for tag in soup.find_all(True):
        tags[tag.name] += 1
        for attr in tag.attrs:
            attrs[f"{tag.name}[{attr}]"] += 1
    return tags, attrs


if __name__ == "__main__":
    main()
