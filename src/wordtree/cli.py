"""Command line interface for wordtree."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from pydantic import ValidationError

from wordtree.exceptions import WordtreeError
from wordtree.ingestion import export_document, import_document
from wordtree.schemas import Section, TreeDocument
from wordtree.sections import count_sections, render_outline
from wordtree.serializer import serialize_tree
from wordtree.utils.logging_config import configure_logging, get_logger

logger = get_logger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging("DEBUG" if args.verbose else None)

    try:
        return args.handler(args)
    except WordtreeError as exc:
        logger.error("%s", exc)
        return 1
    except (json.JSONDecodeError, ValidationError) as exc:
        logger.error("Invalid section tree: %s", exc)
        return 1
    except FileNotFoundError as exc:
        logger.error("File not found: %s", exc.filename)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wordtree",
        description="Convert Word documents to editable section trees and back.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    import_cmd = commands.add_parser("import", help="Write the section tree of a .docx as JSON")
    import_cmd.add_argument("document", type=Path, help="Input .docx file")
    import_cmd.add_argument("-o", "--output", type=Path, help="Output JSON file (default: stdout)")
    import_cmd.add_argument("--indent", type=int, default=2, help="JSON indentation")
    import_cmd.set_defaults(handler=_run_import)

    outline_cmd = commands.add_parser("outline", help="Print the heading outline of a .docx")
    outline_cmd.add_argument("document", type=Path, help="Input .docx file")
    outline_cmd.set_defaults(handler=_run_outline)

    markup_cmd = commands.add_parser("markup", help="Print the cleaned markup of a section tree")
    markup_cmd.add_argument("tree", type=Path, help="Section tree JSON file")
    markup_cmd.add_argument("-o", "--output", type=Path, help="Output HTML file (default: stdout)")
    markup_cmd.set_defaults(handler=_run_markup)

    export_cmd = commands.add_parser("export", help="Write a section tree to .docx")
    export_cmd.add_argument("tree", type=Path, help="Section tree JSON file")
    export_cmd.add_argument("-o", "--output", type=Path, required=True, help="Output .docx file")
    export_cmd.add_argument(
        "--plain", action="store_true", help="Headings and plain text only, no formatting"
    )
    export_cmd.set_defaults(handler=_run_export)

    return parser


def _run_import(args: argparse.Namespace) -> int:
    tree = asyncio.run(import_document(args.document.read_bytes()))
    payload = TreeDocument(tree=tree).model_dump_json(by_alias=True, indent=args.indent)
    _write_text(args.output, payload)
    return 0


def _run_outline(args: argparse.Namespace) -> int:
    tree = asyncio.run(import_document(args.document.read_bytes()))
    print("Sections:")
    if tree:
        print(render_outline(tree))
    print(f"Total: {count_sections(tree)}")
    return 0


def _run_markup(args: argparse.Namespace) -> int:
    _write_text(args.output, serialize_tree(load_tree(args.tree)))
    return 0


def _run_export(args: argparse.Namespace) -> int:
    data = asyncio.run(export_document(load_tree(args.tree), plain=args.plain))
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_bytes(data)
    logger.info("Wrote %s", args.output)
    return 0


def load_tree(path: Path) -> list[Section]:
    """Load a section tree from ``{"tree": [...]}`` or a bare list of sections."""
    raw = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(raw, list):
        raw = {"tree": raw}
    return TreeDocument.model_validate(raw).tree


def _write_text(output: Path | None, text: str) -> None:
    if output is None:
        sys.stdout.write(text + "\n")
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")


if __name__ == "__main__":
    sys.exit(main())
