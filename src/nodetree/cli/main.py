"""
Command-line interface for NODETREE.

This module provides a CLI for editing a stored node tree: listing, adding,
editing, soft-deleting, moving, exporting and importing nodes, and for
viewing or changing the persistent settings.
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from .. import __version__
from ..config.settings import get_settings, get_settings_manager, settings_to_data
from ..core.cursor import child_cursor
from ..core.export import ImportStatus
from ..core.models import Node
from ..core.repository import NodeRepository
from ..infrastructure.files import DirectoryFileSaver
from ..infrastructure.logging_config import setup_logging, get_logger
from ..infrastructure.storage import JsonFileStore


logger = get_logger(__name__)

MOVE_DIRECTIONS = ("backward", "forward", "upward", "downward")


def create_parser() -> argparse.ArgumentParser:
    """
    Create the argument parser for the CLI.

    Returns:
        Configured ArgumentParser.
    """
    parser = argparse.ArgumentParser(
        prog="nodetree",
        description="Edit cursor-addressed node trees kept in a key-value store"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"NODETREE {__version__}"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )

    parser.add_argument("--store", type=Path, help="Path to the JSON store file")
    parser.add_argument("--key", help="Key the tree is stored under")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("show", help="Print the tree with cursors")

    add_parser = subparsers.add_parser("add", help="Add a node")
    add_parser.add_argument("node", help="Node as a JSON object")
    add_parser.add_argument("--cursor", help="Cursor of the parent node (default: root)")

    get_parser = subparsers.add_parser("get", help="Print a node as JSON")
    get_parser.add_argument("cursor", help="Cursor of the node")

    set_parser = subparsers.add_parser("set", help="Set a field of a node")
    set_parser.add_argument("cursor", help="Cursor of the node")
    set_parser.add_argument("field", help="Field name")
    set_parser.add_argument("value", help="New value (JSON, or plain text)")

    delete_parser = subparsers.add_parser("delete", help="Soft-delete a node")
    delete_parser.add_argument("cursor", help="Cursor of the node")

    move_parser = subparsers.add_parser("move", help="Move a node")
    move_parser.add_argument("direction", choices=MOVE_DIRECTIONS, help="Direction of the move")
    move_parser.add_argument("cursor", help="Cursor of the node")

    export_parser = subparsers.add_parser("export", help="Export the tree to a timestamped file")
    export_parser.add_argument("--name", help="Base name of the export file")
    export_parser.add_argument("--output", type=Path, help="Output directory")

    import_parser = subparsers.add_parser("import", help="Import nodes from a JSON file")
    import_parser.add_argument("file", type=Path, help="File to import")
    import_parser.add_argument("--merge", action="store_true", default=None,
                               help="Append to the tree instead of replacing it")

    config_parser = subparsers.add_parser("config", help="Show or change settings")
    config_parser.add_argument("name", nargs="?", help="Setting name")
    config_parser.add_argument("value", nargs="?", help="New value (JSON, or plain text)")

    return parser


def open_repository(args: argparse.Namespace) -> NodeRepository:
    """
    Open and load the repository selected by the arguments and settings.

    Args:
        args: Parsed command-line arguments.

    Returns:
        A loaded NodeRepository.

    Raises:
        ValueError: If the stored tree is corrupt.
    """
    settings = get_settings()
    store_path = args.store or settings.store_file_path
    key = args.key or settings.storage_key

    repository = NodeRepository(JsonFileStore(store_path), key)
    repository.load()
    return repository


def parse_value(text: str) -> Any:
    """Parse a command-line value as JSON, falling back to the plain string."""
    try:
        return json.loads(text)
    except ValueError:
        return text


def format_tree(nodes: list, cursor: Optional[str] = None, depth: int = 0) -> list[str]:
    """
    Render a tree as indented lines, one node per line.

    Args:
        nodes: List of nodes to render.
        cursor: Cursor of the list's owner, or None for the roots.
        depth: Indentation level.

    Returns:
        Lines of text.
    """
    lines = []
    for index, node in enumerate(nodes):
        node_cursor = child_cursor(cursor, index)
        if not isinstance(node, Node):
            lines.append(f"{'  ' * depth}{node_cursor} <malformed>")
            continue

        label = ", ".join(f"{k}={v!r}" for k, v in node.fields.items())
        marker = "" if node.is_visible else " (deleted)"
        lines.append(f"{'  ' * depth}{node_cursor} [{node.get_field('type')}]{marker} {label}".rstrip())

        if isinstance(node.children, list):
            lines.extend(format_tree(node.children, node_cursor, depth + 1))
    return lines


def cmd_show(args: argparse.Namespace) -> int:
    """
    Print the tree with cursors.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Exit code (0 for success).
    """
    repository = open_repository(args)
    for line in format_tree(repository.nodes):
        print(line)
    return 0


def cmd_add(args: argparse.Namespace) -> int:
    """
    Add a node and print its cursor.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Exit code (0 for success).
    """
    data = parse_value(args.node)
    if not isinstance(data, dict):
        logger.error(f"Node must be a JSON object: {args.node}")
        return 1

    repository = open_repository(args)
    new_cursor = repository.add(Node.from_dict(data), args.cursor)
    if new_cursor is None:
        logger.error(f"Node not found: {args.cursor}")
        return 1

    repository.save()
    print(new_cursor)
    return 0


def cmd_get(args: argparse.Namespace) -> int:
    """Print the node at a cursor as JSON."""
    repository = open_repository(args)
    node = repository.get(args.cursor)
    if node is None:
        logger.error(f"Node not found: {args.cursor}")
        return 1

    print(json.dumps(node.to_dict(), indent=2, ensure_ascii=False))
    return 0


def cmd_set(args: argparse.Namespace) -> int:
    """Set a field of the node at a cursor."""
    repository = open_repository(args)
    if not repository.set_field(args.cursor, args.field, parse_value(args.value)):
        logger.error(f"Node not found: {args.cursor}")
        return 1

    repository.save()
    return 0


def cmd_delete(args: argparse.Namespace) -> int:
    """Soft-delete the node at a cursor."""
    repository = open_repository(args)
    if not repository.delete(args.cursor):
        logger.error(f"Node not found: {args.cursor}")
        return 1

    repository.save()
    return 0


def cmd_move(args: argparse.Namespace) -> int:
    """
    Move the node at a cursor in the given direction.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Exit code (0 for success, 1 if the node could not move).
    """
    repository = open_repository(args)
    move = getattr(repository, f"move_{args.direction}")
    if not move(args.cursor):
        logger.error(f"Cannot move {args.cursor} {args.direction}")
        return 1

    repository.save()
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    """
    Export the tree to a timestamped file.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Exit code (0 for success).
    """
    settings = get_settings()
    repository = open_repository(args)

    output = args.output or settings.export_directory
    filename = repository.export(args.name or settings.export_name, DirectoryFileSaver(output))
    print(Path(output) / filename)
    return 0


def cmd_import(args: argparse.Namespace) -> int:
    """
    Import nodes from a file, merging or replacing the tree.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Exit code (0 when the tree was changed or the file was empty).
    """
    settings = get_settings()
    repository = open_repository(args)
    merge = settings.merge_on_import if args.merge is None else args.merge

    result = asyncio.run(repository.import_file(
        args.file,
        settings.required_fields,
        merge=merge,
        tolerant=settings.tolerant_validation
    ))

    for issue in result.issues:
        logger.error(f"{issue.message} ({issue.kind.value}: {issue.detail})")

    if result.status == ImportStatus.SUCCESS:
        repository.save()
        print(f"Imported {result.imported_count} nodes")
        return 0
    return 0 if result.status == ImportStatus.EMPTY else 1


def cmd_config(args: argparse.Namespace) -> int:
    """
    Print or change persistent settings.

    With no name, prints every setting; with a name, prints that setting;
    with a name and a value, updates and saves it.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Exit code (0 for success).
    """
    manager = get_settings_manager()
    data = settings_to_data(manager.get())

    if args.name is None:
        print(json.dumps(data, indent=2, ensure_ascii=False))
        return 0

    if args.value is None:
        if args.name not in data:
            logger.error(f"Unknown setting: {args.name}")
            return 1
        print(json.dumps(data[args.name], ensure_ascii=False))
        return 0

    manager.update(**{args.name: parse_value(args.value)})
    return 0


COMMANDS = {
    "show": cmd_show,
    "add": cmd_add,
    "get": cmd_get,
    "set": cmd_set,
    "delete": cmd_delete,
    "move": cmd_move,
    "export": cmd_export,
    "import": cmd_import,
    "config": cmd_config,
}


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Arguments to parse. If None, uses sys.argv.

    Returns:
        Exit code.
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    log_level = logging.DEBUG if args.verbose else settings.log_level
    setup_logging(level=log_level, log_file=settings.log_file_path, log_to_file=settings.log_to_file)

    handler = COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        return 0

    try:
        return handler(args)
    except ValueError as e:
        # Corrupt store content surfaces here
        logger.error(f"Failed to {args.command}: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
