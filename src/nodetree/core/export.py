"""
Export and import of node trees as JSON files.

Export writes the visible root nodes to a timestamped file through a file
saver. Import reads a user-selected file, checks that every node carries the
required fields, and either merges the imported nodes into the tree or
replaces the tree with them.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Iterable, Optional

from .models import Node, nodes_from_data
from .persistence import serialize_nodes
from .validation import all_fields_present
from ..infrastructure.files import DirectoryFileSaver, FileHandle, FileReader, FileSaver, LocalFileReader
from ..infrastructure.logging_config import get_logger


logger = get_logger(__name__)

EXPORT_MIME_TYPE = "application/json;charset=utf-8"
DEFAULT_LOAD_ERROR_TEXT = "error: cannot load file."
DEFAULT_FORMAT_ERROR_TEXT = "error: file format is wrong."


class ImportStatus(Enum):
    """Outcome of an import."""

    SUCCESS = "success"
    """Nodes were merged into, or replaced, the tree."""

    EMPTY = "empty"
    """The file was valid but held no nodes; the tree is unchanged."""

    LOAD_ERROR = "load_error"
    """No file was supplied or it could not be read."""

    FORMAT_ERROR = "format_error"
    """The file could not be parsed or failed validation."""


class ImportErrorKind(Enum):
    """Kind of problem found while importing."""

    LOAD = "load"
    PARSE = "parse"
    VALIDATION = "validation"


@dataclass
class ImportIssue:
    """
    A single problem reported during an import.
    """

    kind: ImportErrorKind
    """What went wrong."""

    message: str
    """The error text handed to the error callback."""

    detail: str = ""
    """Underlying error description, if any."""


@dataclass
class ImportResult:
    """
    Result of an import.

    A bad file may yield both a parse issue and a validation issue; both are
    kept, in the order they were found.
    """

    status: ImportStatus
    """Overall outcome."""

    imported_count: int = 0
    """Number of root nodes merged or written."""

    issues: list[ImportIssue] = field(default_factory=list)
    """Problems found, in order."""

    @property
    def succeeded(self) -> bool:
        """Whether the tree was changed by the import."""
        return self.status == ImportStatus.SUCCESS


def export_timestamp(moment: Optional[datetime] = None) -> str:
    """
    Format a moment as YYYYMMDDTHHMMSS.

    Args:
        moment: Local date and time. If None, uses the current local time.

    Returns:
        The timestamp string.
    """
    if moment is None:
        moment = datetime.now()
    return (
        f"{moment.year}{moment.month:02d}{moment.day:02d}"
        f"T{moment.hour:02d}{moment.minute:02d}{moment.second:02d}"
    )


def export_filename(base_name: str, moment: Optional[datetime] = None) -> str:
    """
    Build the export file name ``<base_name>-<YYYYMMDD>T<HHMMSS>.json``.

    Args:
        base_name: Leading part of the file name.
        moment: Local date and time. If None, uses the current local time.

    Returns:
        The file name.
    """
    return f"{base_name}-{export_timestamp(moment)}.json"


def export_nodes(
    nodes: list[Node],
    base_name: str,
    saver: Optional[FileSaver] = None,
    moment: Optional[datetime] = None
) -> str:
    """
    Export the visible root nodes to a timestamped JSON file.

    Soft-deleted root nodes are skipped; nested ones are exported as they are.

    Args:
        nodes: The root list of the tree.
        base_name: Leading part of the file name.
        saver: File saver receiving the bytes. If None, saves to the current
            directory.
        moment: Time used for the file name. If None, uses the current local time.

    Returns:
        The name of the exported file.
    """
    if saver is None:
        saver = DirectoryFileSaver(".")

    filename = export_filename(base_name, moment)
    data = serialize_nodes(nodes).encode("utf-8")
    saver.save(data, filename, EXPORT_MIME_TYPE)

    logger.info(f"Exported nodes to {filename}")
    return filename


def _merge_nodes(nodes: list[Node], imported: list[Node]) -> None:
    """Append every imported node to the root list."""
    nodes.extend(imported)


def _replace_nodes(nodes: list[Node], imported: list[Node]) -> None:
    """Truncate the root list to the imported length and overwrite it in place."""
    del nodes[len(imported):]
    for index, node in enumerate(imported):
        if index < len(nodes):
            nodes[index] = node
        else:
            nodes.append(node)


async def import_nodes(
    nodes: list[Node],
    file: Optional[FileHandle],
    required_fields: Iterable[str],
    merge: bool = False,
    reader: Optional[FileReader] = None,
    on_load_error: Optional[Callable[[str], Any]] = None,
    on_format_error: Optional[Callable[[str], Any]] = None,
    on_success: Optional[Callable[[], Any]] = None,
    tolerant: bool = True,
    load_error_text: str = DEFAULT_LOAD_ERROR_TEXT,
    format_error_text: str = DEFAULT_FORMAT_ERROR_TEXT
) -> ImportResult:
    """
    Import nodes from a JSON file into the tree.

    The file must hold a list of nodes, each (with its descendants) carrying
    every required field. Parsing and validation are reported separately: a
    parse failure calls on_format_error, and a validation failure of whatever
    value resulted calls it again, so a single bad file may be reported twice.

    Args:
        nodes: The root list of the tree, modified in place.
        file: The selected file, or None when a selection held no file.
        required_fields: Names of the fields every node must carry.
        merge: If True, append the imported nodes to the tree; otherwise the
            imported nodes replace the tree.
        reader: File reader to use. If None, reads from the local filesystem.
        on_load_error: Called with load_error_text when the file cannot be loaded.
        on_format_error: Called with format_error_text on each format problem.
        on_success: Called once after the tree has been changed.
        tolerant: Validation policy for malformed ``children`` values.
        load_error_text: Message for load errors.
        format_error_text: Message for format errors.

    Returns:
        The ImportResult describing the outcome.
    """
    required_fields = list(required_fields)

    if file is None:
        logger.warning("Import requested without a file")
        if on_load_error:
            on_load_error(load_error_text)
        return ImportResult(
            status=ImportStatus.LOAD_ERROR,
            issues=[ImportIssue(ImportErrorKind.LOAD, load_error_text, "no file selected")]
        )

    if reader is None:
        reader = LocalFileReader()

    try:
        text = await reader.read_text(file)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Failed to read import file {file}: {e}")
        if on_load_error:
            on_load_error(load_error_text)
        return ImportResult(
            status=ImportStatus.LOAD_ERROR,
            issues=[ImportIssue(ImportErrorKind.LOAD, load_error_text, str(e))]
        )

    issues: list[ImportIssue] = []
    data: Any = None

    try:
        data = json.loads(text)
    except ValueError as e:
        logger.warning(f"Failed to parse import file {file}: {e}")
        issues.append(ImportIssue(ImportErrorKind.PARSE, format_error_text, str(e)))
        if on_format_error:
            on_format_error(format_error_text)

    # Validation runs on whatever value resulted, even after a parse failure
    if not all_fields_present(data, required_fields, tolerant=tolerant):
        logger.warning(f"Import file {file} has nodes with missing fields")
        issues.append(ImportIssue(
            ImportErrorKind.VALIDATION,
            format_error_text,
            f"required fields: {', '.join(required_fields)}"
        ))
        if on_format_error:
            on_format_error(format_error_text)

    if issues:
        return ImportResult(status=ImportStatus.FORMAT_ERROR, issues=issues)

    if not isinstance(data, list) or not data:
        logger.info(f"Import file {file} holds no nodes")
        return ImportResult(status=ImportStatus.EMPTY)

    imported = nodes_from_data(data)
    if merge:
        _merge_nodes(nodes, imported)
    else:
        _replace_nodes(nodes, imported)

    logger.info(f"Imported {len(imported)} root nodes from {file} ({'merge' if merge else 'replace'})")

    if on_success:
        on_success()

    return ImportResult(status=ImportStatus.SUCCESS, imported_count=len(imported))
