"""
File reading and saving capabilities.

Import reads a user-selected file asynchronously; export hands the produced
bytes, a MIME type and a file name to a saver. The local implementations work
on the filesystem; other front ends can supply their own.
"""

import asyncio
from pathlib import Path
from typing import Optional, Protocol, Union

from .paths import ensure_directory
from .logging_config import get_logger


logger = get_logger(__name__)

FileHandle = Union[str, Path]


class FileReader(Protocol):
    """Asynchronously yields the full text of a file, or raises on failure."""

    async def read_text(self, file: FileHandle) -> str:
        ...


class FileSaver(Protocol):
    """Receives exported bytes and the name they should be saved under."""

    def save(self, data: bytes, filename: str, mime_type: str) -> Optional[Path]:
        ...


class LocalFileReader:
    """Reads files from the local filesystem in a worker thread."""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    async def read_text(self, file: FileHandle) -> str:
        """
        Read a whole file as text.

        Args:
            file: Path of the file to read.

        Returns:
            The file content.

        Raises:
            OSError: If the file cannot be read.
            UnicodeDecodeError: If the content is not valid text.
        """
        path = Path(file)
        logger.debug(f"Reading {path}")
        return await asyncio.to_thread(path.read_text, encoding=self.encoding)


class DirectoryFileSaver:
    """Saves exported files into a directory."""

    def __init__(self, directory: Path):
        """
        Initialize the saver.

        Args:
            directory: Destination directory, created if missing.
        """
        self.directory = Path(directory)

    def save(self, data: bytes, filename: str, mime_type: str) -> Optional[Path]:
        """
        Write data to directory/filename.

        Args:
            data: Bytes to write.
            filename: Name of the file to create.
            mime_type: MIME type of the data (informational here).

        Returns:
            Path of the written file.
        """
        ensure_directory(self.directory)
        output_path = self.directory / filename
        output_path.write_bytes(data)
        logger.info(f"Saved {len(data)} bytes ({mime_type}) to {output_path}")
        return output_path
