"""
File access for Solution Graph.

The resolver only needs two primitives, ``exists`` and ``read_text``.
``FileSystem`` describes them so tests can swap the disk for a dict.
"""

import os
from typing import Optional, Protocol

from .exceptions import FileAccessError

DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024


class FileSystem(Protocol):
    """The file-system operations the resolver depends on.

    ``read_text`` should raise ``FileAccessError`` for a file it cannot read.
    The resolver also accepts a plain ``OSError`` from either method and
    reports it the same way.
    """

    def exists(self, path: str) -> bool: ...

    def read_text(self, path: str) -> str: ...


class LocalFileSystem:
    """Reads from the local disk with a size limit."""

    def __init__(
        self,
        encoding: str = "utf-8",
        errors: str = "replace",
        max_file_size: Optional[int] = DEFAULT_MAX_FILE_SIZE,
    ):
        self.encoding = encoding
        self.errors = errors
        self.max_file_size = max_file_size

    def exists(self, path: str) -> bool:
        return os.path.isfile(path)

    def read_text(self, path: str) -> str:
        return safe_read_file(
            path,
            max_file_size=self.max_file_size,
            encoding=self.encoding,
            errors=self.errors,
        )


def safe_read_file(
    filepath: str,
    max_file_size: Optional[int] = DEFAULT_MAX_FILE_SIZE,
    encoding: str = "utf-8",
    errors: str = "replace",
) -> str:
    """
    Read a text file, refusing files above ``max_file_size`` bytes.

    A leading byte-order mark is kept; callers that parse the text strip it.

    Args:
        filepath: File to read
        max_file_size: Size limit in bytes (None disables the check)
        encoding: Text encoding
        errors: How to handle encoding errors

    Returns:
        File contents as string

    Raises:
        FileAccessError: If the file cannot be read or is too large
    """
    if max_file_size is not None:
        try:
            size = os.path.getsize(filepath)
        except OSError as e:
            raise FileAccessError(filepath, f"Cannot stat file: {e}")
        if size > max_file_size:
            size_mb = size / (1024 * 1024)
            limit_mb = max_file_size / (1024 * 1024)
            raise FileAccessError(
                filepath, f"File size ({size_mb:.2f}MB) exceeds limit ({limit_mb:.2f}MB)"
            )

    try:
        with open(filepath, encoding=encoding, errors=errors) as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise FileAccessError(filepath, f"Encoding error: {e}")
    except LookupError as e:
        raise FileAccessError(filepath, f"Unknown encoding: {e}")
    except OSError as e:
        raise FileAccessError(filepath, f"OS error: {e}")
