"""
Source file utilities for the census job.

This module covers the node-local side of the input: enumerating the
files of a source directory and streaming each file line by line, so
workers never hold more than the current line in memory.
"""

from collections.abc import Iterator
from pathlib import Path


def list_source_files(directory: str | Path) -> list[Path]:
    """
    List the data files of a source directory.

    Only regular files directly inside the directory are returned
    (subdirectories are not descended into). The list is sorted by file
    name so that file-to-worker assignment is deterministic.

    Args:
        directory: Directory holding the sequence files

    Returns:
        Sorted list of absolute file paths (Spark workers do not share
        the caller's working directory)

    Raises:
        FileNotFoundError: If the directory does not exist
        NotADirectoryError: If the path exists but is not a directory
    """
    path = Path(directory).absolute()
    if not path.exists():
        raise FileNotFoundError(f"Source directory does not exist: {path}")
    if not path.is_dir():
        raise NotADirectoryError(f"Source path is not a directory: {path}")

    return sorted((p for p in path.iterdir() if p.is_file()), key=lambda p: p.name)


def iter_lines(path: str | Path) -> Iterator[str]:
    """
    Lazily yield the lines of a UTF-8 text file.

    Line terminators ("\\n" and "\\r\\n") are removed; no other whitespace
    is touched. The file is closed once iteration ends, including when the
    consumer stops early or a read fails.

    Args:
        path: File to read

    Yields:
        One line of text at a time
    """
    with Path(path).open("r", encoding="utf-8", newline="") as f:
        for line in f:
            yield line.rstrip("\r\n")
