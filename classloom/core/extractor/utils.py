"""Extractor utilities.

Source-file detection and directory walking for extraction units.
"""

import os
from typing import Iterable, List, Sequence

from ..constants import SOURCE_SUFFIXES

# Directories to skip during file walking
SKIP_DIRECTORIES = frozenset({
    ".git",
    ".svn",
    ".hg",
    ".idea",
    ".gradle",
    "node_modules",
    "build",
    "target",
    "out",
    "bin",
    "__pycache__",
})


def is_source_file(file_path: str, suffixes: Sequence[str] = SOURCE_SUFFIXES) -> bool:
    """Check if a file follows the source-file suffix convention.

    Args:
        file_path: Path to the file
        suffixes: Accepted file suffixes (e.g. ".java")

    Returns:
        True if the file should be extracted
    """
    _, ext = os.path.splitext(file_path)
    return ext in suffixes


def should_skip_directory(dir_name: str, extra: Iterable[str] = ()) -> bool:
    """Check if a directory should be skipped during file walking.

    Args:
        dir_name: Directory name (not full path)
        extra: Additional directory names to skip

    Returns:
        True if directory should be skipped
    """
    return dir_name in SKIP_DIRECTORIES or dir_name in set(extra) or dir_name.startswith(".")


def collect_source_files(
    root_path: str,
    suffixes: Sequence[str] = SOURCE_SUFFIXES,
    skip_directories: Iterable[str] = (),
) -> List[str]:
    """Recursively collect every source file under ``root_path``.

    Directories and files are visited in sorted order so the same tree
    always yields the same list.
    """
    extra = tuple(skip_directories)
    files: List[str] = []
    for dirpath, dirnames, filenames in os.walk(root_path):
        dirnames[:] = sorted(d for d in dirnames if not should_skip_directory(d, extra))
        for filename in sorted(filenames):
            if is_source_file(filename, suffixes):
                files.append(os.path.join(dirpath, filename))
    return files
