"""classloom Structural Extractor — tree-sitter based source scanning.

Public API:
    extract(source_text, namespace_hint) -> List[ExtractedType]
    extract_file(path, namespace_hint) -> List[ExtractedType]
    extract_unit(root_path) -> List[ExtractedType]
    scan_unit(root_path) -> UnitScan
"""

import logging
import os
from typing import Iterable, List, Sequence

from ..constants import SOURCE_SUFFIXES
from ..uml.errors import UnreadableInput
from .builder import build_classifier, build_diagram
from .java_extractor import JavaStructureExtractor, normalize_type
from .models import ExtractedType, ExtractionIssue, UnitScan
from .utils import collect_source_files, is_source_file, should_skip_directory

logger = logging.getLogger(__name__)

__all__ = [
    "extract",
    "extract_file",
    "extract_unit",
    "scan_unit",
    "build_classifier",
    "build_diagram",
    "normalize_type",
    "is_source_file",
    "should_skip_directory",
    "ExtractedType",
    "ExtractionIssue",
    "UnitScan",
]


def extract(source_text: str, namespace_hint: str = "") -> List[ExtractedType]:
    """Extract type declarations from a block of source text.

    Args:
        source_text: Java source code
        namespace_hint: Namespace to use when the text declares no package

    Returns:
        Extracted types in declaration order
    """
    return JavaStructureExtractor().extract(source_text, namespace_hint)


def extract_file(file_path: str, namespace_hint: str = "", encoding: str = "utf-8") -> List[ExtractedType]:
    """Extract type declarations from a single source file.

    Raises:
        UnreadableInput: If the file cannot be read
    """
    try:
        with open(file_path, "r", encoding=encoding, errors="replace") as f:
            source_text = f.read()
    except OSError as e:
        raise UnreadableInput(file_path, str(e)) from e

    return JavaStructureExtractor().extract(source_text, namespace_hint, file_path=file_path)


def scan_unit(
    root_path: str,
    suffixes: Sequence[str] = SOURCE_SUFFIXES,
    skip_directories: Iterable[str] = (),
    encoding: str = "utf-8",
    namespace_hint: str = "",
) -> UnitScan:
    """Extract every source file of an extraction unit.

    Unreadable files are skipped with an ExtractionIssue; the rest of the
    unit is still extracted. A file path given as root is a one-file unit.
    ``namespace_hint`` applies to files that declare no package.

    Raises:
        UnreadableInput: If ``root_path`` does not exist
    """
    if os.path.isfile(root_path):
        files = [root_path]
    elif os.path.isdir(root_path):
        files = collect_source_files(root_path, suffixes, skip_directories)
    else:
        raise UnreadableInput(root_path, "no such file or directory")

    extractor = JavaStructureExtractor()
    scan = UnitScan(root_path=root_path, types=[])

    for file_path in files:
        try:
            with open(file_path, "r", encoding=encoding, errors="replace") as f:
                source_text = f.read()
        except OSError as e:
            logger.warning(f"Skipping unreadable source file {file_path}: {e}")
            scan.issues.append(ExtractionIssue(file_path=file_path, message=str(e), severity="error"))
            continue

        scan.files_scanned += 1
        scan.types.extend(extractor.extract(source_text, namespace_hint, file_path=file_path))

    logger.info(
        f"Extracted {len(scan.types)} type(s) from {scan.files_scanned} file(s) under {root_path}"
        + (f" ({len(scan.issues)} skipped)" if scan.issues else "")
    )
    return scan


def extract_unit(root_path: str) -> List[ExtractedType]:
    """Extract every source file found by walking ``root_path`` recursively."""
    return scan_unit(root_path).types
