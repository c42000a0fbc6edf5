"""Extractor data models.

Pure data containers for what the structural scan finds in source text.
Members reuse the diagram model's Field / Operation / Parameter types so
building classifiers is a straight copy.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from ..uml.models import ClassifierKind, Field, Operation


@dataclass
class ExtractedType:
    """A type declaration found in source text.

    ``superclass`` / ``interfaces`` are the names as written in source. For
    an interface, ``interfaces`` holds its ``extends`` list.
    """

    name: str
    namespace: str
    kind: ClassifierKind
    is_abstract: bool = False
    superclass: Optional[str] = None
    interfaces: List[str] = field(default_factory=list)
    fields: List[Field] = field(default_factory=list)
    operations: List[Operation] = field(default_factory=list)
    literals: List[str] = field(default_factory=list)  # enum constants
    file_path: Optional[str] = None
    start_line: int = 0

    @property
    def qualified_name(self) -> str:
        return f"{self.namespace}.{self.name}" if self.namespace else self.name


@dataclass
class ExtractionIssue:
    """A diagnostic recorded while scanning an extraction unit."""

    file_path: str
    message: str
    severity: str = "warning"  # "warning" | "error"


@dataclass
class UnitScan:
    """Complete output of a directory-wide extraction."""

    root_path: str
    types: List[ExtractedType]
    issues: List[ExtractionIssue] = field(default_factory=list)
    files_scanned: int = 0
