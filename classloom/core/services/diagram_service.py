"""DiagramService — the analysis pipeline behind the CLI and the API.

Reads settings once and passes them down as explicit arguments, so the
core analysis functions stay configuration-free.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from ...setting import Settings
from ..codegen import generate, generate_unit, output_path_for
from ..diagrams import render_plantuml
from ..extractor import build_diagram, scan_unit
from ..extractor.java_extractor import JavaStructureExtractor
from ..extractor.models import ExtractedType, ExtractionIssue
from ..inference import InferenceReport, analyze_relationships, merge_relationships
from ..uml.layout import apply_grid_layout
from ..uml.models import Diagram
from ..validation import validate
from .diagram_store import DiagramStore

logger = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    """A built diagram plus what the pipeline noticed on the way."""
    diagram: Diagram
    issues: List[ExtractionIssue] = field(default_factory=list)
    inference: InferenceReport = field(default_factory=InferenceReport)
    files_scanned: int = 0


class DiagramService:
    """Extraction, inference, validation, generation and storage of diagrams."""

    def __init__(self, settings: Settings, store: Optional[DiagramStore] = None):
        self.settings = settings
        self.store = store

    # =========================================================================
    # Analysis
    # =========================================================================

    def extract_source(self, source_text: str, namespace_hint: str = "", file_path: Optional[str] = None) -> List[ExtractedType]:
        return JavaStructureExtractor().extract(source_text, namespace_hint, file_path=file_path)

    def diagram_from_source(self, source_text: str, name: str = "Untitled") -> AnalysisResult:
        """Analyze one block of source text."""
        return self.diagram_from_sources([(None, source_text)], name)

    def diagram_from_sources(
        self, sources: Sequence[Tuple[Optional[str], str]], name: str = "Untitled"
    ) -> AnalysisResult:
        """Analyze several in-memory files as one extraction unit.

        Args:
            sources: (path, text) pairs; path is informational only
            name: Diagram name
        """
        extractor = JavaStructureExtractor()
        types: List[ExtractedType] = []
        for path, text in sources:
            types.extend(extractor.extract(text, file_path=path))
        result = self._build(name, types)
        result.files_scanned = len(sources)
        return result

    def diagram_from_path(self, path: str, name: Optional[str] = None) -> AnalysisResult:
        """Analyze a file or a directory tree.

        Raises:
            UnreadableInput: If ``path`` does not exist
        """
        ext = self.settings.extraction
        scan = scan_unit(
            path,
            suffixes=tuple(ext.source_suffixes),
            skip_directories=ext.skip_directories,
            encoding=ext.encoding,
        )
        name = name or os.path.basename(os.path.normpath(path)) or "Untitled"
        result = self._build(name, scan.types)
        result.issues = scan.issues
        result.files_scanned = scan.files_scanned
        return result

    def _build(self, name: str, types: List[ExtractedType]) -> AnalysisResult:
        inference = self.settings.inference
        diagram = build_diagram(name, types, infer=False, layout=False)
        report = analyze_relationships(
            diagram,
            search_order=inference.namespace_search_order,
            synthesize_supertypes=inference.synthesize_supertypes,
        )
        added = merge_relationships(diagram, report.relationships)
        apply_grid_layout(diagram, **self.settings.layout.model_dump())

        logger.info(
            f"Analyzed '{name}': {len(diagram.classifiers())} classifier(s), "
            f"{added} relationship(s), {len(report.ambiguities)} ambiguous name(s)"
        )
        return AnalysisResult(diagram=diagram, inference=report)

    def validate(self, diagram: Diagram) -> List[str]:
        return validate(diagram)

    # =========================================================================
    # Output
    # =========================================================================

    def generate_code(self, diagram: Diagram) -> Dict[str, str]:
        """Generated sources keyed by relative path (forward slashes)."""
        gen = self.settings.generator
        classifiers = diagram.classifiers()
        relationships = diagram.relationships()
        files: Dict[str, str] = {}
        for c in classifiers:
            rel_path = output_path_for(c, "", gen.file_suffix).replace(os.sep, "/")
            files[rel_path] = generate(
                c,
                relationships,
                known_classifiers=classifiers,
                default_import_namespace=gen.default_import_namespace,
                indent=gen.indent,
            )
        return files

    def write_code(self, diagram: Diagram, output_root: str) -> int:
        gen = self.settings.generator
        return generate_unit(
            diagram,
            output_root,
            default_import_namespace=gen.default_import_namespace,
            indent=gen.indent,
            suffix=gen.file_suffix,
        )

    def render_plantuml(self, diagram: Diagram) -> str:
        return render_plantuml(diagram)

    # =========================================================================
    # Storage
    # =========================================================================

    def _require_store(self) -> DiagramStore:
        if self.store is None:
            raise RuntimeError("No diagram store configured")
        return self.store

    def save(self, diagram: Diagram) -> str:
        return self._require_store().save(diagram)

    def load(self, diagram_uuid: str) -> Optional[Diagram]:
        return self._require_store().load(diagram_uuid)

    def list_recent(self, limit: int = 20) -> List[Dict]:
        return self._require_store().list_recent(limit)

    def delete(self, diagram_uuid: str) -> bool:
        return self._require_store().delete(diagram_uuid)
