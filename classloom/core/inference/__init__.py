"""classloom Relationship Inference — typed edges from extracted members.

Edge kinds: inheritance, implementation, association, composition, dependency

Public API:
    infer_relationships(diagram) -> List[Relationship]
    analyze_relationships(diagram) -> InferenceReport
    merge_relationships(diagram, relationships) -> int
"""

import logging
from typing import List, Sequence

from ..uml.models import Diagram, Relationship
from .context import (
    AmbiguousReference,
    InferenceContext,
    InferenceReport,
    UnresolvedSupertype,
    extract_type_identifiers,
)
from .detectors import detect_dependencies, detect_field_edges, detect_supertypes

logger = logging.getLogger(__name__)

__all__ = [
    "infer_relationships",
    "analyze_relationships",
    "merge_relationships",
    "extract_type_identifiers",
    "AmbiguousReference",
    "InferenceContext",
    "InferenceReport",
    "UnresolvedSupertype",
]


def analyze_relationships(
    diagram: Diagram,
    search_order: Sequence[str] = (),
    synthesize_supertypes: bool = True,
) -> InferenceReport:
    """Infer relationships between the classifiers of ``diagram``.

    Must run after every classifier of the analysis unit has been added;
    the diagram itself is not modified.

    Args:
        diagram: Diagram holding the complete batch of classifiers
        search_order: Namespace preference for ambiguous simple names
        synthesize_supertypes: Emit edges for declared extends/implements

    Returns:
        InferenceReport with relationships and diagnostics
    """
    ctx = InferenceContext.from_diagram(diagram, search_order)

    supertypes = detect_supertypes(ctx) if synthesize_supertypes else 0
    fields = detect_field_edges(ctx)
    deps = detect_dependencies(ctx)

    logger.debug(
        f"Inference on '{diagram.name}': {supertypes} supertype, {fields} field, "
        f"{deps} dependency edge(s); {len(ctx.report.ambiguities)} ambiguous name(s)"
    )
    return ctx.report


def infer_relationships(
    diagram: Diagram,
    search_order: Sequence[str] = (),
    synthesize_supertypes: bool = True,
) -> List[Relationship]:
    """Inferred relationships for ``diagram`` (pure; caller decides whether to merge)."""
    return analyze_relationships(diagram, search_order, synthesize_supertypes).relationships


def merge_relationships(diagram: Diagram, relationships: List[Relationship]) -> int:
    """Add relationships whose (source, target, kind) is not already present.

    Returns:
        Number of relationships added
    """
    existing = {(r.source.id, r.target.id, r.kind) for r in diagram.relationships()}
    added = 0
    for r in relationships:
        key = (r.source.id, r.target.id, r.kind)
        if key in existing:
            continue
        diagram.add_relationship(r)
        existing.add(key)
        added += 1
    return added
