"""InferenceContext — symbol table shared by the relationship detectors.

Built once per inference run, after every classifier of the batch is in
the diagram, and passed to each detector.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set, Tuple

from ..constants import (
    PRIMITIVE_TYPES,
    TYPE_EXPRESSION_KEYWORDS,
    TYPE_IDENTIFIER_RE,
    VOID_TYPE,
)
from ..uml.models import Classifier, Diagram, Relationship, RelationshipKind

logger = logging.getLogger(__name__)


@dataclass
class AmbiguousReference:
    """A simple name that matched classifiers in several namespaces."""
    owner: str
    reference: str
    candidates: List[str]
    chosen: str


@dataclass
class UnresolvedSupertype:
    """A declared supertype with no classifier in the batch."""
    owner: str
    supertype: str
    relation: str  # "extends" | "implements"


@dataclass
class InferenceReport:
    """Result of one inference run."""
    relationships: List[Relationship] = field(default_factory=list)
    ambiguities: List[AmbiguousReference] = field(default_factory=list)
    unresolved: List[UnresolvedSupertype] = field(default_factory=list)


class InferenceContext:
    """Symbol table plus the edge/diagnostic accumulators of one run.

    Attributes:
        classifiers: Classifiers of the diagram in insertion order.
        by_qualified: First classifier for each qualified name.
        by_simple: All classifiers sharing a simple name, insertion order.
        search_order: Namespace preference for ambiguous simple names.
        report: Relationships and diagnostics collected so far.
    """

    def __init__(self, classifiers: List[Classifier], search_order: Sequence[str] = ()):
        self.classifiers = classifiers
        self.search_order = list(search_order)
        self.by_qualified: Dict[str, Classifier] = {}
        self.by_simple: Dict[str, List[Classifier]] = {}
        self.report = InferenceReport()
        self._seen_edges: Set[Tuple[str, str, RelationshipKind]] = set()
        self._seen_ambiguities: Set[Tuple[str, str]] = set()

        for c in classifiers:
            self.by_qualified.setdefault(c.qualified_name, c)
            self.by_simple.setdefault(c.name, []).append(c)

    @classmethod
    def from_diagram(cls, diagram: Diagram, search_order: Sequence[str] = ()) -> "InferenceContext":
        return cls(diagram.classifiers(), search_order)

    # ── Resolution ──────────────────────────────────────────────────

    def resolve(self, name: str, owner: Classifier) -> Optional[Classifier]:
        """Resolve a type name as seen from ``owner``.

        Resolution order:
        1. Exact qualified-name match (for dotted names)
        2. Single classifier with that simple name
        3. Several candidates: owner's namespace, then ``search_order``,
           then insertion order; recorded as an AmbiguousReference
        """
        bare = name.split("<")[0].replace("[]", "").replace("...", "").strip()
        if not bare:
            return None

        if "." in bare:
            exact = self.by_qualified.get(bare)
            if exact is not None:
                return exact
            # Outer.Inner references a nested type; package.Type is external
            if not bare[0].isupper():
                return None
            bare = bare.rsplit(".", 1)[-1]

        candidates = self.by_simple.get(bare)
        if not candidates:
            return None
        if len(candidates) == 1:
            return candidates[0]

        chosen = self._pick_candidate(candidates, owner)
        self._record_ambiguity(owner, bare, candidates, chosen)
        return chosen

    def _pick_candidate(self, candidates: List[Classifier], owner: Classifier) -> Classifier:
        for c in candidates:
            if c.namespace == owner.namespace:
                return c
        for namespace in self.search_order:
            for c in candidates:
                if c.namespace == namespace:
                    return c
        return candidates[0]

    def _record_ambiguity(
        self, owner: Classifier, name: str, candidates: List[Classifier], chosen: Classifier
    ) -> None:
        key = (owner.id, name)
        if key in self._seen_ambiguities:
            return
        self._seen_ambiguities.add(key)
        self.report.ambiguities.append(AmbiguousReference(
            owner=owner.qualified_name,
            reference=name,
            candidates=[c.qualified_name for c in candidates],
            chosen=chosen.qualified_name,
        ))
        logger.warning(
            f"Ambiguous type '{name}' in {owner.qualified_name}: "
            f"{[c.qualified_name for c in candidates]} -> using {chosen.qualified_name}"
        )

    # ── Edge collection ─────────────────────────────────────────────

    def add_edge(self, source: Classifier, target: Classifier, kind: RelationshipKind) -> bool:
        """Record an edge unless it is a self-edge or a duplicate."""
        if source is target:
            return False
        key = (source.id, target.id, kind)
        if key in self._seen_edges:
            return False
        self._seen_edges.add(key)
        self.report.relationships.append(Relationship(source=source, target=target, kind=kind))
        return True


def extract_type_identifiers(type_str: Optional[str]) -> List[str]:
    """Extract the type names referenced by a type expression.

    Unwraps generics, arrays, wildcards and varargs:
      "Map<String, Customer>"      -> ["Map", "String", "Customer"]
      "List<? extends Shape>[]"    -> ["List", "Shape"]
      "int"                        -> []

    Primitives and void are dropped; order of first appearance is kept.
    """
    if not type_str:
        return []
    identifiers: List[str] = []
    for ident in TYPE_IDENTIFIER_RE.findall(type_str):
        if ident in PRIMITIVE_TYPES or ident == VOID_TYPE or ident in TYPE_EXPRESSION_KEYWORDS:
            continue
        if ident not in identifiers:
            identifiers.append(ident)
    return identifiers
