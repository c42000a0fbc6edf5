"""UML class-diagram data model.

Classifiers and relationships live in one insertion-ordered element list
inside a Diagram so rendering z-order is preserved. Relationships hold
non-owning references to classifiers of the same diagram; every mutation
goes through the Diagram API so the referential invariants hold for
extracted and hand-built diagrams alike.

Classifiers compare by identity, not by name: two classifiers may share
a display name in different namespaces.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Union
from uuid import uuid4

from .errors import DanglingEndpoint

logger = logging.getLogger(__name__)


class ClassifierKind(Enum):
    """Kinds of classifier nodes."""
    CLASS = "class"
    INTERFACE = "interface"
    ENUMERATION = "enum"


class Visibility(Enum):
    """Member visibility with its UML symbol and Java keyword."""
    PUBLIC = "public"
    PRIVATE = "private"
    PROTECTED = "protected"
    PACKAGE = "package"

    @property
    def symbol(self) -> str:
        return _VISIBILITY_SYMBOLS[self]

    @property
    def keyword(self) -> str:
        """Java keyword; package-default visibility has none."""
        return "" if self is Visibility.PACKAGE else self.value


_VISIBILITY_SYMBOLS = {
    Visibility.PUBLIC: "+",
    Visibility.PRIVATE: "-",
    Visibility.PROTECTED: "#",
    Visibility.PACKAGE: "~",
}


class RelationshipKind(Enum):
    """UML relationship kinds."""
    INHERITANCE = "inheritance"
    IMPLEMENTATION = "implementation"
    ASSOCIATION = "association"
    AGGREGATION = "aggregation"
    COMPOSITION = "composition"
    DEPENDENCY = "dependency"


# Kinds whose ends may carry multiplicities
STRUCTURAL_KINDS = frozenset({
    RelationshipKind.ASSOCIATION,
    RelationshipKind.AGGREGATION,
    RelationshipKind.COMPOSITION,
})


class DashPattern(Enum):
    SOLID = "SOLID"
    DASHED = "DASHED"
    DOTTED = "DOTTED"


# =============================================================================
# Members
# =============================================================================

@dataclass
class Parameter:
    """An operation parameter. The default value is documentation only."""
    name: str
    type_name: str
    default_value: Optional[str] = None


@dataclass
class Field:
    """A classifier attribute."""
    name: str
    type_name: str
    default_value: Optional[str] = None
    visibility: Visibility = Visibility.PRIVATE
    is_static: bool = False
    is_final: bool = False


@dataclass
class Operation:
    """A classifier operation. ``return_type`` of None means void."""
    name: str
    return_type: Optional[str] = None
    visibility: Visibility = Visibility.PUBLIC
    is_static: bool = False
    is_abstract: bool = False
    is_final: bool = False
    parameters: List[Parameter] = field(default_factory=list)


# =============================================================================
# Diagram elements
# =============================================================================

@dataclass
class Style:
    fill_color: str = "#FFFFFF"
    border_color: str = "#000000"
    border_width: float = 1.0


@dataclass
class Point:
    x: float
    y: float


@dataclass
class LineStyle:
    color: str = "#000000"
    width: float = 1.0
    dash: DashPattern = DashPattern.SOLID


@dataclass(eq=False)
class Classifier:
    """A class, interface or enumeration node.

    ``declared_superclass`` / ``declared_interfaces`` keep the supertype
    names written in source; they only become edges through inference.
    """
    name: str
    namespace: str = ""
    kind: ClassifierKind = ClassifierKind.CLASS
    is_abstract: bool = False
    fields: List[Field] = field(default_factory=list)
    operations: List[Operation] = field(default_factory=list)
    literals: List[str] = field(default_factory=list)
    declared_superclass: Optional[str] = None
    declared_interfaces: List[str] = field(default_factory=list)
    x: float = 0.0
    y: float = 0.0
    width: float = 200.0
    height: float = 150.0
    style: Style = field(default_factory=Style)
    id: str = field(default_factory=lambda: uuid4().hex)

    @property
    def qualified_name(self) -> str:
        return f"{self.namespace}.{self.name}" if self.namespace else self.name

    def add_field(self, f: Field) -> Field:
        self.fields.append(f)
        return f

    def add_operation(self, op: Operation) -> Operation:
        self.operations.append(op)
        return op

    def __repr__(self) -> str:
        return f"<Classifier({self.kind.value} {self.qualified_name})>"


@dataclass(eq=False)
class Relationship:
    """A typed edge between two classifiers of the same diagram."""
    source: Classifier
    target: Classifier
    kind: RelationshipKind
    name: str = ""
    source_role: Optional[str] = None
    target_role: Optional[str] = None
    source_multiplicity: Optional[str] = None
    target_multiplicity: Optional[str] = None
    source_tooltip: Optional[str] = None
    target_tooltip: Optional[str] = None
    line_style: LineStyle = field(default_factory=LineStyle)
    control_points: List[Point] = field(default_factory=list)
    id: str = field(default_factory=lambda: uuid4().hex)

    def __post_init__(self):
        if self.source is None or self.target is None:
            raise ValueError("Relationship source and target are required")
        if not self.name:
            self.name = f"{self.source.name}->{self.target.name}"

    def __repr__(self) -> str:
        return f"<Relationship({self.kind.value} {self.source.name} -> {self.target.name})>"


DiagramElement = Union[Classifier, Relationship]


class Diagram:
    """Aggregate root holding classifiers and relationships.

    Invariants:
    - a relationship is only added when both endpoints are already in the
      diagram (otherwise DanglingEndpoint, diagram unchanged)
    - removing a classifier removes every relationship touching it
    """

    def __init__(
        self,
        name: str,
        description: str = "",
        author: Optional[str] = None,
        version: Optional[str] = None,
        uuid: Optional[str] = None,
    ):
        self.name = name
        self.description = description
        self.author = author
        self.version = version
        self.uuid = uuid or str(uuid4())
        self.show_grid = True
        self.snap_to_grid = True
        self.grid_size = 20.0
        self.background_color = "#FFFFFF"
        self._elements: List[DiagramElement] = []
        self._classifiers_by_id: Dict[str, Classifier] = {}

    # =========================================================================
    # Mutation
    # =========================================================================

    def add_classifier(self, classifier: Classifier) -> Classifier:
        if classifier in self:
            raise ValueError(f"{classifier!r} is already part of diagram '{self.name}'")
        if classifier.id in self._classifiers_by_id:
            raise ValueError(f"Classifier id {classifier.id} is already used in diagram '{self.name}'")
        self._elements.append(classifier)
        self._classifiers_by_id[classifier.id] = classifier
        return classifier

    def remove_classifier(self, classifier: Classifier) -> List[Relationship]:
        """Remove a classifier and every relationship referencing it.

        Returns:
            The relationships removed by the cascade
        """
        if classifier not in self:
            raise ValueError(f"{classifier!r} is not part of diagram '{self.name}'")

        cascaded = [
            r for r in self.relationships()
            if r.source is classifier or r.target is classifier
        ]
        self._elements = [
            e for e in self._elements
            if e is not classifier and not any(e is r for r in cascaded)
        ]
        del self._classifiers_by_id[classifier.id]

        if cascaded:
            logger.debug(f"Removed {classifier!r} with {len(cascaded)} relationship(s)")
        return cascaded

    def add_relationship(self, relationship: Relationship) -> Relationship:
        for end, classifier in (("source", relationship.source), ("target", relationship.target)):
            if classifier not in self:
                raise DanglingEndpoint(
                    f"Relationship '{relationship.name}' {end} {classifier.qualified_name} "
                    f"is not part of diagram '{self.name}'",
                    relationship=relationship,
                )
        if any(e is relationship for e in self._elements):
            raise ValueError(f"{relationship!r} is already part of diagram '{self.name}'")
        self._elements.append(relationship)
        return relationship

    def remove_relationship(self, relationship: Relationship) -> None:
        for i, e in enumerate(self._elements):
            if e is relationship:
                del self._elements[i]
                return
        raise ValueError(f"{relationship!r} is not part of diagram '{self.name}'")

    # =========================================================================
    # Read-only projections
    # =========================================================================

    def elements(self) -> List[DiagramElement]:
        return list(self._elements)

    def classifiers(self) -> List[Classifier]:
        return [e for e in self._elements if isinstance(e, Classifier)]

    def relationships(self) -> List[Relationship]:
        return [e for e in self._elements if isinstance(e, Relationship)]

    def classifier_by_id(self, classifier_id: str) -> Optional[Classifier]:
        return self._classifiers_by_id.get(classifier_id)

    def find_classifier(self, name: str, namespace: Optional[str] = None) -> Optional[Classifier]:
        """First classifier with the given simple name (and namespace, if given)."""
        for c in self.classifiers():
            if c.name == name and (namespace is None or c.namespace == namespace):
                return c
        return None

    def outgoing(
        self, classifier: Classifier, kind: Optional[RelationshipKind] = None
    ) -> List[Relationship]:
        return [
            r for r in self.relationships()
            if r.source is classifier and (kind is None or r.kind is kind)
        ]

    def __contains__(self, element: object) -> bool:
        if isinstance(element, Classifier):
            return self._classifiers_by_id.get(element.id) is element
        return any(e is element for e in self._elements)

    def __iter__(self) -> Iterator[DiagramElement]:
        return iter(list(self._elements))

    def __len__(self) -> int:
        return len(self._elements)

    def __repr__(self) -> str:
        return (
            f"<Diagram(name='{self.name}', classifiers={len(self.classifiers())}, "
            f"relationships={len(self.relationships())})>"
        )
