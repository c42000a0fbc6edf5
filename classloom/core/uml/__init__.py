"""UML class-diagram model.

Public API:
    Diagram, Classifier, Relationship, Field, Operation, Parameter
    diagram_to_dict(diagram) / diagram_from_dict(data)
    apply_grid_layout(diagram)
"""

from .errors import (
    ClassloomError,
    DanglingEndpoint,
    GenerationIOError,
    UnreadableInput,
    UnsupportedOutputTarget,
)
from .layout import apply_grid_layout
from .models import (
    STRUCTURAL_KINDS,
    Classifier,
    ClassifierKind,
    DashPattern,
    Diagram,
    Field,
    LineStyle,
    Operation,
    Parameter,
    Point,
    Relationship,
    RelationshipKind,
    Style,
    Visibility,
)
from .serialization import diagram_from_dict, diagram_to_dict

__all__ = [
    "ClassloomError",
    "DanglingEndpoint",
    "GenerationIOError",
    "UnreadableInput",
    "UnsupportedOutputTarget",
    "STRUCTURAL_KINDS",
    "Classifier",
    "ClassifierKind",
    "DashPattern",
    "Diagram",
    "Field",
    "LineStyle",
    "Operation",
    "Parameter",
    "Point",
    "Relationship",
    "RelationshipKind",
    "Style",
    "Visibility",
    "apply_grid_layout",
    "diagram_from_dict",
    "diagram_to_dict",
]
