"""Plain-dict (JSON-ready) conversion for diagrams.

Relationships reference their endpoints by classifier id, so a document
round-trips without identity tricks. Used by the persistence layer and
the HTTP API.
"""

from typing import Any, Dict, List

from .errors import DanglingEndpoint
from .models import (
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


# =============================================================================
# Members
# =============================================================================

def field_to_dict(f: Field) -> Dict[str, Any]:
    return {
        "name": f.name,
        "type_name": f.type_name,
        "default_value": f.default_value,
        "visibility": f.visibility.value,
        "is_static": f.is_static,
        "is_final": f.is_final,
    }


def field_from_dict(data: Dict[str, Any]) -> Field:
    return Field(
        name=data["name"],
        type_name=data["type_name"],
        default_value=data.get("default_value"),
        visibility=Visibility(data.get("visibility", Visibility.PRIVATE.value)),
        is_static=bool(data.get("is_static", False)),
        is_final=bool(data.get("is_final", False)),
    )


def operation_to_dict(op: Operation) -> Dict[str, Any]:
    return {
        "name": op.name,
        "return_type": op.return_type,
        "visibility": op.visibility.value,
        "is_static": op.is_static,
        "is_abstract": op.is_abstract,
        "is_final": op.is_final,
        "parameters": [
            {"name": p.name, "type_name": p.type_name, "default_value": p.default_value}
            for p in op.parameters
        ],
    }


def operation_from_dict(data: Dict[str, Any]) -> Operation:
    return Operation(
        name=data["name"],
        return_type=data.get("return_type"),
        visibility=Visibility(data.get("visibility", Visibility.PUBLIC.value)),
        is_static=bool(data.get("is_static", False)),
        is_abstract=bool(data.get("is_abstract", False)),
        is_final=bool(data.get("is_final", False)),
        parameters=[
            Parameter(name=p["name"], type_name=p["type_name"], default_value=p.get("default_value"))
            for p in data.get("parameters", [])
        ],
    )


# =============================================================================
# Elements
# =============================================================================

def classifier_to_dict(c: Classifier) -> Dict[str, Any]:
    return {
        "id": c.id,
        "name": c.name,
        "namespace": c.namespace,
        "kind": c.kind.value,
        "is_abstract": c.is_abstract,
        "fields": [field_to_dict(f) for f in c.fields],
        "operations": [operation_to_dict(op) for op in c.operations],
        "literals": list(c.literals),
        "declared_superclass": c.declared_superclass,
        "declared_interfaces": list(c.declared_interfaces),
        "x": c.x,
        "y": c.y,
        "width": c.width,
        "height": c.height,
        "style": {
            "fill_color": c.style.fill_color,
            "border_color": c.style.border_color,
            "border_width": c.style.border_width,
        },
    }


def classifier_from_dict(data: Dict[str, Any]) -> Classifier:
    style = data.get("style") or {}
    kwargs = {}
    if data.get("id"):
        kwargs["id"] = data["id"]
    return Classifier(
        name=data["name"],
        namespace=data.get("namespace") or "",
        kind=ClassifierKind(data.get("kind", ClassifierKind.CLASS.value)),
        is_abstract=bool(data.get("is_abstract", False)),
        fields=[field_from_dict(f) for f in data.get("fields", [])],
        operations=[operation_from_dict(op) for op in data.get("operations", [])],
        literals=list(data.get("literals", [])),
        declared_superclass=data.get("declared_superclass"),
        declared_interfaces=list(data.get("declared_interfaces", [])),
        x=float(data.get("x", 0.0)),
        y=float(data.get("y", 0.0)),
        width=float(data.get("width", 200.0)),
        height=float(data.get("height", 150.0)),
        style=Style(**style),
        **kwargs,
    )


def relationship_to_dict(r: Relationship) -> Dict[str, Any]:
    return {
        "id": r.id,
        "name": r.name,
        "source_id": r.source.id,
        "target_id": r.target.id,
        "kind": r.kind.value,
        "source_role": r.source_role,
        "target_role": r.target_role,
        "source_multiplicity": r.source_multiplicity,
        "target_multiplicity": r.target_multiplicity,
        "source_tooltip": r.source_tooltip,
        "target_tooltip": r.target_tooltip,
        "line_style": {
            "color": r.line_style.color,
            "width": r.line_style.width,
            "dash": r.line_style.dash.value,
        },
        "control_points": [{"x": p.x, "y": p.y} for p in r.control_points],
    }


def relationship_from_dict(data: Dict[str, Any], diagram: Diagram) -> Relationship:
    """Rebuild a relationship against the classifiers already in ``diagram``."""
    source = diagram.classifier_by_id(data["source_id"])
    target = diagram.classifier_by_id(data["target_id"])
    if source is None or target is None:
        missing = data["source_id"] if source is None else data["target_id"]
        raise DanglingEndpoint(
            f"Relationship '{data.get('name', '')}' references unknown classifier id {missing}"
        )

    line = data.get("line_style") or {}
    kwargs = {}
    if data.get("id"):
        kwargs["id"] = data["id"]
    return Relationship(
        source=source,
        target=target,
        kind=RelationshipKind(data["kind"]),
        name=data.get("name") or "",
        source_role=data.get("source_role"),
        target_role=data.get("target_role"),
        source_multiplicity=data.get("source_multiplicity"),
        target_multiplicity=data.get("target_multiplicity"),
        source_tooltip=data.get("source_tooltip"),
        target_tooltip=data.get("target_tooltip"),
        line_style=LineStyle(
            color=line.get("color", "#000000"),
            width=float(line.get("width", 1.0)),
            dash=DashPattern(line.get("dash", DashPattern.SOLID.value)),
        ),
        control_points=[Point(x=p["x"], y=p["y"]) for p in data.get("control_points", [])],
        **kwargs,
    )


# =============================================================================
# Diagram
# =============================================================================

def diagram_to_dict(diagram: Diagram) -> Dict[str, Any]:
    """Serialize a diagram; ``elements`` keeps the unified insertion order."""
    elements: List[Dict[str, Any]] = []
    for element in diagram.elements():
        if isinstance(element, Classifier):
            elements.append({"element_type": "classifier", **classifier_to_dict(element)})
        else:
            elements.append({"element_type": "relationship", **relationship_to_dict(element)})

    return {
        "uuid": diagram.uuid,
        "name": diagram.name,
        "description": diagram.description,
        "author": diagram.author,
        "version": diagram.version,
        "show_grid": diagram.show_grid,
        "snap_to_grid": diagram.snap_to_grid,
        "grid_size": diagram.grid_size,
        "background_color": diagram.background_color,
        "elements": elements,
    }


def diagram_from_dict(data: Dict[str, Any]) -> Diagram:
    """Deserialize a diagram document.

    Relationships may appear before their endpoints in ``elements`` (e.g.
    hand-written documents); they are attached once all classifiers exist,
    keeping their relative order.

    Raises:
        DanglingEndpoint: If a relationship names an unknown classifier id
    """
    diagram = Diagram(
        name=data["name"],
        description=data.get("description") or "",
        author=data.get("author"),
        version=data.get("version"),
        uuid=data.get("uuid"),
    )
    diagram.show_grid = bool(data.get("show_grid", True))
    diagram.snap_to_grid = bool(data.get("snap_to_grid", True))
    diagram.grid_size = float(data.get("grid_size", 20.0))
    diagram.background_color = data.get("background_color") or "#FFFFFF"

    elements = data.get("elements", [])
    for element in elements:
        if element.get("element_type", "classifier") == "classifier":
            diagram.add_classifier(classifier_from_dict(element))
    for element in elements:
        if element.get("element_type") == "relationship":
            diagram.add_relationship(relationship_from_dict(element, diagram))
    return diagram
