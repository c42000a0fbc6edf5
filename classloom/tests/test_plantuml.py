"""Tests for PlantUML export."""

from classloom.core.diagrams import render_plantuml
from classloom.core.uml import (
    Classifier,
    ClassifierKind,
    Diagram,
    Field,
    Operation,
    Parameter,
    Relationship,
    RelationshipKind,
    Visibility,
)


class TestRenderPlantuml:
    def test_envelope(self, shapes_diagram):
        text = render_plantuml(shapes_diagram)
        assert text.startswith("@startuml\n")
        assert text.endswith("@enduml\n")
        assert "title shapes" in text

    def test_package_and_keywords(self, shapes_diagram):
        text = render_plantuml(shapes_diagram)
        assert "package com.shapes {" in text
        assert 'interface "Drawable" as Drawable_0 {' in text
        assert 'abstract class "AbstractShape" as AbstractShape_1 {' in text
        assert 'class "Circle" as Circle_2 {' in text

    def test_arrows(self, shapes_diagram):
        text = render_plantuml(shapes_diagram)
        assert "Circle_2 --|> AbstractShape_1" in text
        assert "Circle_2 ..|> Drawable_0" in text

    def test_members_and_labels(self):
        diagram = Diagram("orders")
        order = diagram.add_classifier(Classifier(
            "Order",
            fields=[Field("items", "List<LineItem>")],
            operations=[Operation(
                "add", "boolean", visibility=Visibility.PUBLIC,
                parameters=[Parameter("item", "LineItem")],
            )],
        ))
        item = diagram.add_classifier(Classifier("LineItem"))
        status = diagram.add_classifier(Classifier("Status", kind=ClassifierKind.ENUMERATION, literals=["NEW"]))
        diagram.add_relationship(Relationship(
            order, item, RelationshipKind.COMPOSITION,
            source_multiplicity="1", target_multiplicity="0..*", target_role="items",
        ))
        diagram.add_relationship(Relationship(order, status, RelationshipKind.DEPENDENCY))

        text = render_plantuml(diagram)
        assert "  -items : List<LineItem>" in text
        assert "  +add(item: LineItem) : boolean" in text
        assert 'enum "Status" as Status_2 {\n  NEW\n}' in text
        assert 'Order_0 "1" *-- "0..*" LineItem_1 : items' in text
        assert "Order_0 ..> Status_2" in text

    def test_deterministic(self, shapes_diagram):
        assert render_plantuml(shapes_diagram) == render_plantuml(shapes_diagram)
