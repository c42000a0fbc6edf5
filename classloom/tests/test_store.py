"""Tests for diagram persistence."""

from classloom.core.uml import Relationship, RelationshipKind, diagram_to_dict


class TestDiagramStore:
    def test_save_and_load(self, store, shapes_diagram):
        diagram_uuid = store.save(shapes_diagram)
        assert diagram_uuid == shapes_diagram.uuid

        loaded = store.load(diagram_uuid)
        assert loaded is not None
        assert diagram_to_dict(loaded) == diagram_to_dict(shapes_diagram)

        circle = loaded.find_classifier("Circle")
        assert {r.target.name for r in loaded.outgoing(circle)} == {"AbstractShape", "Drawable"}

    def test_load_unknown(self, store):
        assert store.load("00000000-0000-0000-0000-000000000000") is None

    def test_save_is_upsert(self, store, shapes_diagram):
        store.save(shapes_diagram)

        circle = shapes_diagram.find_classifier("Circle")
        shapes_diagram.remove_classifier(shapes_diagram.find_classifier("Drawable"))
        shapes_diagram.name = "renamed"
        circle.x = 123.0
        store.save(shapes_diagram)

        loaded = store.load(shapes_diagram.uuid)
        assert loaded.name == "renamed"
        assert [c.name for c in loaded.classifiers()] == ["AbstractShape", "Circle"]
        assert len(loaded.relationships()) == 1
        assert loaded.find_classifier("Circle").x == 123.0
        assert len(store.list_recent()) == 1

    def test_relationship_details_persist(self, store, shapes_diagram):
        circle = shapes_diagram.find_classifier("Circle")
        base = shapes_diagram.find_classifier("AbstractShape")
        shapes_diagram.add_relationship(Relationship(
            circle, base, RelationshipKind.ASSOCIATION,
            source_role="owner", target_multiplicity="0..1",
        ))
        store.save(shapes_diagram)

        loaded = store.load(shapes_diagram.uuid)
        assoc = [r for r in loaded.relationships() if r.kind is RelationshipKind.ASSOCIATION][0]
        assert assoc.source_role == "owner"
        assert assoc.target_multiplicity == "0..1"

    def test_list_and_delete(self, store, shapes_diagram):
        store.save(shapes_diagram)
        summaries = store.list_recent()
        assert summaries[0]["uuid"] == shapes_diagram.uuid
        assert summaries[0]["classifier_count"] == 3
        assert summaries[0]["relationship_count"] == 2

        assert store.delete(shapes_diagram.uuid) is True
        assert store.delete(shapes_diagram.uuid) is False
        assert store.list_recent() == []
