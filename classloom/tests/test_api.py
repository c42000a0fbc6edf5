"""Tests for the FastAPI routes."""

import pytest
from fastapi.testclient import TestClient

from classloom.api.app import create_app
from classloom.core.uml import Relationship, RelationshipKind, diagram_to_dict


ORDER_JAVA = '''
package com.shop;

public class Order {
    private final List<LineItem> items;
}
'''

ITEM_JAVA = '''
package com.shop;

public class LineItem {
    private int quantity;
}
'''


@pytest.fixture
def client(db_manager, settings):
    return TestClient(create_app(db_manager=db_manager, settings=settings))


@pytest.fixture
def stateless_client(settings):
    return TestClient(create_app(settings=settings))


# =========================================================================
# Tests: Stateless endpoints
# =========================================================================

class TestStatelessRoutes:
    def test_health(self, client):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok", "service": "classloom", "storage": True}

    def test_extract(self, client):
        resp = client.post("/api/analysis/extract", json={"source": ORDER_JAVA})
        assert resp.status_code == 200
        body = resp.json()
        assert body["count"] == 1
        order = body["types"][0]
        assert order["qualified_name"] == "com.shop.Order"
        assert order["kind"] == "class"
        assert order["fields"][0]["type_name"] == "List<LineItem>"
        assert order["fields"][0]["is_final"] is True

    def test_from_source(self, client):
        resp = client.post("/api/diagrams/from-source", json={
            "name": "shop",
            "sources": [{"path": "Order.java", "text": ORDER_JAVA}, {"text": ITEM_JAVA}],
        })
        assert resp.status_code == 200
        body = resp.json()
        assert body["saved"] is False
        assert body["validation_issues"] == []

        elements = body["diagram"]["elements"]
        rels = [e for e in elements if e["element_type"] == "relationship"]
        assert len(rels) == 1
        assert rels[0]["kind"] == "composition"

    def test_from_source_requires_sources(self, client):
        resp = client.post("/api/diagrams/from-source", json={"name": "x", "sources": []})
        assert resp.status_code == 422

    def test_validate(self, client, shapes_diagram):
        resp = client.post("/api/diagrams/validate", json={"diagram": diagram_to_dict(shapes_diagram)})
        assert resp.status_code == 200
        assert resp.json() == {"valid": True, "issues": []}

    def test_validate_reports_issues(self, client, shapes_diagram):
        data = diagram_to_dict(shapes_diagram)
        for element in data["elements"]:
            if element["element_type"] == "classifier" and element["name"] == "Drawable":
                element["kind"] = "class"
        body = client.post("/api/diagrams/validate", json={"diagram": data}).json()
        assert body["valid"] is False
        assert "target must be an interface" in body["issues"][0]

    def test_dangling_document_rejected(self, client, shapes_diagram):
        data = diagram_to_dict(shapes_diagram)
        data["elements"] = [e for e in data["elements"] if e.get("name") != "Drawable"]
        resp = client.post("/api/diagrams/validate", json={"diagram": data})
        assert resp.status_code == 400

    def test_malformed_elements_rejected(self, client):
        resp = client.post("/api/diagrams/validate", json={"diagram": {"name": "x", "elements": ["A", "B"]}})
        assert resp.status_code == 400

    def test_blank_multiplicity_is_valid(self, client, shapes_diagram):
        circle = shapes_diagram.find_classifier("Circle")
        base = shapes_diagram.find_classifier("AbstractShape")
        shapes_diagram.add_relationship(Relationship(
            circle, base, RelationshipKind.ASSOCIATION, source_multiplicity="", target_multiplicity="1",
        ))
        resp = client.post("/api/diagrams/validate", json={"diagram": diagram_to_dict(shapes_diagram)})
        assert resp.json() == {"valid": True, "issues": []}

    def test_generate(self, client, shapes_diagram):
        resp = client.post("/api/diagrams/generate", json={"diagram": diagram_to_dict(shapes_diagram)})
        assert resp.status_code == 200
        body = resp.json()
        assert body["count"] == 3
        assert set(body["files"]) == {
            "com/shapes/Drawable.java",
            "com/shapes/AbstractShape.java",
            "com/shapes/Circle.java",
        }
        assert "public interface Drawable {" in body["files"]["com/shapes/Drawable.java"]

    def test_storage_unavailable(self, stateless_client):
        assert stateless_client.get("/api/diagrams").status_code == 503


# =========================================================================
# Tests: Saved diagrams
# =========================================================================

class TestSavedDiagrams:
    def _save(self, client):
        resp = client.post("/api/diagrams/from-source", json={
            "name": "shop",
            "sources": [{"text": ORDER_JAVA}, {"text": ITEM_JAVA}],
            "save": True,
        })
        assert resp.status_code == 200
        assert resp.json()["saved"] is True
        return resp.json()["diagram"]["uuid"]

    def test_crud(self, client):
        diagram_id = self._save(client)

        listing = client.get("/api/diagrams").json()
        assert listing["count"] == 1
        assert listing["diagrams"][0]["name"] == "shop"

        doc = client.get(f"/api/diagrams/{diagram_id}").json()
        assert doc["uuid"] == diagram_id
        assert len(doc["elements"]) == 3

        assert client.delete(f"/api/diagrams/{diagram_id}").status_code == 200
        assert client.get(f"/api/diagrams/{diagram_id}").status_code == 404
        assert client.delete(f"/api/diagrams/{diagram_id}").status_code == 404

    def test_validation_and_plantuml(self, client):
        diagram_id = self._save(client)

        body = client.get(f"/api/diagrams/{diagram_id}/validation").json()
        assert body == {"valid": True, "issues": []}

        resp = client.get(f"/api/diagrams/{diagram_id}/plantuml")
        assert resp.status_code == 200
        assert resp.text.startswith("@startuml")
        assert "*--" in resp.text

    def test_unknown_id(self, client):
        assert client.get("/api/diagrams/nope/validation").status_code == 404
        assert client.get("/api/diagrams/nope/plantuml").status_code == 404
