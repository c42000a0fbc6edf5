"""Shared fixtures for classloom tests."""

import pytest

from classloom.core.db import DatabaseManager
from classloom.core.services import DiagramService, DiagramStore
from classloom.core.uml import Classifier, ClassifierKind, Diagram, Relationship, RelationshipKind
from classloom.setting import Settings


@pytest.fixture
def settings():
    """Default settings, isolated from any config file or environment."""
    return Settings()


@pytest.fixture
def db_manager(tmp_path):
    db = DatabaseManager(f"sqlite:///{tmp_path / 'classloom.db'}")
    db.init_db()
    yield db
    db.dispose()


@pytest.fixture
def store(db_manager):
    return DiagramStore(db_manager)


@pytest.fixture
def service(settings, store):
    return DiagramService(settings, store=store)


@pytest.fixture
def shapes_diagram():
    """Shape hierarchy: Circle extends AbstractShape implements Drawable."""
    diagram = Diagram("shapes", description="sample")
    drawable = diagram.add_classifier(Classifier("Drawable", "com.shapes", ClassifierKind.INTERFACE))
    base = diagram.add_classifier(Classifier("AbstractShape", "com.shapes", is_abstract=True))
    circle = diagram.add_classifier(Classifier("Circle", "com.shapes"))
    diagram.add_relationship(Relationship(circle, base, RelationshipKind.INHERITANCE))
    diagram.add_relationship(Relationship(circle, drawable, RelationshipKind.IMPLEMENTATION))
    return diagram
