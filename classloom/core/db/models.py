"""
SQLAlchemy ORM Models for classloom

Persisted class diagrams:
- ClassDiagramRecord: Diagram metadata and display settings
- ClassifierRecord: Classes, interfaces and enums with their members (JSON)
- RelationshipRecord: Typed edges between classifiers of one diagram

Elements keep a ``position`` column so the diagram's unified element
order survives a save/load cycle.
"""

from datetime import datetime

from sqlalchemy import (
    JSON, TIMESTAMP, Boolean, Column, Float, ForeignKey, Index, Integer, String, Text,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


# =============================================================================
# Diagram
# =============================================================================

class ClassDiagramRecord(Base):
    """A saved class diagram."""
    __tablename__ = "class_diagrams"

    uuid = Column(String(36), primary_key=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, default="")
    author = Column(String(255), nullable=True)
    version = Column(String(50), nullable=True)
    show_grid = Column(Boolean, default=True)
    snap_to_grid = Column(Boolean, default=True)
    grid_size = Column(Float, default=20.0)
    background_color = Column(String(20), default="#FFFFFF")
    created_at = Column(TIMESTAMP, default=datetime.utcnow, nullable=False)
    updated_at = Column(TIMESTAMP, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    classifiers = relationship(
        "ClassifierRecord", back_populates="diagram",
        cascade="all, delete-orphan", order_by="ClassifierRecord.position",
    )
    relationships = relationship(
        "RelationshipRecord", back_populates="diagram",
        cascade="all, delete-orphan", order_by="RelationshipRecord.position",
    )

    def __repr__(self):
        return f"<ClassDiagramRecord(uuid='{self.uuid}', name='{self.name}')>"


# =============================================================================
# Elements
# =============================================================================

class ClassifierRecord(Base):
    """A classifier belonging to one diagram."""
    __tablename__ = "classifiers"
    __table_args__ = (
        Index("idx_classifiers_diagram", "diagram_uuid"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    element_id = Column(String(64), nullable=False)
    diagram_uuid = Column(String(36), ForeignKey("class_diagrams.uuid", ondelete="CASCADE"), nullable=False)
    position = Column(Integer, nullable=False)
    name = Column(String(255), nullable=False)
    namespace = Column(String(500), default="")
    kind = Column(String(20), nullable=False)          # class, interface, enum
    is_abstract = Column(Boolean, default=False)
    fields = Column(JSON, default=list)
    operations = Column(JSON, default=list)
    literals = Column(JSON, default=list)
    declared_superclass = Column(String(500), nullable=True)
    declared_interfaces = Column(JSON, default=list)
    x = Column(Float, default=0.0)
    y = Column(Float, default=0.0)
    width = Column(Float, default=200.0)
    height = Column(Float, default=150.0)
    style = Column(JSON, default=dict)

    diagram = relationship("ClassDiagramRecord", back_populates="classifiers")

    def __repr__(self):
        return f"<ClassifierRecord(kind='{self.kind}', name='{self.namespace}.{self.name}')>"


class RelationshipRecord(Base):
    """A relationship between two classifiers of the same diagram."""
    __tablename__ = "relationships"
    __table_args__ = (
        Index("idx_relationships_diagram", "diagram_uuid"),
        Index("idx_relationships_kind", "kind"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    element_id = Column(String(64), nullable=False)
    diagram_uuid = Column(String(36), ForeignKey("class_diagrams.uuid", ondelete="CASCADE"), nullable=False)
    position = Column(Integer, nullable=False)
    source_element_id = Column(String(64), nullable=False)
    target_element_id = Column(String(64), nullable=False)
    kind = Column(String(50), nullable=False)          # inheritance, implementation, association, ...
    name = Column(String(500), default="")
    source_role = Column(String(255), nullable=True)
    target_role = Column(String(255), nullable=True)
    source_multiplicity = Column(String(50), nullable=True)
    target_multiplicity = Column(String(50), nullable=True)
    source_tooltip = Column(Text, nullable=True)
    target_tooltip = Column(Text, nullable=True)
    line_style = Column(JSON, default=dict)
    control_points = Column(JSON, default=list)

    diagram = relationship("ClassDiagramRecord", back_populates="relationships")

    def __repr__(self):
        return (
            f"<RelationshipRecord(kind='{self.kind}', "
            f"{self.source_element_id} -> {self.target_element_id})>"
        )
