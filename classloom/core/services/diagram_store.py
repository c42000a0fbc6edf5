"""Diagram persistence for classloom.

Saves and loads whole diagrams through the ORM records; element order is
kept in each record's ``position`` column.
"""

import logging
from typing import Dict, List, Optional

from ..db import DatabaseManager
from ..db.models import ClassDiagramRecord, ClassifierRecord, RelationshipRecord
from ..uml.models import Classifier, Diagram
from ..uml.serialization import classifier_to_dict, diagram_from_dict, relationship_to_dict

logger = logging.getLogger(__name__)


class DiagramStore:
    """CRUD operations for class diagrams."""

    def __init__(self, db_manager: DatabaseManager):
        self.db = db_manager

    # =========================================================================
    # Write
    # =========================================================================

    def save(self, diagram: Diagram) -> str:
        """Insert or replace a diagram, keyed by its uuid.

        Returns:
            The diagram uuid
        """
        with self.db.get_session() as session:
            record = session.query(ClassDiagramRecord).filter(
                ClassDiagramRecord.uuid == diagram.uuid
            ).first()

            if record is None:
                record = ClassDiagramRecord(uuid=diagram.uuid)
                session.add(record)
                created = True
            else:
                record.classifiers.clear()
                record.relationships.clear()
                session.flush()
                created = False

            record.name = diagram.name
            record.description = diagram.description
            record.author = diagram.author
            record.version = diagram.version
            record.show_grid = diagram.show_grid
            record.snap_to_grid = diagram.snap_to_grid
            record.grid_size = diagram.grid_size
            record.background_color = diagram.background_color

            for position, element in enumerate(diagram.elements()):
                if isinstance(element, Classifier):
                    record.classifiers.append(_classifier_record(element, position))
                else:
                    record.relationships.append(_relationship_record(element, position))

        logger.info(f"{'Saved' if created else 'Updated'} diagram {diagram.uuid} ('{diagram.name}')")
        return diagram.uuid

    def delete(self, diagram_uuid: str) -> bool:
        """Delete a diagram. Returns False if it did not exist."""
        with self.db.get_session() as session:
            record = session.query(ClassDiagramRecord).filter(
                ClassDiagramRecord.uuid == diagram_uuid
            ).first()
            if record is None:
                return False
            session.delete(record)

        logger.info(f"Deleted diagram {diagram_uuid}")
        return True

    # =========================================================================
    # Read
    # =========================================================================

    def load(self, diagram_uuid: str) -> Optional[Diagram]:
        """Load a diagram, or None if the uuid is unknown."""
        with self.db.get_session() as session:
            record = session.query(ClassDiagramRecord).filter(
                ClassDiagramRecord.uuid == diagram_uuid
            ).first()
            if record is None:
                return None
            data = _record_to_document(record)

        return diagram_from_dict(data)

    def list_recent(self, limit: int = 20) -> List[Dict]:
        """Summaries of the most recently updated diagrams."""
        with self.db.get_session() as session:
            records = (
                session.query(ClassDiagramRecord)
                .order_by(ClassDiagramRecord.updated_at.desc())
                .limit(limit)
                .all()
            )
            return [
                {
                    "uuid": r.uuid,
                    "name": r.name,
                    "description": r.description or "",
                    "classifier_count": len(r.classifiers),
                    "relationship_count": len(r.relationships),
                    "updated_at": r.updated_at.isoformat() if r.updated_at else None,
                }
                for r in records
            ]


# =============================================================================
# Record conversion
# =============================================================================

def _classifier_record(classifier: Classifier, position: int) -> ClassifierRecord:
    data = classifier_to_dict(classifier)
    return ClassifierRecord(
        element_id=data["id"],
        position=position,
        name=data["name"],
        namespace=data["namespace"],
        kind=data["kind"],
        is_abstract=data["is_abstract"],
        fields=data["fields"],
        operations=data["operations"],
        literals=data["literals"],
        declared_superclass=data["declared_superclass"],
        declared_interfaces=data["declared_interfaces"],
        x=data["x"],
        y=data["y"],
        width=data["width"],
        height=data["height"],
        style=data["style"],
    )


def _relationship_record(relationship, position: int) -> RelationshipRecord:
    data = relationship_to_dict(relationship)
    return RelationshipRecord(
        element_id=data["id"],
        position=position,
        source_element_id=data["source_id"],
        target_element_id=data["target_id"],
        kind=data["kind"],
        name=data["name"],
        source_role=data["source_role"],
        target_role=data["target_role"],
        source_multiplicity=data["source_multiplicity"],
        target_multiplicity=data["target_multiplicity"],
        source_tooltip=data["source_tooltip"],
        target_tooltip=data["target_tooltip"],
        line_style=data["line_style"],
        control_points=data["control_points"],
    )


def _record_to_document(record: ClassDiagramRecord) -> Dict:
    elements = []
    for c in record.classifiers:
        elements.append((c.position, {
            "element_type": "classifier",
            "id": c.element_id,
            "name": c.name,
            "namespace": c.namespace or "",
            "kind": c.kind,
            "is_abstract": c.is_abstract,
            "fields": c.fields or [],
            "operations": c.operations or [],
            "literals": c.literals or [],
            "declared_superclass": c.declared_superclass,
            "declared_interfaces": c.declared_interfaces or [],
            "x": c.x,
            "y": c.y,
            "width": c.width,
            "height": c.height,
            "style": c.style or {},
        }))
    for r in record.relationships:
        elements.append((r.position, {
            "element_type": "relationship",
            "id": r.element_id,
            "name": r.name,
            "source_id": r.source_element_id,
            "target_id": r.target_element_id,
            "kind": r.kind,
            "source_role": r.source_role,
            "target_role": r.target_role,
            "source_multiplicity": r.source_multiplicity,
            "target_multiplicity": r.target_multiplicity,
            "source_tooltip": r.source_tooltip,
            "target_tooltip": r.target_tooltip,
            "line_style": r.line_style or {},
            "control_points": r.control_points or [],
        }))
    elements.sort(key=lambda item: item[0])

    return {
        "uuid": record.uuid,
        "name": record.name,
        "description": record.description or "",
        "author": record.author,
        "version": record.version,
        "show_grid": record.show_grid,
        "snap_to_grid": record.snap_to_grid,
        "grid_size": record.grid_size,
        "background_color": record.background_color,
        "elements": [data for _, data in elements],
    }
