"""
Database module for classloom.

Exports:
- DatabaseManager: Database connection and session management
- Models: ClassDiagramRecord, ClassifierRecord, RelationshipRecord
- Base: SQLAlchemy declarative base
"""

from .db import DatabaseManager
from .models import Base, ClassDiagramRecord, ClassifierRecord, RelationshipRecord

__all__ = [
    # Database management
    "DatabaseManager",

    # ORM models
    "Base",
    "ClassDiagramRecord",
    "ClassifierRecord",
    "RelationshipRecord",
]
