"""
Service layer for classloom.

Exports:
- DiagramService: End-to-end analysis, validation, generation and storage
- DiagramStore: CRUD persistence for diagrams
- AnalysisResult: Diagram plus extraction/inference diagnostics
"""

from .diagram_service import AnalysisResult, DiagramService
from .diagram_store import DiagramStore

__all__ = [
    "AnalysisResult",
    "DiagramService",
    "DiagramStore",
]
