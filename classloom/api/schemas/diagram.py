"""Diagram request/response schemas."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ExtractRequest(BaseModel):
    """Extract types from one source text."""
    source: str = Field(..., description="Java source text")
    namespace_hint: str = Field("", description="Namespace used when the text declares no package")


class SourceFile(BaseModel):
    """One in-memory source file."""
    path: Optional[str] = Field(None, description="Informational file path")
    text: str = Field(..., description="Source text")


class FromSourceRequest(BaseModel):
    """Build a diagram from a set of source files."""
    name: str = Field("Untitled", description="Diagram name", min_length=1)
    sources: List[SourceFile] = Field(..., description="Files of one extraction unit", min_length=1)
    save: bool = Field(False, description="Persist the resulting diagram")


class DiagramRequest(BaseModel):
    """Request carrying a serialized diagram document."""
    diagram: Dict[str, Any] = Field(..., description="Diagram document")


class DiagramAnalysisResponse(BaseModel):
    """Diagram built from source, with pipeline diagnostics."""
    diagram: Dict[str, Any] = Field(..., description="Diagram document")
    saved: bool = Field(False, description="Whether the diagram was persisted")
    extraction_issues: List[Dict[str, Any]] = Field(default_factory=list)
    ambiguities: List[Dict[str, Any]] = Field(default_factory=list)
    unresolved_supertypes: List[Dict[str, Any]] = Field(default_factory=list)
    validation_issues: List[str] = Field(default_factory=list)


class ValidationResponse(BaseModel):
    """Validation result."""
    valid: bool = Field(..., description="True when no issues were found")
    issues: List[str] = Field(default_factory=list, description="Issue messages")


class GenerateResponse(BaseModel):
    """Generated sources keyed by relative path."""
    files: Dict[str, str] = Field(default_factory=dict)
    count: int = Field(0, description="Number of generated files")


class DiagramList(BaseModel):
    """Saved diagram summaries."""
    diagrams: List[Dict[str, Any]] = Field(default_factory=list)
    count: int = Field(0, description="Number of diagrams returned")
