"""Diagram API routes — build, check, generate and store class diagrams.

  POST   /diagrams/from-source            → diagram from source files
  POST   /diagrams/validate               → issues of a diagram document
  POST   /diagrams/generate               → Java sources of a diagram document
  GET    /diagrams                        → saved diagram summaries
  GET    /diagrams/{diagram_id}           → saved diagram document
  DELETE /diagrams/{diagram_id}           → delete a saved diagram
  GET    /diagrams/{diagram_id}/validation → issues of a saved diagram
  GET    /diagrams/{diagram_id}/plantuml  → PlantUML text of a saved diagram
"""

import logging
from dataclasses import asdict
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse

from ...core.uml.errors import DanglingEndpoint, UnreadableInput
from ...core.uml.models import Diagram
from ...core.uml.serialization import diagram_from_dict, diagram_to_dict
from ..deps import get_diagram_service, get_diagram_store
from ..schemas import (
    DiagramAnalysisResponse,
    DiagramList,
    DiagramRequest,
    FromSourceRequest,
    GenerateResponse,
    ValidationResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/diagrams", tags=["diagrams"])


def _parse_document(document: Dict[str, Any]) -> Diagram:
    try:
        return diagram_from_dict(document)
    except DanglingEndpoint as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (KeyError, ValueError, TypeError, AttributeError) as e:
        raise HTTPException(status_code=400, detail=f"Invalid diagram document: {e}")


def _load_or_404(store, diagram_id: str) -> Diagram:
    diagram = store.load(diagram_id)
    if diagram is None:
        raise HTTPException(status_code=404, detail=f"Diagram {diagram_id} not found")
    return diagram


# =============================================================================
# Stateless operations
# =============================================================================

@router.post("/from-source", response_model=DiagramAnalysisResponse)
async def diagram_from_source(
    body: FromSourceRequest,
    diagram_service=Depends(get_diagram_service),
):
    """Extract, infer and lay out a diagram from in-memory source files."""
    try:
        result = diagram_service.diagram_from_sources(
            [(s.path, s.text) for s in body.sources], name=body.name
        )
    except UnreadableInput as e:
        raise HTTPException(status_code=422, detail=str(e))

    saved = False
    if body.save:
        if diagram_service.store is None:
            raise HTTPException(status_code=503, detail="Diagram storage not available")
        diagram_service.save(result.diagram)
        saved = True

    return DiagramAnalysisResponse(
        diagram=diagram_to_dict(result.diagram),
        saved=saved,
        extraction_issues=[asdict(i) for i in result.issues],
        ambiguities=[asdict(a) for a in result.inference.ambiguities],
        unresolved_supertypes=[asdict(u) for u in result.inference.unresolved],
        validation_issues=diagram_service.validate(result.diagram),
    )


@router.post("/validate", response_model=ValidationResponse)
async def validate_diagram(
    body: DiagramRequest,
    diagram_service=Depends(get_diagram_service),
):
    """Validate a diagram document."""
    issues = diagram_service.validate(_parse_document(body.diagram))
    return ValidationResponse(valid=not issues, issues=issues)


@router.post("/generate", response_model=GenerateResponse)
async def generate_code(
    body: DiagramRequest,
    diagram_service=Depends(get_diagram_service),
):
    """Generate one Java source per classifier of a diagram document."""
    files = diagram_service.generate_code(_parse_document(body.diagram))
    return GenerateResponse(files=files, count=len(files))


# =============================================================================
# Saved diagrams
# =============================================================================

@router.get("", response_model=DiagramList)
async def list_diagrams(
    limit: int = 20,
    store=Depends(get_diagram_store),
):
    """List recently updated diagrams."""
    diagrams = store.list_recent(limit)
    return DiagramList(diagrams=diagrams, count=len(diagrams))


@router.get("/{diagram_id}")
async def get_diagram(
    diagram_id: str,
    store=Depends(get_diagram_store),
):
    """Get a saved diagram document."""
    return diagram_to_dict(_load_or_404(store, diagram_id))


@router.delete("/{diagram_id}")
async def delete_diagram(
    diagram_id: str,
    store=Depends(get_diagram_store),
):
    """Delete a saved diagram."""
    if not store.delete(diagram_id):
        raise HTTPException(status_code=404, detail=f"Diagram {diagram_id} not found")
    return {"success": True, "uuid": diagram_id}


@router.get("/{diagram_id}/validation", response_model=ValidationResponse)
async def validate_saved_diagram(
    diagram_id: str,
    store=Depends(get_diagram_store),
    diagram_service=Depends(get_diagram_service),
):
    """Validate a saved diagram."""
    issues = diagram_service.validate(_load_or_404(store, diagram_id))
    return ValidationResponse(valid=not issues, issues=issues)


@router.get("/{diagram_id}/plantuml", response_class=PlainTextResponse)
async def saved_diagram_plantuml(
    diagram_id: str,
    store=Depends(get_diagram_store),
    diagram_service=Depends(get_diagram_service),
):
    """PlantUML text of a saved diagram."""
    return diagram_service.render_plantuml(_load_or_404(store, diagram_id))
