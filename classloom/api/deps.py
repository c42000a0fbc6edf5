"""FastAPI dependencies for classloom.

Provides shared services via FastAPI's Depends() injection system.
"""

import logging

from fastapi import HTTPException, Request

logger = logging.getLogger(__name__)


async def get_diagram_service(request: Request):
    """Get DiagramService from app state."""
    return request.app.state.diagram_service


async def get_diagram_store(request: Request):
    """Get DiagramStore from app state."""
    store = request.app.state.diagram_service.store
    if store is None:
        raise HTTPException(status_code=503, detail="Diagram storage not available")
    return store
