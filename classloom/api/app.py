"""FastAPI application factory for classloom.

Creates and configures the FastAPI app with CORS and all route modules
registered.
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..core.db import DatabaseManager
from ..core.services import DiagramService, DiagramStore
from ..setting import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(
    db_manager: Optional[DatabaseManager] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        db_manager: DatabaseManager instance (optional; without it the
            saved-diagram routes answer 503)
        settings: Settings instance, defaults to get_settings()

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="classloom API",
        description="UML class-diagram extraction, validation and Java generation",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",
            "http://localhost:5173",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Store shared dependencies on app state
    store = DiagramStore(db_manager) if db_manager is not None else None
    app.state.settings = settings
    app.state.db_manager = db_manager
    app.state.diagram_service = DiagramService(settings, store=store)

    # Register routers
    from .routes.analysis import router as analysis_router
    from .routes.diagrams import router as diagrams_router

    app.include_router(analysis_router, prefix="/api")
    app.include_router(diagrams_router, prefix="/api")

    @app.get("/api/health")
    async def health_check():
        return {
            "status": "ok",
            "service": "classloom",
            "storage": db_manager is not None,
        }

    logger.info("FastAPI app created with all routes registered")
    return app
