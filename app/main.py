"""
DocSentinel - FastAPI Application
Legal-risk and authenticity analysis for scanned legal documents.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import get_settings
from app.core.errors import setup_exception_handlers
from app.core.logging_config import setup_logging
from app.routers.document_analysis import router as document_analysis_router
from app.services.document_analysis import get_analysis_engine


# =============================================================================
# Lifespan (Startup/Shutdown)
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the pattern catalog and engine before the first request."""
    settings = get_settings()
    logger = logging.getLogger(__name__)

    engine = get_analysis_engine()
    logger.info(
        "%s v%s ready: %d document types, %d clause signatures, %d security workers",
        settings.app_name,
        settings.app_version,
        len(engine.catalog.document_types),
        len(engine.catalog.clauses),
        engine.max_workers,
    )
    yield
    logger.info("%s shutting down", settings.app_name)


# =============================================================================
# Application Factory
# =============================================================================

def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_json_format)

    tags_metadata = [
        {
            "name": "Document Analysis",
            "description": "Legal-risk and authenticity assessment of scanned legal documents.",
        },
    ]

    app = FastAPI(
        title=settings.app_name,
        description=settings.app_description,
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.enable_docs else None,
        redoc_url="/api/redoc" if settings.enable_docs else None,
        openapi_url="/api/openapi.json" if settings.enable_docs else None,
        openapi_tags=tags_metadata,
    )

    # =========================================================================
    # Middleware
    # =========================================================================
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Exception Handlers
    # =========================================================================
    setup_exception_handlers(app)

    # =========================================================================
    # Routers
    # =========================================================================
    app.include_router(document_analysis_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run("app.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())
