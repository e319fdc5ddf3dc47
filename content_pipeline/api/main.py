import logging
from typing import Any

from fastapi import FastAPI

from content_pipeline import __version__
from content_pipeline.api.routes import admin_preview

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Build the preview API application."""
    app = FastAPI(
        title="Content Pipeline API",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # --- Routers ---
    app.include_router(admin_preview.router, prefix="/api/admin/preview", tags=["Admin Preview"])

    @app.get("/health")
    def health_check() -> dict[str, Any]:
        return {"status": "ok", "version": __version__}

    logger.info("Preview API initialized")
    return app


app = create_app()
