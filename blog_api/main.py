import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from .api.v1.api import api_router
from .config import settings
from .core.error_handlers import register_exception_handlers
from .database import Database
from .init_db import init_db

logger = logging.getLogger(__name__)


def create_app(database: Optional[Database] = None) -> FastAPI:
    """Build the application around a database handle.

    The handle is opened on startup and disposed on shutdown. Tests pass their
    own (e.g. in-memory SQLite); otherwise one is built from settings.
    """
    logging.basicConfig(level=settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db_handle = database or Database(settings.DATABASE_URL, echo=settings.DEBUG)
        if settings.CREATE_TABLES_ON_STARTUP:
            init_db(db_handle)
        app.state.db = db_handle
        logger.info(f"🚀 {settings.API_TITLE} started")
        yield
        db_handle.dispose()
        logger.info(f"⏹️ {settings.API_TITLE} stopped")

    app = FastAPI(
        title=settings.API_TITLE,
        version=settings.API_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    register_exception_handlers(app)
    app.include_router(api_router)

    # Root endpoint
    @app.get("/")
    def read_root():
        """Hello World endpoint"""
        return {
            "success": True,
            "message": f"Welcome to {settings.API_TITLE}",
            "version": settings.API_VERSION,
        }

    # Health check endpoint
    @app.get("/health")
    def health_check():
        """API health check"""
        return {"success": True, "status": "healthy"}

    return app


# Create FastAPI app
app = create_app()
