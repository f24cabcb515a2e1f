"""FastAPI application — main entry point."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from qto.config import get_settings
from qto.core.exceptions import AppError, global_exception_handler, validation_exception_handler
from qto.core.logging import configure_logging
from qto.core.middleware import setup_middleware
from qto.infrastructure.database import Base, SessionLocal, engine

# Import all models so SQLAlchemy knows about them
from qto.domain.models.user import User  # noqa: F401
from qto.domain.models.project import Project  # noqa: F401
from qto.domain.models.qto_item import QTOItem  # noqa: F401

# Import routers
from qto.interfaces.api.auth import router as auth_router
from qto.interfaces.api.projects import router as projects_router
from qto.interfaces.api.qto_items import router as qto_items_router
from qto.interfaces.api.spreadsheets import router as spreadsheets_router

# Fails here, before serving anything, when SECRET_KEY is not configured
settings = get_settings()

configure_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — startup and shutdown events."""
    logger.info("Starting QTO service...", env=settings.ENVIRONMENT)

    # Create DB tables (dev only — use migrations in production)
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified")

    from qto.application.services.auth_service import ensure_initial_admin
    db = SessionLocal()
    try:
        ensure_initial_admin(db)
    finally:
        db.close()

    yield

    logger.info("QTO service stopped")


app = FastAPI(
    title="QTO — Quantity Takeoff Records",
    description="Projects, QTO line items and spreadsheet import/export",
    version="1.0.0",
    lifespan=lifespan,
)

setup_middleware(app)

app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(AppError, global_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

app.include_router(auth_router)
app.include_router(projects_router)
app.include_router(qto_items_router)
app.include_router(spreadsheets_router)


@app.get("/")
def root():
    return {
        "name": "QTO Service",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
def health():
    return {"status": "healthy"}
