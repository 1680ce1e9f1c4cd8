import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import CORS_ORIGINS, DATABASE_URL
from .database import Database
from .middleware.error_handler import register_error_handlers
from .routers import tasks

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create tables on startup, release the engine on shutdown
    database: Database = app.state.database
    database.create_tables()
    yield
    database.dispose()


def create_app(database_url: Optional[str] = None) -> FastAPI:
    """Build the API around an explicitly constructed store handle."""
    app = FastAPI(
        title="Task Tracker API",
        description="Task CRUD API backed by a SQL store",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.database = Database(database_url or DATABASE_URL)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials="*" not in CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Include routers
    app.include_router(tasks.router, prefix="/api/tasks", tags=["tasks"])

    @app.get("/")
    def read_root():
        return {"message": "Welcome to Task Tracker API"}

    @app.get("/health")
    def health_check():
        return {"status": "healthy"}

    return app


app = create_app()
