import logging
from contextlib import contextmanager

from fastapi import Request
from sqlalchemy.orm import sessionmaker
from sqlmodel import Session, SQLModel, create_engine

# Import all models to ensure they are registered with SQLModel metadata
from .models import Task  # noqa: F401

logger = logging.getLogger(__name__)


def _create_engine(url: str):
    if url.startswith("sqlite"):
        return create_engine(
            url,
            echo=False,
            connect_args={"check_same_thread": False},
        )

    return create_engine(
        url,
        echo=False,
        pool_pre_ping=True,
    )


class Database:
    """Store handle: one engine plus a session factory bound to it.

    Created once per application and shared by every request.
    """

    def __init__(self, url: str):
        self.url = url
        self.engine = _create_engine(url)
        self.SessionLocal = sessionmaker(
            bind=self.engine,
            class_=Session,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )

    def create_tables(self) -> None:
        """Create all database tables."""
        SQLModel.metadata.create_all(bind=self.engine)
        logger.info("Connected to database url=%s", self.engine.url.render_as_string(hide_password=True))

    @contextmanager
    def session(self):
        """Get a database session (context manager style).

        Usage:
            with database.session() as session:
                # do something with session
        """
        session = self.SessionLocal()
        try:
            yield session
        finally:
            session.close()

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request):
    """Dependency to get a session from the application's store handle."""
    database: Database = request.app.state.database
    with database.session() as db:
        yield db
