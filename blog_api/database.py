from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

# Base class for models
Base = declarative_base()


class Database:
    """Owns the engine and session factory for one running application.

    Created by the app factory, opened in the lifespan startup and disposed on
    shutdown. Handlers reach it through `request.app.state.db`.
    """

    def __init__(self, url: str, *, echo: bool = False):
        engine_kwargs = {"echo": echo, "pool_pre_ping": True}
        if url.startswith("sqlite"):
            # Single shared connection so in-memory databases survive across sessions
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            engine_kwargs["poolclass"] = StaticPool
        self.url = url
        self.engine = create_engine(url, **engine_kwargs)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_all(self) -> None:
        # Import models so they register on Base.metadata
        from . import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def dispose(self) -> None:
        self.engine.dispose()


# Dependency for routes
def get_db(request: Request) -> Generator[Session, None, None]:
    """Database session dependency for FastAPI routes"""
    db = request.app.state.db.session()
    try:
        yield db
    finally:
        db.close()
