import sqlite3
from typing import Annotated
from uuid import uuid4

from fastapi import Depends
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session, declarative_base
from sqlalchemy.pool import QueuePool

from ..core.config import settings
from ..logging import logger

DATABASE_URL = settings.DATABASE_URL

IN_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


class SharedMemoryStore:
    """
    A named in-memory SQLite database that every pooled connection opens.

    Each session gets its own connection, and with it its own transaction, so
    one session closing cannot roll back another session's work. The anchor
    connection keeps the database alive while the engine holds this store.
    """

    def __init__(self):
        self.uri = f"file:storefront-{uuid4().hex}?mode=memory&cache=shared"
        self._anchor = self.connect()

    def connect(self):
        return sqlite3.connect(self.uri, uri=True, check_same_thread=False)


def build_engine(url: str):
    """Create an engine with settings appropriate for PostgreSQL vs SQLite."""
    if url.startswith("postgresql://"):
        return create_engine(
            url,
            pool_pre_ping=True,
            pool_recycle=300,
            echo=False  # Set to True for SQL debugging
        )
    if url in IN_MEMORY_URLS:
        store = SharedMemoryStore()
        return create_engine(
            "sqlite://",
            creator=store.connect,
            poolclass=QueuePool,
            echo=False
        )
    return create_engine(
        url,
        connect_args={"check_same_thread": False},
        echo=False
    )


logger.info("Using database: PostgreSQL" if "postgresql" in DATABASE_URL else "Using database: SQLite")

engine = build_engine(DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


DbSession = Annotated[Session, Depends(get_db)]
