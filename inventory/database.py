import logging

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

# Base class for models
Base = declarative_base()


class Database:
    """
    Owns the SQLAlchemy engine and session factory.

    Opened once when the application starts and disposed when it stops.
    Request handlers reach it through `app.state.database` via `get_db`.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url

        engine_kwargs = {"echo": echo, "pool_pre_ping": True}
        if url.startswith("sqlite"):
            # FastAPI runs sync routes in a threadpool
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if ":memory:" in url or url in ("sqlite://", "sqlite:///"):
                # a single shared connection, otherwise every connection
                # gets its own empty in-memory database
                engine_kwargs["poolclass"] = StaticPool

        self.engine = create_engine(url, **engine_kwargs)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_tables(self) -> None:
        """Create missing tables. Existing tables and rows are left alone."""
        # models must be imported so their tables are registered on Base
        from inventory.models import product  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def drop_tables(self) -> None:
        Base.metadata.drop_all(bind=self.engine)

    def ping(self) -> None:
        """Run a trivial query; raises if the database is unreachable."""
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def dispose(self) -> None:
        logger.info("Closing database connections...")
        self.engine.dispose()


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_db(request: Request):
    """
    Dependency to get database session.
    Yields a database session and closes it after use.
    """
    db = get_database(request).SessionLocal()
    try:
        yield db
    finally:
        db.close()
