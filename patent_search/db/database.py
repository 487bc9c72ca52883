import logging
from typing import Generator, Optional

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from patent_search.core.config import settings

logger = logging.getLogger(__name__)

Base = declarative_base()


class Database:
    """
    Handle on the patent store: owns the engine and the session factory.

    Created once at application startup and disposed at shutdown; every
    component that reads the store receives sessions from this handle
    instead of importing a global engine.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        echo: Optional[bool] = None,
        isolation_level: Optional[str] = None,
        engine: Optional[Engine] = None,
    ):
        self.url = url or settings.DATABASE_URL
        self.engine = engine or self._create_engine(
            self.url,
            settings.DATABASE_ECHO if echo is None else echo,
            isolation_level or settings.DATABASE_ISOLATION_LEVEL,
        )
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    @staticmethod
    def _create_engine(url: str, echo: bool, isolation_level: Optional[str]) -> Engine:
        kwargs = {"echo": echo}
        if isolation_level:
            kwargs["isolation_level"] = isolation_level

        if url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            # An in-memory database only lives as long as its single connection
            if ":memory:" in url or url in ("sqlite://", "sqlite+pysqlite://"):
                kwargs["poolclass"] = StaticPool
        else:
            kwargs["pool_size"] = settings.DATABASE_POOL_SIZE
            kwargs["pool_pre_ping"] = True

        if "postgresql" in url:
            kwargs.setdefault("connect_args", {})["client_encoding"] = "utf8"

        return create_engine(url, **kwargs)

    def create_all(self) -> None:
        # Import the models so they are registered on Base
        from patent_search.models import model  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def dispose(self) -> None:
        logger.info("Closing database connections")
        self.engine.dispose()


def get_db(request: Request) -> Generator[Session, None, None]:
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
