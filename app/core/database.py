"""
Database engines and sessions.

Two physical stores are read: the primary store holding the full catalog and
the secondary branch store, of which only stock and price tables are used.
"""

import logging
from typing import Any, Dict, List

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.sql import Executable

from app.core.config import settings
from app.core.exceptions import UpstreamError

logger = logging.getLogger(__name__)

engine = create_engine(
    settings.DATABASE_URL,
    pool_size=settings.DB_POOL_SIZE,
    pool_pre_ping=True,
    echo=settings.DB_ECHO,
)
secondary_engine = create_engine(
    settings.SECONDARY_DATABASE_URL,
    pool_size=settings.DB_POOL_SIZE,
    pool_pre_ping=True,
    echo=settings.DB_ECHO,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
SecondarySessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=secondary_engine)

# Legacy tables of each store are declared on their own metadata
Base = declarative_base()
SecondaryBase = declarative_base()


def get_db():
    """Dependency yielding a primary store session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_secondary_db():
    """Dependency yielding a secondary store session"""
    db = SecondarySessionLocal()
    try:
        yield db
    finally:
        db.close()


class StoreGateway:
    """
    Read-only accessor over one store: execute a statement, return rows or fail.

    Rows come back as plain dicts keyed by column label. Any driver or SQL
    failure is logged at failure_level and re-raised as UpstreamError; callers
    that tolerate the failure pass a lower level and log it themselves.
    """

    def __init__(self, db: Session, name: str = "primary", failure_level: int = logging.ERROR):
        self.db = db
        self.name = name
        self.failure_level = failure_level

    def _fail(self, e: SQLAlchemyError) -> UpstreamError:
        self.db.rollback()
        logger.log(
            self.failure_level,
            f"Query failed on {self.name} store: {str(e)}",
            exc_info=self.failure_level >= logging.ERROR,
        )
        return UpstreamError(f"Error al consultar la base de datos ({self.name}).", str(e))

    def fetch_all(self, statement: Executable) -> List[Dict[str, Any]]:
        try:
            result = self.db.execute(statement)
            return [dict(row) for row in result.mappings().all()]
        except SQLAlchemyError as e:
            raise self._fail(e) from e

    def fetch_scalar(self, statement: Executable) -> Any:
        try:
            return self.db.execute(statement).scalar()
        except SQLAlchemyError as e:
            raise self._fail(e) from e
