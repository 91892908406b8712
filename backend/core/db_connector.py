"""
Database connector — SQLAlchemy engine factory.
One real connection per checkout: the engine uses NullPool so a connection is
opened for each statement and closed as soon as it is released.
"""
import logging
from functools import lru_cache

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import NullPool

from config import settings
from models.connection import ConnectionDescriptor

logger = logging.getLogger(__name__)


class DatabaseUnavailable(RuntimeError):
    """Raised when a connection to the database cannot be established."""


def create_engine_from_descriptor(desc: ConnectionDescriptor) -> Engine:
    """Build a SQLAlchemy engine without a connection pool."""
    return create_engine(
        desc.get_sqlalchemy_url(),
        poolclass=NullPool,
        connect_args=desc.get_connect_args(),
    )


def check_database(engine: Engine) -> dict:
    """Lightweight reachability probe used by the health endpoint."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"status": "up", "dialect": engine.dialect.name}
    except SQLAlchemyError as e:
        logger.warning("Database health check failed: %s", e)
        return {"status": "down", "error": str(e)}


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    """Process-wide engine for the configured database (no pooling, see module doc)."""
    desc = settings.connection
    logger.info("Using %s database", desc.db_type)
    return create_engine_from_descriptor(desc)
