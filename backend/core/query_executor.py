"""
Query executor — runs a gated statement and normalizes the outcome.
Callers must only pass SQL that the gate returned as Execute.
"""
import logging

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from models.query import QueryResult

logger = logging.getLogger(__name__)


def _plain_value(value):
    # binary columns (varbinary, rowversion) are rendered as 0x-prefixed hex
    if isinstance(value, (bytes, bytearray, memoryview)):
        return "0x" + bytes(value).hex().upper()
    return value


def _plain_row(mapping) -> dict:
    return {key: _plain_value(value) for key, value in mapping.items()}


def execute_query(engine: Engine, sql: str) -> QueryResult:
    """
    Run sql verbatim as one statement on a fresh connection and read every row.
    The connection is released on both paths and never committed. Database
    errors become a failed QueryResult; nothing is retried.
    """
    try:
        with engine.connect() as conn:
            result = conn.exec_driver_sql(sql)
            rows = [_plain_row(row._mapping) for row in result] if result.returns_rows else []
    except SQLAlchemyError as e:
        message = str(e.orig) if getattr(e, "orig", None) is not None else str(e)
        logger.warning("Query execution failed: %s", message)
        return QueryResult.failed(message)

    logger.info("Query returned %d rows", len(rows))
    return QueryResult.ok(rows)
