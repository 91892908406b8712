"""
Schema catalog — describes the allow-listed tables for the model prompt.
Tables outside the allow-list are never reported, even when they exist.
"""
import logging
from typing import Iterable

from sqlalchemy import inspect
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from core.db_connector import DatabaseUnavailable
from models.schema import ColumnDescriptor, SchemaDescriptor

logger = logging.getLogger(__name__)


def describe_schema(engine: Engine, allowed_tables: Iterable[str]) -> SchemaDescriptor:
    """
    Reflect columns for every allow-listed table present in the database.
    Names match case-insensitively, as under SQL Server's default collation.
    Only the connection's default schema is searched.
    Uses exactly one connection, released before returning.
    """
    allowed = {t.lower() for t in allowed_tables}
    try:
        with engine.connect() as conn:
            insp = inspect(conn)
            present = sorted(t for t in insp.get_table_names() if t.lower() in allowed)
            schema: SchemaDescriptor = {}
            for table_name in present:
                schema[table_name] = _reflect_columns(insp, table_name)
    except SQLAlchemyError as e:
        raise DatabaseUnavailable(f"Could not read database schema: {e}") from e

    logger.info("Described %d of %d allow-listed tables", len(schema), len(allowed))
    return schema


def _reflect_columns(insp, table_name: str) -> list[ColumnDescriptor]:
    result = []
    for col in insp.get_columns(table_name):
        data_type = str(col["type"]).lower()
        # Simplify long type strings
        if "(" in data_type:
            data_type = data_type.split("(")[0]
        result.append(ColumnDescriptor(
            name=col["name"],
            declared_type=data_type,
            nullable=col.get("nullable", True),
        ))
    return result


def schema_as_json(schema: SchemaDescriptor) -> dict:
    """Plain-dict form embedded in the system prompt."""
    return {
        table: [{"name": c.name, "type": c.declared_type, "nullable": c.nullable} for c in cols]
        for table, cols in schema.items()
    }
