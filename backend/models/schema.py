"""Pydantic schemas for the allow-listed schema descriptor."""
from pydantic import BaseModel


class ColumnDescriptor(BaseModel):
    name: str
    declared_type: str
    nullable: bool = True


# table name → columns in ordinal order
SchemaDescriptor = dict[str, list[ColumnDescriptor]]
