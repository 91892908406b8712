"""Pydantic schema for the uniform query execution result."""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, model_serializer, model_validator
from pydantic.alias_generators import to_camel


class QueryResult(BaseModel):
    """
    Outcome of a gated query.

    success=True carries rows and row_count (== len(rows));
    success=False carries error only.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool
    rows: Optional[list[dict[str, Any]]] = None
    row_count: Optional[int] = None
    error: Optional[str] = None

    @model_validator(mode="after")
    def _check_shape(self) -> "QueryResult":
        if self.success:
            if self.rows is None or self.row_count != len(self.rows) or self.error is not None:
                raise ValueError("successful results need rows, a matching row_count and no error")
        elif self.error is None or self.rows is not None or self.row_count is not None:
            raise ValueError("failed results carry an error and no rows")
        return self

    @model_serializer(mode="wrap")
    def _drop_absent(self, handler):
        return {k: v for k, v in handler(self).items() if v is not None}

    @classmethod
    def ok(cls, rows: list[dict[str, Any]]) -> "QueryResult":
        return cls(success=True, rows=rows, row_count=len(rows))

    @classmethod
    def failed(cls, error: str) -> "QueryResult":
        return cls(success=False, error=error)
