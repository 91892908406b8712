"""Pydantic schemas for caller identity and per-request telemetry."""
from typing import Optional
from pydantic import BaseModel


class UserInfo(BaseModel):
    user_id: str
    user_login: str
    user_provider: str


ANONYMOUS_USER = UserInfo(user_id="anonymous", user_login="anonymous", user_provider="none")


class QueryTelemetry(BaseModel):
    user_message: str
    ai_response: str
    sql_query: Optional[str] = None
    query_success: bool
    query_error: Optional[str] = None
    row_count: Optional[int] = None
    response_time_ms: int
    was_modifying_query: bool
    user_id: Optional[str] = None
    user_login: Optional[str] = None
    user_provider: Optional[str] = None
