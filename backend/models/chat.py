"""Pydantic schemas for the query/chat API."""
from typing import Optional, Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from models.query import QueryResult


class HistoryMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    message: Optional[str] = None   # validated by the route so the 400 body matches the client contract
    history: Optional[list[HistoryMessage]] = None


class TokenUsage(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    prompt_token_count: int
    total_token_count: int
    context_window: int


class ChatResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    ai_response: str
    sql_query: Optional[str] = None
    query_result: Optional[QueryResult] = None
    token_usage: Optional[TokenUsage] = None
