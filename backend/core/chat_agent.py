"""
Chat agent — turns one user message into an answer and an optional gated query.

Per request: describe schema → build prompt → generate → extract SQL →
classify → gate → execute or refuse. Steps run strictly in order and no
state is kept between requests; the client owns the conversation history.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.engine import Engine

from config import settings
from core.conversation import build_messages, build_system_prompt, extract_sql_query
from core.query_executor import execute_query
from core.query_policy import Classification, Execute, QueryMode, classify, gate
from core.schema_catalog import describe_schema
from integrations.ollama_client import OllamaClient
from models.chat import ChatResponse, HistoryMessage, TokenUsage
from models.query import QueryResult

logger = logging.getLogger(__name__)


@dataclass
class ChatOutcome:
    response: ChatResponse
    was_modifying_query: bool = False


def _run_approved(engine: Engine, decision: Execute, mode: QueryMode) -> QueryResult:
    # Re-check right before touching the database.
    recheck = classify(decision.sql, mode)
    if recheck.classification is not Classification.READ:
        return QueryResult.failed(recheck.reason or "Query failed the pre-execution check")
    return execute_query(engine, decision.sql)


def handle_query(
    message: str,
    history: list[HistoryMessage],
    engine: Engine,
    ollama: OllamaClient,
    mode: Optional[QueryMode] = None,
    allowed_tables: Optional[list[str]] = None,
) -> ChatOutcome:
    """Main chat handler. Raises DatabaseUnavailable / GenerationError on upstream failure."""
    mode = mode or settings.QUERY_MODE
    allowed_tables = allowed_tables if allowed_tables is not None else settings.allowed_table_list

    schema = describe_schema(engine, allowed_tables)
    system = build_system_prompt(schema, allowed_tables, settings.DB_TYPE, mode)
    messages = build_messages(history, message, system)

    generation = ollama.chat(messages)
    token_usage = TokenUsage(
        prompt_token_count=generation.prompt_token_count,
        total_token_count=generation.total_token_count,
        context_window=ollama.context_window(),
    )
    ai_response = generation.text

    sql_query = extract_sql_query(ai_response) or None
    logger.info("Extracted SQL query: %s", sql_query)
    if sql_query is None:
        return ChatOutcome(ChatResponse(ai_response=ai_response, token_usage=token_usage))

    classified = classify(sql_query, mode)
    decision = gate(classified, sql_query)
    if isinstance(decision, Execute):
        query_result = _run_approved(engine, decision, mode)
    else:
        query_result = decision.result
        if decision.message:
            ai_response = decision.message

    return ChatOutcome(
        response=ChatResponse(
            ai_response=ai_response,
            sql_query=sql_query,
            query_result=query_result,
            token_usage=token_usage,
        ),
        was_modifying_query=classified.classification is Classification.WRITE,
    )
