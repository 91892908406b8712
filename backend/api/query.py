"""POST /api/query — natural-language questions answered with gated SQL."""
import logging
import time
from typing import Optional

from fastapi import APIRouter, Header
from fastapi.responses import JSONResponse

from core.chat_agent import handle_query
from core.db_connector import get_engine
from core.identity import extract_user_info
from integrations.ollama_client import OllamaClient
from integrations.telemetry_client import TelemetryClient
from models.chat import ChatRequest, ChatResponse
from models.telemetry import QueryTelemetry

router = APIRouter()
logger = logging.getLogger(__name__)

MESSAGE_REQUIRED = "Message is required"
INTERNAL_ERROR = "An internal error occurred while processing your request."


def _elapsed_ms(t0: float) -> int:
    return int((time.perf_counter() - t0) * 1000)


@router.post("/query", response_model=ChatResponse)
@router.post("/chat", response_model=ChatResponse, include_in_schema=False)
def query(req: ChatRequest, x_ms_client_principal: Optional[str] = Header(None)):
    t0 = time.perf_counter()
    user = extract_user_info(x_ms_client_principal)
    logger.info("Query from %s (%s)", user.user_login, user.user_provider)

    with TelemetryClient() as telemetry:
        if not req.message:
            telemetry.track_query(QueryTelemetry(
                user_message="",
                ai_response="",
                query_success=False,
                query_error=MESSAGE_REQUIRED,
                response_time_ms=_elapsed_ms(t0),
                was_modifying_query=False,
                **user.model_dump(),
            ))
            return JSONResponse(status_code=400, content={"error": MESSAGE_REQUIRED})

        try:
            outcome = handle_query(
                message=req.message,
                history=req.history or [],
                engine=get_engine(),
                ollama=OllamaClient(),
            )
            content = outcome.response.model_dump(mode="json", by_alias=True)
        except Exception as e:
            logger.exception("Query request failed")
            telemetry.track_query(QueryTelemetry(
                user_message="Error occurred",
                ai_response="",
                query_success=False,
                query_error=str(e),
                response_time_ms=_elapsed_ms(t0),
                was_modifying_query=False,
                **user.model_dump(),
            ))
            return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR})

        response = outcome.response
        result = response.query_result
        telemetry.track_query(QueryTelemetry(
            user_message=req.message,
            ai_response=response.ai_response,
            sql_query=response.sql_query,
            query_success=result.success if result else False,
            query_error=result.error if result else None,
            row_count=result.row_count if result else None,
            response_time_ms=_elapsed_ms(t0),
            was_modifying_query=outcome.was_modifying_query,
            **user.model_dump(),
        ))
        return JSONResponse(status_code=200, content=content)
