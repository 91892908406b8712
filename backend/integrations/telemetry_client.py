"""
Query telemetry sink.
Logs one DatabaseQuery event per request and, when TELEMETRY_ENDPOINT is set,
posts it over HTTP. Delivery is best-effort: nothing here raises.
"""
import logging
from typing import Optional
import httpx

from config import settings
from models.telemetry import QueryTelemetry

logger = logging.getLogger(__name__)

EVENT_NAME = "DatabaseQuery"


def build_event(t: QueryTelemetry) -> dict:
    return {
        "name": EVENT_NAME,
        "properties": {
            "userMessage": t.user_message,
            "aiResponse": t.ai_response,
            "sqlQuery": t.sql_query or "N/A",
            "querySuccess": t.query_success,
            "queryError": t.query_error or "N/A",
            "wasModifyingQuery": t.was_modifying_query,
            "userId": t.user_id or "anonymous",
            "userLogin": t.user_login or "anonymous",
            "userProvider": t.user_provider or "none",
        },
        "measurements": {
            "responseTimeMs": t.response_time_ms,
            "rowCount": t.row_count or 0,
        },
    }


class TelemetryClient:
    """Fire-and-forget event emitter."""

    def __init__(self, endpoint: Optional[str] = None):
        self.endpoint = (endpoint if endpoint is not None else settings.TELEMETRY_ENDPOINT).strip()
        self.client = httpx.Client(timeout=settings.TELEMETRY_TIMEOUT_SECONDS) if self.endpoint else None

    def track_query(self, telemetry: QueryTelemetry) -> None:
        try:
            event = build_event(telemetry)
            logger.info(
                "%s user=%s success=%s modifying=%s rows=%s time_ms=%d",
                EVENT_NAME,
                event["properties"]["userLogin"],
                telemetry.query_success,
                telemetry.was_modifying_query,
                event["measurements"]["rowCount"],
                telemetry.response_time_ms,
            )
            if not telemetry.query_success and not telemetry.was_modifying_query:
                logger.warning("Query failed: %s (sql: %s)", event["properties"]["queryError"], event["properties"]["sqlQuery"])
            if self.client is not None:
                resp = self.client.post(self.endpoint, json=event)
                resp.raise_for_status()
        except Exception as e:
            logger.warning("Telemetry delivery failed: %s", e)

    def close(self):
        if self.client is not None:
            self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, *_):
        self.close()
