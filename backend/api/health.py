"""GET /api/health — system dependency check."""
import logging
from fastapi import APIRouter

from core.db_connector import check_database, get_engine
from integrations.ollama_client import OllamaClient

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
def health_check():
    ollama_status = _check_ollama()
    db_status     = _check_database()
    overall = "ok" if ollama_status["status"] == "up" and db_status["status"] == "up" else "degraded"
    return {
        "status": overall,
        "services": {
            "ollama":   ollama_status,
            "database": db_status,
        },
    }


def _check_ollama() -> dict:
    ollama = OllamaClient()
    healthy, detail = ollama.is_healthy()
    if healthy:
        return {"status": "up", "model": detail, "url": ollama.host}
    return {"status": "down", "error": detail}


def _check_database() -> dict:
    try:
        return check_database(get_engine())
    except Exception as e:
        return {"status": "down", "error": str(e)}
