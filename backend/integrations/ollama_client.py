"""
Ollama REST API client.
Wraps POST /api/chat for SQL generation. One attempt per call: failures
surface immediately as GenerationError.
"""
import logging
from dataclasses import dataclass
from typing import Callable, Optional
import httpx

from config import settings

logger = logging.getLogger(__name__)


class GenerationError(RuntimeError):
    """Raised when the model server cannot produce a reply."""


@dataclass(frozen=True)
class GenerationResult:
    text: str
    prompt_token_count: int
    total_token_count: int


class ContextWindowCache:
    """
    Compute-once, read-many store of model context sizes.
    Concurrent first lookups may both compute; the values are identical.
    """

    def __init__(self):
        self._values: dict[tuple[str, str], int] = {}

    def get_or_compute(self, key: tuple[str, str], compute: Callable[[], Optional[int]]) -> Optional[int]:
        value = self._values.get(key)
        if value is None:
            value = compute()
            if value is not None:
                self._values[key] = value
        return value

    def clear(self) -> None:
        self._values.clear()


context_windows = ContextWindowCache()


class OllamaClient:
    """Thin client for the Ollama local LLM server."""

    def __init__(self):
        self.host = settings.OLLAMA_HOST.rstrip("/")
        self.model = settings.OLLAMA_MODEL
        self.timeout = settings.OLLAMA_TIMEOUT_SECONDS
        self.num_ctx = settings.OLLAMA_NUM_CTX
        self.temperature = settings.OLLAMA_TEMPERATURE

    def is_healthy(self) -> tuple[bool, Optional[str]]:
        """Returns (True, model_name) if Ollama is reachable, (False, error) otherwise."""
        try:
            resp = httpx.get(f"{self.host}/api/version", timeout=5)
            resp.raise_for_status()
            return True, self.model
        except Exception as e:
            return False, str(e)

    def chat(self, messages: list[dict]) -> GenerationResult:
        """
        Call Ollama /api/chat with a list of {role, content} messages.
        Returns the assistant's reply and the token counts Ollama reports.
        """
        payload = {
            "model": self.model,
            "messages": messages,
            "stream": False,
            "options": {"num_ctx": self.num_ctx, "temperature": self.temperature},
        }
        try:
            resp = httpx.post(
                f"{self.host}/api/chat",
                json=payload,
                timeout=self.timeout,
            )
            resp.raise_for_status()
            data = resp.json()
            text = data["message"]["content"]
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            logger.error("Ollama chat failed: %s", e)
            raise GenerationError(f"Ollama chat failed: {e}") from e

        prompt_tokens = int(data.get("prompt_eval_count") or 0)
        output_tokens = int(data.get("eval_count") or 0)
        logger.debug("Ollama reply: %d chars, %d prompt tokens", len(text), prompt_tokens)
        return GenerationResult(
            text=text,
            prompt_token_count=prompt_tokens,
            total_token_count=prompt_tokens + output_tokens,
        )

    def context_window(self) -> int:
        """Effective context size: the model's own limit capped by num_ctx."""
        native = context_windows.get_or_compute((self.host, self.model), self._fetch_context_length)
        if native is None:
            return self.num_ctx
        return min(native, self.num_ctx)

    def _fetch_context_length(self) -> Optional[int]:
        try:
            resp = httpx.post(f"{self.host}/api/show", json={"model": self.model}, timeout=10)
            resp.raise_for_status()
            info = resp.json().get("model_info") or {}
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Could not read context length for %s: %s", self.model, e)
            return None
        for key, value in info.items():
            if key.endswith(".context_length"):
                return int(value)
        return None
