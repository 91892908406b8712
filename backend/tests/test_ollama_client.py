import httpx
import pytest
from unittest.mock import patch

from integrations.ollama_client import ContextWindowCache, GenerationError, OllamaClient, context_windows


def _response(status: int, payload: dict, url: str = "http://ollama/api/chat") -> httpx.Response:
    return httpx.Response(status, json=payload, request=httpx.Request("POST", url))


@pytest.fixture(autouse=True)
def _fresh_context_cache():
    context_windows.clear()
    yield
    context_windows.clear()


def test_chat_returns_text_and_token_counts():
    payload = {
        "message": {"role": "assistant", "content": "  ```sql\nSELECT 1\n```  "},
        "prompt_eval_count": 200,
        "eval_count": 30,
    }
    with patch("integrations.ollama_client.httpx.post", return_value=_response(200, payload)) as post:
        result = OllamaClient().chat([{"role": "user", "content": "hi"}])

    assert result.text == "  ```sql\nSELECT 1\n```  "
    assert result.prompt_token_count == 200
    assert result.total_token_count == 230
    sent = post.call_args.kwargs["json"]
    assert sent["stream"] is False
    assert sent["messages"] == [{"role": "user", "content": "hi"}]


def test_chat_fails_fast_without_retry():
    with patch("integrations.ollama_client.httpx.post", return_value=_response(500, {"error": "boom"})) as post:
        with pytest.raises(GenerationError):
            OllamaClient().chat([{"role": "user", "content": "hi"}])
    assert post.call_count == 1


def test_chat_transport_error():
    with patch("integrations.ollama_client.httpx.post", side_effect=httpx.ConnectError("refused")):
        with pytest.raises(GenerationError):
            OllamaClient().chat([])


def test_context_window_is_looked_up_once():
    show = _response(200, {"model_info": {"qwen2.context_length": 32768}}, "http://ollama/api/show")
    client = OllamaClient()
    with patch("integrations.ollama_client.httpx.post", return_value=show) as post:
        first = client.context_window()
        second = client.context_window()
    assert first == second == min(32768, client.num_ctx)
    assert post.call_count == 1


def test_context_window_falls_back_to_num_ctx():
    client = OllamaClient()
    with patch("integrations.ollama_client.httpx.post", side_effect=httpx.ConnectError("refused")) as post:
        assert client.context_window() == client.num_ctx
        assert client.context_window() == client.num_ctx
    # failures are not cached
    assert post.call_count == 2


def test_context_window_cache_computes_once():
    cache = ContextWindowCache()
    calls = []

    def compute():
        calls.append(1)
        return 4096

    assert cache.get_or_compute(("h", "m"), compute) == 4096
    assert cache.get_or_compute(("h", "m"), compute) == 4096
    assert len(calls) == 1
