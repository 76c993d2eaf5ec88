import asyncio

from chat_memory.domain.models import ChatMessage, ErrorKind, GenerationOk
from chat_memory.providers.openai_client import OpenAICompatibleClient


class SettingsStub:
    openai_api_key = "sk-test-123456"
    openai_base_url = "http://localhost:8000/v1"
    openai_model = "local-model"
    http_timeout = 1.0
    generation_timeout = 5.0


WINDOW = [ChatMessage(role="system", content="sys"), ChatMessage(role="user", content="hi")]


def _client_with(status_code, data, text="", captured=None):
    class Resp:
        def __init__(self):
            self.status_code = status_code
            self.text = text

        def json(self):
            return data

    class Client:
        def __init__(self, *a, **kw):
            pass

        async def __aenter__(self):
            return self

        async def __aexit__(self, *a):
            return False

        async def post(self, url, json=None, **_):
            if captured is not None:
                captured["url"] = url
                captured["payload"] = json
            return Resp()

    return Client


def test_openai_client_basic(monkeypatch):
    captured = {}
    data = {"choices": [{"index": 0, "message": {"role": "assistant", "content": "ok"}, "finish_reason": "stop"}]}
    monkeypatch.setattr("httpx.AsyncClient", _client_with(200, data, captured=captured))
    result = asyncio.run(OpenAICompatibleClient(SettingsStub()).generate(WINDOW))
    assert result == GenerationOk(content="ok")
    assert captured["url"] == "http://localhost:8000/v1/chat/completions"
    assert captured["payload"]["model"] == "local-model"
    assert captured["payload"]["max_tokens"] == 500
    assert captured["payload"]["temperature"] == 0.7


def test_openai_client_quota_body(monkeypatch):
    body = '{"error": {"code": "insufficient_quota", "message": "You exceeded your current quota"}}'
    monkeypatch.setattr("httpx.AsyncClient", _client_with(429, {}, text=body))
    result = asyncio.run(OpenAICompatibleClient(SettingsStub()).generate(WINDOW))
    assert result.kind == ErrorKind.QUOTA


def test_openai_client_empty_choices(monkeypatch):
    monkeypatch.setattr("httpx.AsyncClient", _client_with(200, {"choices": []}))
    result = asyncio.run(OpenAICompatibleClient(SettingsStub()).generate(WINDOW))
    assert result.kind == ErrorKind.OTHER
