from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from core.errors import ModelUnavailableError
from core.llm.client import ModelTranslationClient
from handlers.async_comm import AsyncCommError, AsyncCommTimeoutError, AsyncHttp
from models.config_models import Config
from models.model_server_models import ModelInfo


@pytest.fixture
def http() -> MagicMock:
    mock = MagicMock(spec=AsyncHttp)
    mock.get = AsyncMock()
    mock.post = AsyncMock()
    mock.close = AsyncMock()
    return mock


@pytest.fixture
def client(http: MagicMock) -> ModelTranslationClient:
    return ModelTranslationClient(Config(), http)


@pytest.mark.asyncio
async def test_translate_posts_generate_request(client: ModelTranslationClient, http: MagicMock) -> None:
    http.post.return_value = {"response": "```java\nint x = 5;\n```", "done": True}

    result: str = await client.translate("let x = 5", "typescript", "java")

    assert result == "// Converted to Java using Ollama AI\n\nint x = 5;"
    kwargs: dict[str, Any] = http.post.await_args.kwargs
    assert kwargs["url"] == "http://localhost:11434/api/generate"
    assert kwargs["total_timeout"] == 180.0
    body: dict[str, Any] = kwargs["data"]
    assert body["model"] == "llama3.2:latest"
    assert body["stream"] is False
    assert body["options"] == {"temperature": 0.1, "top_p": 0.9, "stop": ["```", "```java", "```java"]}
    assert "let x = 5" in body["prompt"]


@pytest.mark.asyncio
async def test_translate_uses_updated_settings(client: ModelTranslationClient, http: MagicMock) -> None:
    http.post.return_value = {"response": "int value = 5;"}
    client.config.MODEL.BASE_URL = "http://gpu-box:11434/"
    client.config.MODEL.MODEL = "codellama:7b"

    await client.translate("let value = 5", "typescript", "java")

    kwargs: dict[str, Any] = http.post.await_args.kwargs
    assert kwargs["url"] == "http://gpu-box:11434/api/generate"
    assert kwargs["data"]["model"] == "codellama:7b"


@pytest.mark.asyncio
async def test_translate_timeout_raises_model_unavailable(client: ModelTranslationClient, http: MagicMock) -> None:
    http.post.side_effect = AsyncCommTimeoutError("timeout")

    with pytest.raises(ModelUnavailableError, match="timed out"):
        await client.translate("let x = 5", "typescript", "java")
    assert http.post.await_count == 1


@pytest.mark.asyncio
async def test_translate_http_error_raises_model_unavailable(client: ModelTranslationClient, http: MagicMock) -> None:
    http.post.side_effect = AsyncCommError("Error response from the server.")

    with pytest.raises(ModelUnavailableError):
        await client.translate("let x = 5", "typescript", "java")


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [None, "plain text", {}, {"response": ""}, {"response": "x=1"}, {"response": 42}])
async def test_translate_rejects_empty_or_short_payload(
    client: ModelTranslationClient, http: MagicMock, payload: Any
) -> None:
    http.post.return_value = payload

    with pytest.raises(ModelUnavailableError):
        await client.translate("let x = 5", "typescript", "java")


@pytest.mark.asyncio
async def test_is_available(client: ModelTranslationClient, http: MagicMock) -> None:
    http.get.return_value = {"models": []}

    assert await client.is_available() is True
    assert http.get.await_args.kwargs == {"url": "http://localhost:11434/api/tags", "total_timeout": 5.0}


@pytest.mark.asyncio
async def test_is_available_false_on_error(client: ModelTranslationClient, http: MagicMock) -> None:
    http.get.side_effect = AsyncCommError("The server is not running, or the port is closed.")

    assert await client.is_available() is False


@pytest.mark.asyncio
async def test_list_models(client: ModelTranslationClient, http: MagicMock) -> None:
    http.get.return_value = {
        "models": [
            {"name": "codellama:7b", "size": 3825819519, "digest": "abc"},
            {"name": "llama3:8b"},
            {"size": 10},
        ]
    }

    models: list[ModelInfo] = await client.list_models()

    assert [info.name for info in models] == ["codellama:7b", "llama3:8b"]
    assert models[0].label == "codellama:7b (3.6GB)"
    assert models[1].label == "llama3:8b"


@pytest.mark.asyncio
@pytest.mark.parametrize("side_effect", [AsyncCommError("down"), None])
async def test_list_models_empty_on_failure(
    client: ModelTranslationClient, http: MagicMock, side_effect: Exception | None
) -> None:
    http.get.side_effect = side_effect
    http.get.return_value = {"unexpected": True}

    assert await client.list_models() == []


@pytest.mark.asyncio
async def test_close_closes_http(client: ModelTranslationClient, http: MagicMock) -> None:
    await client.close()

    http.close.assert_awaited_once()
