"""
oai-adapter Test Configuration and Fixtures
"""

import os
from typing import Any, Iterable, Optional
from unittest.mock import AsyncMock

import pytest
from openai.types.chat import ChatCompletion, ChatCompletionChunk

from oai_adapter.adapters.transport import ChatTransport


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep host OAI_* settings out of the tests."""
    for key in list(os.environ):
        if key.startswith("OAI_") or key.startswith("AZURE_OPENAI_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("OPENAI_API_KEY", "test-key")


@pytest.fixture
def handler_settings():
    """Settings for a standard OpenAI-compatible endpoint."""
    from oai_adapter.config.settings import Settings

    return Settings(
        base_url="https://api.openai.com/v1",
        api_key="test-key",
        model_id="gpt-4o",
    )


@pytest.fixture
def azure_settings():
    """Settings for an Azure OpenAI deployment."""
    from oai_adapter.config.settings import Settings

    return Settings(
        base_url="https://my-resource.openai.azure.com/openai/deployments/gpt-4o",
        api_key="test-key",
        model_id="gpt-4o",
    )


def make_chunk(
    content: Optional[str] = None,
    usage: Optional[dict[str, int]] = None,
    with_choice: bool = True,
) -> ChatCompletionChunk:
    """Build a streaming chunk as the SDK would deliver it."""
    data: dict[str, Any] = {
        "id": "chatcmpl-test",
        "object": "chat.completion.chunk",
        "created": 0,
        "model": "gpt-4o",
        "choices": [],
    }
    if with_choice:
        data["choices"].append({
            "index": 0,
            "delta": {"content": content},
            "finish_reason": None,
        })
    if usage is not None:
        data["usage"] = {
            "prompt_tokens": usage.get("prompt_tokens", 0),
            "completion_tokens": usage.get("completion_tokens", 0),
            "total_tokens": usage.get("prompt_tokens", 0) + usage.get("completion_tokens", 0),
        }
    return ChatCompletionChunk.model_validate(data)


def make_completion(content: Optional[str] = "Hello", with_choice: bool = True) -> ChatCompletion:
    """Build a non-streaming completion response."""
    choices = []
    if with_choice:
        choices.append({
            "index": 0,
            "finish_reason": "stop",
            "message": {"role": "assistant", "content": content},
        })
    return ChatCompletion.model_validate({
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 0,
        "model": "gpt-4o",
        "choices": choices,
    })


class FakeStream:
    """Stands in for the SDK's AsyncStream."""

    def __init__(self, chunks: Iterable[Any]):
        self._chunks = list(chunks)
        self.close = AsyncMock()

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for chunk in self._chunks:
            if isinstance(chunk, BaseException):
                raise chunk
            yield chunk


class FakeTransport(ChatTransport):
    """In-memory transport recording the requests it receives."""

    def __init__(
        self,
        chunks: Iterable[Any] = (),
        response: Optional[ChatCompletion] = None,
        error: Optional[BaseException] = None,
    ):
        self.chunks = list(chunks)
        self.response = response
        self.error = error
        self.requests: list[dict[str, Any]] = []
        self.stream_closed = False
        self.closed = False

    @property
    def mode(self):
        return "openai"

    async def stream_completion(self, request):
        self.requests.append(request)
        try:
            for chunk in self.chunks:
                if isinstance(chunk, BaseException):
                    raise chunk
                yield chunk
        finally:
            self.stream_closed = True

    async def complete_once(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response

    async def close(self):
        self.closed = True


@pytest.fixture
def make_handler(handler_settings):
    """Factory for handlers backed by a FakeTransport."""
    from oai_adapter.adapters.openai_adapter import OpenAiHandler

    def _make(settings=None, **transport_kwargs):
        transport = FakeTransport(**transport_kwargs)
        handler = OpenAiHandler(settings or handler_settings, transport=transport)
        return handler, transport

    return _make
