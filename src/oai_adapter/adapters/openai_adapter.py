"""
OpenAI Adapter

Implements the handler interfaces for OpenAI-compatible chat completion
APIs, including Azure OpenAI deployments.
"""

from contextlib import aclosing
from typing import Any, Optional

import structlog
from anthropic.types import MessageParam
from openai.types.chat import ChatCompletionMessageParam

from oai_adapter.adapters.base import (
    ApiHandler,
    ApiStream,
    ApiStreamTextChunk,
    ApiStreamUsageChunk,
    CompletionError,
    ConfigurationError,
    SingleCompletionHandler,
)
from oai_adapter.adapters.transport import ChatTransport, create_transport
from oai_adapter.config.settings import Settings
from oai_adapter.models import OPENAI_MODEL_INFO_SANE_DEFAULTS, ModelDescriptor
from oai_adapter.transform.openai_format import convert_to_openai_messages

logger = structlog.get_logger(__name__)


class OpenAiHandler(ApiHandler, SingleCompletionHandler):
    """
    OpenAI-compatible API handler.

    Sends chat completions to the configured endpoint and republishes
    the responses as normalized stream events. The handler keeps no
    per-call state, so one instance can serve concurrent calls.
    """

    provider_name = "openai"

    def __init__(self, options: Settings, transport: Optional[ChatTransport] = None):
        """
        Initialize the handler.

        Args:
            options: Handler settings. base_url and model_id are required.
            transport: Prebuilt transport; when omitted one is created from
                options, choosing Azure mode for *.azure.com hosts.

        Raises:
            ConfigurationError: If required settings are missing or invalid.
        """
        errors = options.validate_handler_config()
        if errors:
            raise ConfigurationError(
                message="Missing configuration: " + "; ".join(errors),
                provider=self.provider_name,
            )

        self._options = options
        self._transport = transport or create_transport(options)

    @property
    def transport(self) -> ChatTransport:
        return self._transport

    async def create_message(
        self, system_prompt: str, messages: list[MessageParam]
    ) -> ApiStream:
        """Stream a chat completion as text and usage events."""
        openai_messages: list[ChatCompletionMessageParam] = [
            {"role": "system", "content": system_prompt},
            *convert_to_openai_messages(messages),
        ]
        request: dict[str, Any] = {
            "model": self._options.model_id,
            "messages": openai_messages,
            "temperature": 0,
            "stream": True,
        }

        # Some compatible backends reject stream_options
        if self._options.usage_reporting_enabled:
            request["stream_options"] = {"include_usage": True}

        logger.debug(
            "Starting chat stream",
            model=self._options.model_id,
            mode=self._transport.mode,
            message_count=len(openai_messages),
        )

        async with aclosing(self._transport.stream_completion(request)) as chunks:
            async for chunk in chunks:
                delta = chunk.choices[0].delta if chunk.choices else None
                if delta is not None and delta.content:
                    yield ApiStreamTextChunk(text=delta.content)
                if chunk.usage:
                    yield ApiStreamUsageChunk(
                        input_tokens=chunk.usage.prompt_tokens or 0,
                        output_tokens=chunk.usage.completion_tokens or 0,
                    )

    def get_model(self) -> ModelDescriptor:
        return ModelDescriptor(
            id=self._options.model_id or "",
            info=OPENAI_MODEL_INFO_SANE_DEFAULTS,
        )

    async def complete_prompt(self, prompt: str) -> str:
        """Run a single non-streaming completion and return its text."""
        request: dict[str, Any] = {
            "model": self._options.model_id,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": 0,
            "stream": False,
        }

        try:
            response = await self._transport.complete_once(request)
        except Exception as e:
            logger.error(
                "OpenAI completion failed",
                model=self._options.model_id,
                error=str(e),
            )
            if str(e):
                message = f"OpenAI completion error: {e}"
            else:
                message = "An unknown error occurred during OpenAI completion"
            raise CompletionError(
                message=message,
                provider=self.provider_name,
                original_error=e,
            ) from e

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    async def close(self) -> None:
        """Release the transport's HTTP connections."""
        await self._transport.close()
