"""
Base Adapter Interface

Defines the stream event types produced by provider handlers, the
abstract handler interfaces, and the adapter error hierarchy.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Literal, Optional, Union

from anthropic.types import MessageParam

from oai_adapter.models import ModelDescriptor


@dataclass(frozen=True)
class ApiStreamTextChunk:
    """A fragment of generated text."""
    text: str
    type: Literal["text"] = field(default="text", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "text": self.text}


@dataclass(frozen=True)
class ApiStreamUsageChunk:
    """Token accounting reported by the provider."""
    input_tokens: int
    output_tokens: int
    type: Literal["usage"] = field(default="usage", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "inputTokens": self.input_tokens,
            "outputTokens": self.output_tokens,
        }


ApiStreamChunk = Union[ApiStreamTextChunk, ApiStreamUsageChunk]
ApiStream = AsyncIterator[ApiStreamChunk]


class ApiHandler(ABC):
    """
    Abstract base class for provider handlers.

    A handler turns a system prompt plus a conversation into a lazy
    sequence of normalized stream events.
    """

    @abstractmethod
    def create_message(
        self, system_prompt: str, messages: list[MessageParam]
    ) -> ApiStream:
        """
        Stream a chat completion.

        Args:
            system_prompt: Text sent as the leading system message.
            messages: Conversation history in the generic message format.

        Yields:
            ApiStreamTextChunk and ApiStreamUsageChunk events, in the order
            the provider delivers them.
        """
        ...

    @abstractmethod
    def get_model(self) -> ModelDescriptor:
        """Return the configured model and its metadata."""
        ...


class SingleCompletionHandler(ABC):
    """Handlers that can answer a one-off prompt without streaming."""

    @abstractmethod
    async def complete_prompt(self, prompt: str) -> str:
        """
        Run a single non-streaming completion.

        Returns:
            The text of the first choice, or an empty string.

        Raises:
            CompletionError: If the provider call fails.
        """
        ...


class AdapterError(Exception):
    """Base exception for adapter errors."""

    def __init__(
        self,
        message: str,
        provider: str,
        original_error: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.provider = provider
        self.original_error = original_error


class ConfigurationError(AdapterError):
    """Raised when a handler cannot be built from its configuration."""


class CompletionError(AdapterError):
    """Raised when a single completion call fails."""
