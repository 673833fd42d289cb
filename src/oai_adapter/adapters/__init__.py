"""
Provider Adapters

Streams chat completions from OpenAI-compatible APIs (standard or
Azure-hosted) as normalized text and usage events.
"""

from oai_adapter.adapters.base import (
    AdapterError,
    ApiHandler,
    ApiStream,
    ApiStreamChunk,
    ApiStreamTextChunk,
    ApiStreamUsageChunk,
    CompletionError,
    ConfigurationError,
    SingleCompletionHandler,
)
from oai_adapter.adapters.openai_adapter import OpenAiHandler
from oai_adapter.adapters.transport import (
    AzureOpenAITransport,
    ChatTransport,
    OpenAITransport,
    create_transport,
    is_azure_host,
)

__all__ = [
    "AdapterError",
    "ApiHandler",
    "ApiStream",
    "ApiStreamChunk",
    "ApiStreamTextChunk",
    "ApiStreamUsageChunk",
    "CompletionError",
    "ConfigurationError",
    "SingleCompletionHandler",
    "OpenAiHandler",
    "ChatTransport",
    "OpenAITransport",
    "AzureOpenAITransport",
    "create_transport",
    "is_azure_host",
]
