"""
Chat Transports

Wraps the vendor SDK clients behind a single ChatTransport interface.
The Azure flavour of the API differs from the standard one only in how
the client is constructed, so the choice is made once, by host, in
create_transport().
"""

from abc import ABC, abstractmethod
from typing import Any, AsyncIterator, Literal, Optional

import httpx
import structlog
from openai import AsyncAzureOpenAI, AsyncOpenAI, OpenAIError
from openai.types.chat import ChatCompletion, ChatCompletionChunk

from oai_adapter.adapters.base import ConfigurationError
from oai_adapter.config.settings import Settings
from oai_adapter.models import AZURE_OPENAI_DEFAULT_API_VERSION

logger = structlog.get_logger(__name__)

TransportMode = Literal["openai", "azure"]


def is_azure_host(host: str) -> bool:
    """Return True for azure.com and any of its subdomains."""
    host = host.lower()
    return host == "azure.com" or host.endswith(".azure.com")


def parse_base_url(base_url: str) -> httpx.URL:
    """
    Parse and check a provider base URL.

    Raises:
        ConfigurationError: If the URL cannot be parsed or is not an
            absolute http(s) URL.
    """
    try:
        url = httpx.URL(base_url)
    except (httpx.InvalidURL, TypeError) as e:
        raise ConfigurationError(
            message=f"Invalid base URL {base_url!r}: {e}",
            provider="openai",
            original_error=e,
        ) from e

    if url.scheme not in ("http", "https") or not url.host:
        raise ConfigurationError(
            message=f"Invalid base URL {base_url!r}: expected an absolute http(s) URL",
            provider="openai",
        )
    return url


class ChatTransport(ABC):
    """Capability interface over an OpenAI-style chat completions client."""

    def __init__(self, client: AsyncOpenAI):
        self._client = client

    @property
    @abstractmethod
    def mode(self) -> TransportMode:
        """Which client flavour this transport wraps."""
        ...

    async def stream_completion(
        self, request: dict[str, Any]
    ) -> AsyncIterator[ChatCompletionChunk]:
        """
        Issue a streaming chat completion and yield raw chunks.

        The vendor stream is closed when iteration finishes, fails, or the
        generator is closed early by its consumer.
        """
        stream = await self._client.chat.completions.create(**request)
        try:
            async for chunk in stream:
                yield chunk
        finally:
            await stream.close()

    async def complete_once(self, request: dict[str, Any]) -> ChatCompletion:
        """Issue a non-streaming chat completion."""
        return await self._client.chat.completions.create(**request)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.close()


class OpenAITransport(ChatTransport):
    """Transport for the standard API and OpenAI-compatible servers."""

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        kwargs: dict[str, Any] = {"base_url": base_url, "api_key": api_key}
        if timeout is not None:
            kwargs["timeout"] = httpx.Timeout(timeout)
        super().__init__(AsyncOpenAI(**kwargs))

    @property
    def mode(self) -> TransportMode:
        return "openai"


class AzureOpenAITransport(ChatTransport):
    """Transport for Azure OpenAI deployments."""

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        api_version: str = AZURE_OPENAI_DEFAULT_API_VERSION,
        timeout: Optional[float] = None,
    ):
        kwargs: dict[str, Any] = {
            "base_url": base_url,
            "api_key": api_key,
            "api_version": api_version,
        }
        if timeout is not None:
            kwargs["timeout"] = httpx.Timeout(timeout)
        super().__init__(AsyncAzureOpenAI(**kwargs))
        self.api_version = api_version

    @property
    def mode(self) -> TransportMode:
        return "azure"


def create_transport(options: Settings) -> ChatTransport:
    """
    Build the transport matching the configured base URL.

    Args:
        options: Handler settings; base_url must be set.

    Returns:
        AzureOpenAITransport for azure.com hosts, OpenAITransport otherwise.

    Raises:
        ConfigurationError: If the base URL is malformed or the SDK client
            rejects the configuration.
    """
    url = parse_base_url(options.base_url or "")

    try:
        if is_azure_host(url.host):
            transport: ChatTransport = AzureOpenAITransport(
                base_url=options.base_url,
                api_key=options.api_key,
                api_version=options.azure_api_version or AZURE_OPENAI_DEFAULT_API_VERSION,
                timeout=options.request_timeout,
            )
        else:
            transport = OpenAITransport(
                base_url=options.base_url,
                api_key=options.api_key,
                timeout=options.request_timeout,
            )
    except OpenAIError as e:
        raise ConfigurationError(
            message=f"Failed to create OpenAI client: {e}",
            provider="openai",
            original_error=e,
        ) from e

    logger.debug("Transport created", mode=transport.mode, host=url.host)
    return transport
