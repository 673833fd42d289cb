"""
oai-adapter: OpenAI-compatible provider adapter

Sends chat completion requests to OpenAI-compatible APIs, including
Azure OpenAI, and returns streamed or single-shot responses.
"""

__version__ = "0.1.0"

from oai_adapter.adapters import OpenAiHandler
from oai_adapter.config.settings import Settings

__all__ = ["OpenAiHandler", "Settings", "__version__"]
