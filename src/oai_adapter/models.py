"""
Model Metadata

Static model information for OpenAI-compatible endpoints. Compatible
backends do not expose pricing or limits in a uniform way, so every
configured model is described by the same sane defaults.
"""

from dataclasses import dataclass
from typing import Any, Optional

# API version used for *.azure.com hosts when none is configured
AZURE_OPENAI_DEFAULT_API_VERSION = "2024-08-01-preview"


@dataclass(frozen=True)
class ModelInfo:
    """Capabilities and pricing for a model."""
    context_window: int
    supports_prompt_cache: bool
    max_tokens: Optional[int] = None
    supports_images: bool = False
    input_price: Optional[float] = None
    output_price: Optional[float] = None
    cache_writes_price: Optional[float] = None
    cache_reads_price: Optional[float] = None
    description: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dict, dropping unset fields."""
        result: dict[str, Any] = {
            "maxTokens": self.max_tokens,
            "contextWindow": self.context_window,
            "supportsImages": self.supports_images,
            "supportsPromptCache": self.supports_prompt_cache,
            "inputPrice": self.input_price,
            "outputPrice": self.output_price,
            "cacheWritesPrice": self.cache_writes_price,
            "cacheReadsPrice": self.cache_reads_price,
            "description": self.description,
        }
        return {k: v for k, v in result.items() if v is not None}


@dataclass(frozen=True)
class ModelDescriptor:
    """A model identifier paired with its metadata."""
    id: str
    info: ModelInfo


OPENAI_MODEL_INFO_SANE_DEFAULTS = ModelInfo(
    max_tokens=-1,
    context_window=128_000,
    supports_images=True,
    supports_prompt_cache=False,
    input_price=0,
    output_price=0,
)
