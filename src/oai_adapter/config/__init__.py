"""Configuration module."""

from oai_adapter.config.settings import Settings

__all__ = ["Settings"]
