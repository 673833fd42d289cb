"""
Adapter Configuration Settings

Centralized configuration management using Pydantic Settings.
Supports environment variables and .env files.
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Provider adapter configuration.

    All settings can be configured via environment variables with the OAI_ prefix.
    Example: OAI_BASE_URL=https://api.openai.com/v1, OAI_MODEL_ID=gpt-4o

    The API key is read from OPENAI_API_KEY. Instances are frozen: once a
    handler is built from a Settings object its target cannot change.
    """

    model_config = SettingsConfigDict(
        env_prefix="OAI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
        frozen=True,
    )

    # Provider endpoint
    base_url: Optional[str] = Field(
        default=None,
        description="Base URL of the OpenAI-compatible API"
    )
    api_key: Optional[str] = Field(
        default=None,
        description="API key sent as bearer credential",
        alias="OPENAI_API_KEY"
    )
    model_id: Optional[str] = Field(
        default=None,
        description="Model (or Azure deployment) to route requests to"
    )
    azure_api_version: Optional[str] = Field(
        default=None,
        description="Azure OpenAI API version, only used for *.azure.com hosts"
    )
    include_stream_options: Optional[bool] = Field(
        default=None,
        description="Ask for token usage in streamed responses (unset means yes)"
    )

    # Transport
    request_timeout: Optional[float] = Field(
        default=None,
        description="Request timeout in seconds (SDK default when unset)"
    )

    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return upper

    @field_validator("request_timeout")
    @classmethod
    def validate_request_timeout(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v <= 0:
            raise ValueError("request_timeout must be positive")
        return v

    @property
    def usage_reporting_enabled(self) -> bool:
        """Whether streamed requests should ask for usage accounting."""
        if self.include_stream_options is None:
            return True
        return self.include_stream_options

    def validate_handler_config(self) -> list[str]:
        """Validate that the fields needed to reach a provider are present."""
        errors = []

        if not self.base_url:
            errors.append("OAI_BASE_URL is required for the OpenAI-compatible provider")
        if not self.model_id:
            errors.append("OAI_MODEL_ID is required for the OpenAI-compatible provider")

        # The API key may come from the SDK's own environment lookup

        return errors
