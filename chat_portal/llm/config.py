"""Relay configuration with environment variable loading.

Pydantic-based configuration for the upstream Anthropic Messages API.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_BASE_URL = "https://api.anthropic.com"
DEFAULT_API_VERSION = "2023-06-01"
DEFAULT_MODEL = "claude-sonnet-4-5-20250929"


class RelayConfig(BaseModel):
    """Configuration for the upstream LLM call.

    Attributes:
        api_key: Credential sent as ``x-api-key``.
        base_url: API base URL, overridable for proxies and tests.
        api_version: Value of the ``anthropic-version`` header.
        model_name: Model identifier to use.
        max_tokens: Reply budget for the tagged-file chat endpoint.
        document_max_tokens: Reply budget for the document endpoint.
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("ANTHROPIC_API_KEY", ""),
        description="API key for the Anthropic Messages API",
    )
    base_url: str = Field(
        default_factory=lambda: os.getenv("ANTHROPIC_BASE_URL") or DEFAULT_BASE_URL,
        description="API base URL",
    )
    api_version: str = Field(
        default_factory=lambda: os.getenv("ANTHROPIC_VERSION") or DEFAULT_API_VERSION,
        description="anthropic-version header value",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("LLM_MODEL") or DEFAULT_MODEL,
        description="Model to use",
    )
    max_tokens: int = Field(
        default=1024,
        ge=1,
        le=128000,
        description="Maximum tokens in a chat reply",
    )
    document_max_tokens: int = Field(
        default=4096,
        ge=1,
        le=128000,
        description="Maximum tokens in a document-generation reply",
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError("ANTHROPIC_API_KEY is required. Set it in .env")
        return v.strip()

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


def get_relay_config() -> RelayConfig:
    """Create relay configuration from environment.

    Returns:
        Configured RelayConfig instance.

    Raises:
        ValidationError: If no API key is set.
    """
    return RelayConfig()
