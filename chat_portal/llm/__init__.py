"""Upstream LLM access for the chat relay.

Responsibilities:
    - Configuration of the Anthropic Messages API call
    - Reshaping browser messages and attachments into content blocks
    - The single upstream request per relay call
    - System instructions for the file-tag and document protocols
"""

from chat_portal.llm.config import RelayConfig, get_relay_config
from chat_portal.llm.relay_service import (
    RelayService,
    UpstreamError,
    format_messages,
    get_relay_service,
)

__all__ = [
    "RelayConfig",
    "RelayService",
    "UpstreamError",
    "format_messages",
    "get_relay_config",
    "get_relay_service",
]
