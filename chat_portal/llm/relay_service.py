"""Relay service for the Anthropic Messages API.

Core module for forwarding a browser conversation to the upstream model.

Architecture Decisions:

1. **Stateless relay** - The browser owns the conversation history and sends
   all of it with every turn. The service keeps no per-session state, so any
   worker can answer any request.

2. **Singleton pattern** - The configuration is read once and the service is
   reused across requests rather than rebuilt per request.

3. **One call, no retries** - Each relay request maps to exactly one upstream
   POST. Upstream failures surface to the caller with the upstream status.

4. **Multimodal mapping** - Images and PDFs become content blocks. Other
   attachment types are dropped so an unsupported upload never fails a turn.
"""

import logging
from collections.abc import Sequence
from typing import Any

import httpx

from chat_portal.llm.config import RelayConfig, get_relay_config
from chat_portal.models.schemas import Attachment, Message

logger = logging.getLogger(__name__)

MESSAGES_PATH = "/v1/messages"
PDF_MIME_TYPE = "application/pdf"


class UpstreamError(Exception):
    """Raised when the upstream API answers with a non-2xx status."""

    def __init__(self, status_code: int, reason: str, body: str = "") -> None:
        super().__init__(f"Upstream request failed: {status_code} {reason}")
        self.status_code = status_code
        self.reason = reason
        self.body = body


def _attachment_block(attachment: Attachment) -> dict[str, Any] | None:
    """Map an attachment onto an upstream content block.

    Returns:
        The content block, or None for MIME types the model cannot read.
    """
    if attachment.mime_type.startswith("image/"):
        block_type = "image"
    elif attachment.mime_type == PDF_MIME_TYPE:
        block_type = "document"
    else:
        return None

    return {
        "type": block_type,
        "source": {
            "type": "base64",
            "media_type": attachment.mime_type,
            "data": attachment.data,
        },
    }


def format_messages(messages: Sequence[Message]) -> list[dict[str, Any]]:
    """Reshape browser messages into upstream API messages.

    Order and roles are preserved. A message with attachments becomes a list
    of content blocks led by its text.

    Args:
        messages: Conversation history, oldest first.

    Returns:
        Messages ready for the ``messages`` field of the upstream request.
    """
    formatted: list[dict[str, Any]] = []
    for message in messages:
        if not message.files:
            formatted.append({"role": message.role, "content": message.content})
            continue

        content: list[dict[str, Any]] = [{"type": "text", "text": message.content}]
        for attachment in message.files:
            block = _attachment_block(attachment)
            if block is None:
                logger.debug(
                    f"Dropping attachment {attachment.name} ({attachment.mime_type})"
                )
                continue
            content.append(block)

        formatted.append({"role": message.role, "content": content})

    return formatted


class RelayService:
    """Service for relaying a conversation to the upstream model.

    Wraps a single Messages API call with:
    - Header and payload construction from RelayConfig
    - Attachment to content-block mapping
    - Upstream status propagation through UpstreamError
    """

    def __init__(
        self,
        config: RelayConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the relay service.

        Args:
            config: Optional relay configuration.
                    Loads from environment if not provided.
            transport: Optional httpx transport, used to stub the upstream.
        """
        self._config = config or get_relay_config()
        self._transport = transport

    @property
    def config(self) -> RelayConfig:
        return self._config

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": self._config.api_key,
            "anthropic-version": self._config.api_version,
        }

    def build_payload(
        self,
        messages: Sequence[Message],
        system: str | None = None,
        max_tokens: int | None = None,
    ) -> dict[str, Any]:
        """Build the JSON body for the upstream request."""
        payload: dict[str, Any] = {
            "model": self._config.model_name,
            "max_tokens": max_tokens or self._config.max_tokens,
            "messages": format_messages(messages),
        }
        if system:
            payload["system"] = system
        return payload

    async def complete(
        self,
        messages: Sequence[Message],
        system: str | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Send the conversation upstream and return the reply text.

        Args:
            messages: Conversation history, oldest first.
            system: Optional system instruction.
            max_tokens: Reply budget, defaults to the configured one.

        Returns:
            Concatenated text of the reply's text blocks.

        Raises:
            UpstreamError: If the upstream answers with a non-2xx status.
            httpx.HTTPError: If the upstream cannot be reached.
        """
        payload = self.build_payload(messages, system=system, max_tokens=max_tokens)

        async with httpx.AsyncClient(
            base_url=self._config.base_url,
            timeout=None,
            transport=self._transport,
        ) as client:
            response = await client.post(
                MESSAGES_PATH, json=payload, headers=self._headers()
            )

        if not response.is_success:
            logger.error(
                f"Anthropic API error: {response.status_code} {response.text}"
            )
            raise UpstreamError(
                response.status_code, response.reason_phrase, response.text
            )

        data = response.json()
        blocks = data.get("content") or []
        text = "".join(
            block.get("text", "") for block in blocks if block.get("type") == "text"
        )
        logger.info(
            f"Relayed {len(messages)} messages, reply of {len(text)} characters"
        )
        return text


# Module-level singleton instance
_relay_service: RelayService | None = None


def get_relay_service() -> RelayService:
    """Get or create the global relay service.

    Returns:
        The RelayService instance.

    Raises:
        ValidationError: If the API key is not configured.
    """
    global _relay_service
    if _relay_service is None:
        _relay_service = RelayService()
    return _relay_service
