"""Pydantic models for API requests and responses.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - Attachment: User-selected file encoded as base64
    - GeneratedFile: Downloadable file produced from a model reply
    - Artifact: Titled code or text block extracted from a reply
    - Message: Individual turn in the conversation
    - ChatRequest: Incoming relay request payload
    - ChatResponse: Outgoing relay reply
"""

from chat_portal.models.schemas import (
    Artifact,
    Attachment,
    ChatRequest,
    ChatResponse,
    FilePayload,
    GeneratedFile,
    Message,
)

__all__ = [
    "Artifact",
    "Attachment",
    "ChatRequest",
    "ChatResponse",
    "FilePayload",
    "GeneratedFile",
    "Message",
]
