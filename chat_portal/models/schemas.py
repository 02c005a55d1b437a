from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class FilePayload(BaseModel):
    """Base64-encoded file travelling between browser, relay and model.

    The wire name of the MIME type is ``type``; Python code uses ``mime_type``.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str
    mime_type: str = Field(..., alias="type")
    data: str


class Attachment(FilePayload):
    """A user-selected file attached to a chat message.

    Attributes:
        name: Original filename.
        mime_type: MIME type reported by the browser.
        data: Base64-encoded file bytes.
        size: Size of the decoded file in bytes.
    """

    size: int = Field(0, ge=0)


class GeneratedFile(FilePayload):
    """A downloadable file produced by the relay from a model reply."""

    generated: bool = True


class Artifact(BaseModel):
    """A titled block of code or text lifted out of a model reply."""

    title: str
    language: str = "text"
    content: str


class Message(BaseModel):
    """A single conversation turn as sent by the browser.

    Attributes:
        role: Speaker, either ``user`` or ``assistant``.
        content: Message text. May be empty when only files are attached.
        files: Attachments carried by this turn.
        artifacts: Artifacts shown with this turn (ignored by the relay).
    """

    role: Literal["user", "assistant"]
    content: str = ""
    files: list[Attachment] | None = None
    artifacts: list[Artifact] | None = None


class ChatRequest(BaseModel):
    """Request payload for the chat relay endpoints."""

    messages: list[Message]


class ChatResponse(BaseModel):
    """Relay reply shown as the assistant turn.

    ``files`` and ``artifacts`` stay ``None`` when nothing was extracted so
    they are left out of the JSON body.
    """

    content: str
    files: list[GeneratedFile] | None = None
    artifacts: list[Artifact] | None = None
