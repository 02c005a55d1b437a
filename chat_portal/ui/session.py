"""Chat session state for the browser UI.

The state is an immutable value. Every UI event handler receives the current
state and returns the next one, so one page owns exactly one writer.

Lifecycle: idle -> sending -> idle, or sending -> error -> (next send).
"""

import asyncio
import base64
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Literal, Protocol

from chat_portal.models.schemas import (
    Artifact,
    Attachment,
    ChatRequest,
    ChatResponse,
    GeneratedFile,
    Message,
)

logger = logging.getLogger(__name__)

ERROR_MESSAGE = "Sorry, there was an error processing your request. Please try again."


class SessionStatus(str, Enum):
    """Status values for a chat session."""

    IDLE = "idle"
    SENDING = "sending"
    ERROR = "error"


class SessionBusyError(Exception):
    """Raised when a send is attempted while another is in flight."""

    pass


def _now() -> str:
    return datetime.now().strftime("%I:%M %p")


@dataclass(frozen=True)
class ChatTurn:
    """One rendered turn of the conversation."""

    role: Literal["user", "assistant"]
    content: str
    attachments: tuple[Attachment, ...] = ()
    generated_files: tuple[GeneratedFile, ...] = ()
    artifacts: tuple[Artifact, ...] = ()
    time: str = field(default_factory=_now)

    def to_message(self) -> Message:
        """Wire form of the turn. Only user attachments go back to the relay."""
        return Message(
            role=self.role,
            content=self.content,
            files=list(self.attachments) or None,
        )


@dataclass(frozen=True)
class ChatState:
    """Everything the chat page needs to render and send.

    Attributes:
        history: Turns in order, oldest first. Append-only.
        pending_attachments: Files waiting to go out with the next message.
        status: Where the session is in its send lifecycle.
    """

    history: tuple[ChatTurn, ...] = ()
    pending_attachments: tuple[Attachment, ...] = ()
    status: SessionStatus = SessionStatus.IDLE

    @property
    def is_sending(self) -> bool:
        return self.status is SessionStatus.SENDING


def add_attachments(state: ChatState, attachments: Iterable[Attachment]) -> ChatState:
    return replace(
        state, pending_attachments=state.pending_attachments + tuple(attachments)
    )


def remove_attachment(state: ChatState, index: int) -> ChatState:
    pending = state.pending_attachments
    if not 0 <= index < len(pending):
        return state
    return replace(state, pending_attachments=pending[:index] + pending[index + 1 :])


def begin_send(state: ChatState, text: str) -> tuple[ChatState, ChatRequest | None]:
    """Start a send for the typed text and pending attachments.

    Args:
        state: Current session state.
        text: Raw input field value.

    Returns:
        The next state and the request to post. The request is None, and the
        state unchanged, when there is nothing to send.

    Raises:
        SessionBusyError: If a send is already in flight.
    """
    if state.is_sending:
        raise SessionBusyError("A message is already being sent")

    if not text.strip() and not state.pending_attachments:
        return state, None

    turn = ChatTurn(role="user", content=text, attachments=state.pending_attachments)
    history = state.history + (turn,)
    request = ChatRequest(messages=[t.to_message() for t in history])

    next_state = ChatState(
        history=history,
        pending_attachments=(),
        status=SessionStatus.SENDING,
    )
    return next_state, request


def complete_send(state: ChatState, reply: ChatResponse) -> ChatState:
    """Append the relay's reply as the assistant turn."""
    turn = ChatTurn(
        role="assistant",
        content=reply.content,
        generated_files=tuple(reply.files or ()),
        artifacts=tuple(reply.artifacts or ()),
    )
    return replace(state, history=state.history + (turn,), status=SessionStatus.IDLE)


def fail_send(state: ChatState) -> ChatState:
    """Append the fixed apology in place of a reply."""
    turn = ChatTurn(role="assistant", content=ERROR_MESSAGE)
    return replace(state, history=state.history + (turn,), status=SessionStatus.ERROR)


def clear_chat(state: ChatState) -> ChatState:
    """Discard history and pending attachments.

    The send status is kept so an in-flight request still blocks new sends.
    """
    return ChatState(status=state.status)


class UploadedFile(Protocol):
    """A browser upload as handed over by the UI toolkit."""

    name: str
    content_type: str

    async def read(self) -> bytes: ...


async def encode_attachment(upload: UploadedFile) -> Attachment:
    """Read one upload and encode it as an Attachment."""
    content = await upload.read()
    return Attachment(
        name=upload.name,
        mime_type=upload.content_type or "application/octet-stream",
        data=base64.b64encode(content).decode("ascii"),
        size=len(content),
    )


async def encode_attachments(uploads: Iterable[UploadedFile]) -> list[Attachment]:
    """Read all uploads concurrently and encode them.

    Returns only once every read has finished. If any read fails, the error
    propagates and no attachment from the batch is returned.
    """
    attachments = await asyncio.gather(*(encode_attachment(u) for u in uploads))
    logger.info(f"Encoded {len(attachments)} attachments")
    return list(attachments)
