"""Unit tests for chat session state and attachment encoding."""

import base64
from dataclasses import dataclass

import pytest
import pytest_check as check

from chat_portal.models.schemas import Artifact, Attachment, ChatResponse, GeneratedFile
from chat_portal.ui.session import (
    ERROR_MESSAGE,
    ChatState,
    SessionBusyError,
    SessionStatus,
    add_attachments,
    begin_send,
    clear_chat,
    complete_send,
    encode_attachments,
    fail_send,
    remove_attachment,
)

PHOTO = Attachment(name="photo.jpg", mime_type="image/jpeg", data="/9j/", size=3)
NOTES = Attachment(name="notes.pdf", mime_type="application/pdf", data="JVBE", size=3)


@dataclass
class FakeUpload:
    """Minimal stand-in for a toolkit upload."""

    name: str
    content_type: str
    content: bytes = b""
    fail: bool = False

    async def read(self) -> bytes:
        if self.fail:
            raise OSError("read interrupted")
        return self.content


class TestBeginSend:
    """Tests for starting a send."""

    def test_empty_input_without_attachments_is_noop(self) -> None:
        state = ChatState()

        next_state, request = begin_send(state, "   ")

        assert request is None
        assert next_state is state

    def test_text_message_starts_send(self) -> None:
        state, request = begin_send(ChatState(), "Hello")

        check.equal(state.status, SessionStatus.SENDING)
        check.equal(len(state.history), 1)
        check.equal(state.history[0].role, "user")
        check.equal(state.history[0].content, "Hello")
        check.equal(len(request.messages), 1)
        check.equal(request.messages[0].content, "Hello")
        check.is_none(request.messages[0].files)

    def test_attachments_only_message_is_sent(self) -> None:
        state = add_attachments(ChatState(), [PHOTO])

        state, request = begin_send(state, "")

        check.is_not_none(request)
        check.equal(request.messages[0].files, [PHOTO])
        check.equal(state.history[0].attachments, (PHOTO,))

    def test_pending_attachments_are_cleared(self) -> None:
        state = add_attachments(ChatState(), [PHOTO, NOTES])

        state, _ = begin_send(state, "See attached")

        assert state.pending_attachments == ()

    def test_rejected_while_sending(self) -> None:
        state, _ = begin_send(ChatState(), "First")

        with pytest.raises(SessionBusyError):
            begin_send(state, "Second")

    def test_request_carries_full_history(self) -> None:
        state, _ = begin_send(ChatState(), "First")
        state = complete_send(state, ChatResponse(content="Reply one"))

        state, request = begin_send(state, "Second")

        assert [(m.role, m.content) for m in request.messages] == [
            ("user", "First"),
            ("assistant", "Reply one"),
            ("user", "Second"),
        ]

    def test_assistant_generated_files_stay_client_side(self) -> None:
        generated = GeneratedFile(name="a.txt", mime_type="text/plain", data="aGk=")
        state, _ = begin_send(ChatState(), "Make a file")
        state = complete_send(state, ChatResponse(content="Done", files=[generated]))

        _, request = begin_send(state, "Thanks")

        assert request.messages[1].files is None


class TestCompleteAndFail:
    """Tests for finishing a send."""

    def test_complete_appends_reply_verbatim(self) -> None:
        generated = GeneratedFile(name="a.txt", mime_type="text/plain", data="aGk=")
        artifact = Artifact(title="Snippet", language="python", content="pass")
        state, _ = begin_send(ChatState(), "Go")

        state = complete_send(
            state, ChatResponse(content="Here", files=[generated], artifacts=[artifact])
        )

        turn = state.history[-1]
        check.equal(state.status, SessionStatus.IDLE)
        check.equal(turn.role, "assistant")
        check.equal(turn.content, "Here")
        check.equal(turn.generated_files, (generated,))
        check.equal(turn.artifacts, (artifact,))

    def test_fail_appends_apology(self) -> None:
        state = add_attachments(ChatState(), [PHOTO])
        state, _ = begin_send(state, "Go")

        state = fail_send(state)

        check.equal(state.status, SessionStatus.ERROR)
        check.equal(state.history[-1].role, "assistant")
        check.equal(state.history[-1].content, ERROR_MESSAGE)
        check.equal(state.pending_attachments, ())

    def test_send_allowed_after_error(self) -> None:
        state, _ = begin_send(ChatState(), "Go")
        state = fail_send(state)

        state, request = begin_send(state, "Retry")

        assert request is not None
        assert state.status is SessionStatus.SENDING


class TestAttachmentsAndClear:
    """Tests for pending attachments and clearing."""

    def test_remove_attachment_by_index(self) -> None:
        state = add_attachments(ChatState(), [PHOTO, NOTES])

        state = remove_attachment(state, 0)

        assert state.pending_attachments == (NOTES,)

    def test_remove_out_of_range_is_ignored(self) -> None:
        state = add_attachments(ChatState(), [PHOTO])

        assert remove_attachment(state, 5) is state

    def test_clear_discards_history_and_pending(self) -> None:
        state, _ = begin_send(ChatState(), "Hi")
        state = complete_send(state, ChatResponse(content="Hello"))
        state = add_attachments(state, [PHOTO])

        state = clear_chat(state)

        check.equal(state.history, ())
        check.equal(state.pending_attachments, ())
        check.equal(state.status, SessionStatus.IDLE)

    def test_clear_keeps_in_flight_status(self) -> None:
        state, _ = begin_send(ChatState(), "Hi")

        state = clear_chat(state)

        assert state.history == ()
        assert state.is_sending


class TestEncodeAttachments:
    """Tests for reading uploads into attachments."""

    async def test_encodes_all_uploads_in_order(self) -> None:
        uploads = [
            FakeUpload("a.txt", "text/plain", b"hello"),
            FakeUpload("b.png", "image/png", b"\x89PNG"),
        ]

        attachments = await encode_attachments(uploads)

        check.equal([a.name for a in attachments], ["a.txt", "b.png"])
        check.equal(attachments[0].data, base64.b64encode(b"hello").decode())
        check.equal(attachments[0].size, 5)
        check.equal(attachments[1].mime_type, "image/png")

    async def test_missing_content_type_falls_back(self) -> None:
        attachments = await encode_attachments([FakeUpload("blob", "", b"x")])

        assert attachments[0].mime_type == "application/octet-stream"

    async def test_one_failed_read_fails_the_batch(self) -> None:
        uploads = [
            FakeUpload("ok.txt", "text/plain", b"fine"),
            FakeUpload("bad.txt", "text/plain", fail=True),
        ]

        with pytest.raises(OSError):
            await encode_attachments(uploads)
