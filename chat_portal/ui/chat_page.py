"""NiceGUI chat interface with attachments, downloads and artifacts."""

import base64
import logging
import os

from nicegui import events, ui

from chat_portal.models.schemas import Artifact, Attachment, GeneratedFile
from chat_portal.ui.client import (
    CHAT_ENDPOINT,
    DOCUMENT_ENDPOINT,
    RelayClientError,
    send_chat,
)
from chat_portal.ui.session import (
    ChatState,
    ChatTurn,
    SessionBusyError,
    add_attachments,
    begin_send,
    clear_chat,
    complete_send,
    encode_attachments,
    fail_send,
    remove_attachment,
)

logger = logging.getLogger(__name__)

CUSTOM_CSS = """
<style>
    :root {
        --portal-accent: #4f46e5;
        --portal-accent-gradient: linear-gradient(135deg, #4f46e5 0%, #7c3aed 100%);
    }

    body { background: #eef0f4; }

    .portal-shell {
        background: white;
        border-radius: 10px;
        box-shadow: 0 1px 6px rgba(15, 23, 42, 0.12);
        overflow: hidden;
    }

    .portal-header, .bubble-user, .avatar-user, .send-btn {
        background: var(--portal-accent-gradient) !important;
    }

    .bubble-user { color: white; border-radius: 16px 16px 4px 16px; }
    .bubble-assistant { background: #f1f5f9; color: #0f172a; border-radius: 16px 16px 16px 4px; }
    .avatar-assistant { background: #64748b; }

    .bubble-assistant pre { max-height: 24rem; overflow: auto; }

    .typing-dot {
        width: 7px; height: 7px;
        border-radius: 50%;
        background: var(--portal-accent);
        animation: typing 1.2s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.15s; }
    .typing-dot:nth-child(3) { animation-delay: 0.3s; }

    @keyframes typing {
        0%, 80%, 100% { opacity: 0.3; }
        40% { opacity: 1; }
    }

    .composer { border: 1px solid #e2e8f0; border-radius: 10px; background: #f8fafc; }
    .composer:focus-within { border-color: var(--portal-accent); }
</style>
"""


def format_size(size: int) -> str:
    return f"{size / 1024:.1f}KB"


def download_file(file: GeneratedFile) -> None:
    ui.download.content(base64.b64decode(file.data), file.name, file.mime_type)


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    state = ChatState()

    messages_container: ui.column
    pending_container: ui.row
    input_field: ui.textarea
    send_btn: ui.button
    upload_btn: ui.button
    document_mode: ui.switch

    def render_avatar(is_user: bool) -> None:
        css = "avatar-user" if is_user else "avatar-assistant"
        icon = "person" if is_user else "smart_toy"
        avatar_classes = f"w-9 h-9 rounded-full flex items-center justify-center {css}"
        with ui.element("div").classes(avatar_classes):
            ui.icon(icon).classes("text-white text-lg")

    def render_attachments(attachments: tuple[Attachment, ...]) -> None:
        with ui.row().classes("gap-2"):
            for attachment in attachments:
                ui.chip(
                    f"{attachment.name} ({format_size(attachment.size)})",
                    icon="attach_file",
                ).props("dense outline color=white")

    def render_generated_files(files: tuple[GeneratedFile, ...]) -> None:
        ui.label("Generated files").classes("text-xs font-semibold text-gray-500 mt-2")
        with ui.row().classes("gap-2"):
            for file in files:
                ui.button(
                    file.name,
                    icon="download",
                    on_click=lambda f=file: download_file(f),
                ).props("outline dense no-caps")

    def render_artifact(artifact: Artifact) -> None:
        with ui.column().classes("w-full gap-1 mt-2"):
            ui.label(artifact.title or "Code").classes("text-xs font-semibold text-gray-600")
            ui.code(artifact.content, language=artifact.language).classes("w-full text-xs")

    def render_message(turn: ChatTurn) -> None:
        is_user = turn.role == "user"
        align = "justify-end" if is_user else "justify-start"
        bubble = "bubble-user" if is_user else "bubble-assistant"

        with ui.row().classes(f"w-full {align} gap-3 items-end"):
            if not is_user:
                render_avatar(False)
            with ui.column().classes("max-w-[70%] gap-1"):
                with ui.element("div").classes(f"px-4 py-3 {bubble}"):
                    if is_user:
                        ui.label(turn.content).classes(
                            "text-sm leading-relaxed whitespace-pre-wrap"
                        )
                    else:
                        ui.markdown(turn.content).classes("text-sm leading-relaxed")
                    if turn.attachments:
                        render_attachments(turn.attachments)
                    if turn.generated_files:
                        render_generated_files(turn.generated_files)
                    for artifact in turn.artifacts:
                        render_artifact(artifact)
                ui.label(turn.time).classes(
                    f"text-[10px] text-gray-400 {'self-end' if is_user else 'self-start'}"
                )
            if is_user:
                render_avatar(True)

    def render_typing_indicator() -> None:
        with ui.row().classes("w-full justify-start gap-3 items-end"):
            render_avatar(False)
            with ui.element("div").classes("bubble-assistant px-4 py-3"):
                with ui.row().classes("items-center gap-2"):
                    with ui.row().classes("gap-1"):
                        for _ in range(3):
                            ui.element("div").classes("typing-dot")
                    ui.label("Thinking...").classes("text-sm text-gray-500 italic")

    def refresh_messages() -> None:
        messages_container.clear()
        with messages_container:
            if not state.history:
                with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
                    ui.icon("forum").classes("text-5xl text-gray-300")
                    ui.label("Start a conversation").classes("text-lg text-gray-400")
            else:
                for turn in state.history:
                    render_message(turn)
            if state.is_sending:
                render_typing_indicator()

    def refresh_pending() -> None:
        pending_container.clear()
        with pending_container:
            for index, attachment in enumerate(state.pending_attachments):
                ui.chip(
                    attachment.name,
                    icon="attach_file",
                    removable=True,
                    on_value_change=lambda _, i=index: on_remove(i),
                ).props("dense")

    def refresh_controls() -> None:
        if state.is_sending:
            send_btn.disable()
            upload_btn.disable()
        else:
            send_btn.enable()
            upload_btn.enable()

    def refresh() -> None:
        refresh_messages()
        refresh_pending()
        refresh_controls()

    def on_remove(index: int) -> None:
        nonlocal state
        state = remove_attachment(state, index)
        refresh_pending()

    async def on_upload(e: events.MultiUploadEventArguments) -> None:
        nonlocal state
        try:
            attachments = await encode_attachments(e.files)
        except OSError as exc:
            logger.warning(f"Failed to read attachments: {exc}")
            ui.notify("Could not read the selected files", type="negative")
            return
        finally:
            uploader.reset()
        state = add_attachments(state, attachments)
        refresh_pending()

    async def send_message() -> None:
        nonlocal state
        try:
            state, request = begin_send(state, input_field.value or "")
        except SessionBusyError:
            return
        if request is None:
            return

        input_field.value = ""
        refresh()

        endpoint = DOCUMENT_ENDPOINT if document_mode.value else CHAT_ENDPOINT
        try:
            reply = await send_chat(request, endpoint=endpoint)
        except RelayClientError as exc:
            logger.error(f"Relay request failed: {exc}")
            state = fail_send(state)
        else:
            state = complete_send(state, reply)
        refresh()

    def new_chat() -> None:
        nonlocal state
        state = clear_chat(state)
        refresh()

    # === UI Layout ===
    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
        ui.column().classes("w-full max-w-3xl mx-auto portal-shell").style(
            "height: calc(100vh - 4rem)"
        ),
    ):
        # Header
        with ui.row().classes("w-full portal-header px-5 py-4 items-center justify-between"):
            with ui.row().classes("items-center gap-3"):
                ui.icon("smart_toy").classes("text-white text-3xl")
                with ui.column().classes("gap-0"):
                    ui.label("AI Chat Portal").classes("text-lg font-semibold text-white")
                    ui.label("Chat • Create • Download").classes("text-xs text-white/80")
            with ui.row().classes("items-center gap-3"):
                document_mode = ui.switch("Documents").props("color=white dark")
                ui.button("Clear Chat", icon="delete_sweep", on_click=new_chat).props(
                    "flat color=white no-caps"
                )

        # Messages
        with (
            ui.scroll_area().classes("flex-grow w-full bg-gray-50"),
            ui.column().classes("w-full p-5"),
        ):
            messages_container = ui.column().classes("w-full gap-4")

        # Pending attachments
        pending_container = ui.row().classes("w-full px-4 gap-2")

        # Input
        uploader = (
            ui.upload(multiple=True, auto_upload=True, on_multi_upload=on_upload)
            .props("hidden")
        )
        with ui.row().classes("w-full p-4 gap-3 items-end bg-white border-t"):
            upload_btn = ui.button(
                icon="attach_file",
                on_click=lambda: uploader.run_method("pickFiles"),
            ).props("round flat")
            with ui.element("div").classes("flex-grow composer px-3 py-2"):
                input_field = (
                    ui.textarea(placeholder="Ask me anything or request a file...")
                    .props("autogrow borderless dense rows=1")
                    .classes("w-full")
                    .on("keydown.enter.prevent", send_message)
                )
            send_btn = (
                ui.button(icon="send", on_click=send_message)
                .props("round unelevated")
                .classes("send-btn")
            )

    refresh()


def main() -> None:
    ui.run(title="AI Chat Portal", port=int(os.getenv("UI_PORT", "8080")), reload=False)


if __name__ == "__main__":
    main()
