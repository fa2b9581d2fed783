"""NiceGUI group chat page backed by a relay ChatClient."""

import os
import random
from datetime import datetime

from fastapi import Request
from nicegui import app, background_tasks, events, ui

from src.client.session import ChatClient, ConnectionStatus
from src.models.events import HistoryEntry

EMOJIS = ["😀", "😃", "😄", "😁", "😆", "😅", "😂", "🤣", "😊", "😇"]

FILE_SIZE_UNITS = ["Bytes", "KB", "MB", "GB"]

MAX_UPLOAD_SIZE = 10 * 1024 * 1024


def format_file_size(size: int) -> str:
    """Format a byte count for display, e.g. ``1536`` -> ``"1.5 KB"``."""
    if size <= 0:
        return "0 Bytes"
    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(FILE_SIZE_UNITS) - 1:
        value /= 1024
        unit += 1
    return f"{round(value, 2):g} {FILE_SIZE_UNITS[unit]}"


def format_time(time_ms: int) -> str:
    return datetime.fromtimestamp(time_ms / 1000).strftime("%I:%M %p")


def get_username() -> str:
    """Return the stored display name, creating one on first visit."""
    name = app.storage.user.get("chat_username")
    if not name:
        name = os.getenv("CHAT_USERNAME") or f"User{random.randint(100, 999)}"
        app.storage.user["chat_username"] = name
    return name


CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f5f5f5; min-height: 100vh; }

    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }

    .header { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); }

    .message-own {
        background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
        color: white;
        border-radius: 18px 18px 4px 18px;
    }

    .message-incoming {
        background: #f3f4f6;
        color: #1f2937;
        border-radius: 18px 18px 18px 4px;
    }

    .message-system { color: #6b7280; font-style: italic; }

    .input-box {
        background: #f9fafb;
        border: 1px solid #e5e7eb;
        border-radius: 12px;
        transition: border-color 0.2s;
    }
    .input-box:focus-within { border-color: #667eea; }

    .send-btn { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%) !important; }
</style>
"""


@ui.page("/")
def chat_page(request: Request) -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    username = get_username()

    messages_container: ui.column
    status_label: ui.label
    input_field: ui.textarea

    def render_message(entry: HistoryEntry, own: bool) -> None:
        align = "justify-end" if own else "justify-start"
        bubble = "message-own" if own else "message-incoming"

        with messages_container, ui.row().classes(f"w-full {align} gap-3 items-end"):
            with ui.column().classes("max-w-[70%] gap-1"):
                if not own:
                    ui.label(entry.name).classes("text-xs text-gray-500")
                with ui.element("div").classes(f"px-4 py-3 {bubble}"):
                    ui.label(entry.text).classes("text-sm leading-relaxed whitespace-pre-wrap")
                ui.label(format_time(entry.time)).classes(
                    f"text-[10px] text-gray-400 {'self-end' if own else 'self-start'}"
                )

    def render_system(text: str, time: int) -> None:
        with messages_container, ui.row().classes("w-full justify-center"):
            ui.label(f"{text} · {format_time(time)}").classes("text-xs message-system")

    def render_status(status: ConnectionStatus) -> None:
        status_label.set_text(status.value.capitalize())

    client = ChatClient(
        username,
        on_message=render_message,
        on_system=render_system,
        on_status=render_status,
        page_url=str(request.base_url),
    )

    async def send_message() -> None:
        text = input_field.value or ""
        input_field.value = ""
        await client.send_message(text)

    def insert_emoji(emoji: str) -> None:
        input_field.value = (input_field.value or "") + emoji

    def handle_upload(e: events.UploadEventArguments) -> None:
        # Attachments are announced locally only; the relay carries text events.
        try:
            size = len(e.content.read())
        except OSError as err:
            client.notify_local(f"Error: Could not read {e.name}: {err}")
            return
        client.post_local(f"[File: {e.name} ({format_file_size(size)})]")

    def handle_rejected() -> None:
        client.notify_local(
            f"Error: File not accepted (limit {format_file_size(MAX_UPLOAD_SIZE)})"
        )

    # === UI Layout ===
    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
        ui.column().classes("w-full max-w-3xl mx-auto app-container").style(
            "height: calc(100vh - 4rem)"
        ),
    ):
        # Header
        with ui.row().classes("w-full header px-5 py-4 items-center justify-between"):
            with ui.row().classes("items-center gap-3"):
                ui.icon("forum").classes("text-white text-3xl")
                ui.label("Group Chat").classes("text-lg font-semibold text-white")
            with ui.row().classes("items-center gap-3"):
                ui.label(username).classes("text-sm text-white/90")
                status_label = ui.label("Disconnected").classes("text-xs text-white/80")

        # Messages
        with (
            ui.scroll_area().classes("flex-grow w-full bg-gray-50"),
            ui.column().classes("w-full p-5"),
        ):
            messages_container = ui.column().classes("w-full gap-4")

        # Input
        with ui.row().classes("w-full p-4 gap-3 items-end bg-white border-t"):
            with ui.button(icon="mood").props("flat round"):
                with ui.menu(), ui.row().classes("p-2 gap-1"):
                    for emoji in EMOJIS:
                        ui.button(emoji, on_click=lambda _, em=emoji: insert_emoji(em)).props(
                            "flat dense"
                        )
            ui.upload(
                on_upload=handle_upload,
                on_rejected=handle_rejected,
                max_file_size=MAX_UPLOAD_SIZE,
                auto_upload=True,
            ).props(
                "flat dense accept='image/*,.pdf,.doc,.docx,.txt'"
            ).classes("w-40")
            with ui.element("div").classes("flex-grow input-box px-3 py-2"):
                input_field = (
                    ui.textarea(placeholder="Type a message...")
                    .props("autogrow borderless dense rows=1")
                    .classes("w-full")
                    .on("keydown.enter.prevent", send_message)
                )
            ui.button(icon="send", on_click=send_message).props("round unelevated").classes(
                "send-btn"
            )

    background_tasks.create(client.run(), name=f"chat-session-{username}")
    ui.context.client.on_disconnect(client.stop)


def main() -> None:
    ui.run(
        title="Group Chat",
        port=8080,
        reload=False,
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "chat-relay-secret"),
    )


if __name__ == "__main__":
    main()
