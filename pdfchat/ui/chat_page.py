"""NiceGUI chat interface streaming replies from the relay."""

import os

from nicegui import events, run, ui

from pdfchat.chat.conversation import Conversation
from pdfchat.models.errors import ChatError
from pdfchat.models.schemas import Message, Role
from pdfchat.parsing.pdf_parser import MAX_FILE_SIZE, extract_text

CUSTOM_CSS = """
<style>
    body { background: #f5f5f5; min-height: 100vh; }
    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }
    .header { background: linear-gradient(135deg, #3b82f6 0%, #9333ea 100%); }
    .message-user {
        background: linear-gradient(135deg, #3b82f6 0%, #9333ea 100%);
        color: white;
        border-radius: 18px 18px 4px 18px;
    }
    .message-assistant {
        background: #f3f4f6;
        color: #1f2937;
        border-radius: 18px 18px 18px 4px;
    }
</style>
"""


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)

    messages_container: ui.column
    input_field: ui.textarea
    send_btn: ui.button
    stop_btn: ui.button
    document_chip: ui.row
    document_label: ui.label
    remove_btn: ui.button
    uploader: ui.upload

    def render_message(msg: Message) -> None:
        is_user = msg.role is Role.USER
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-assistant"
        with ui.row().classes(f"w-full {align}"):
            with ui.column().classes("max-w-[75%] gap-1"):
                with ui.element("div").classes(f"px-4 py-3 {bubble}"):
                    if is_user:
                        ui.label(msg.content).classes("text-sm whitespace-pre-wrap")
                    else:
                        ui.markdown(msg.content or "…").classes("text-sm")
                ui.label(msg.timestamp.strftime("%I:%M %p")).classes(
                    f"text-[10px] text-gray-400 {'self-end' if is_user else 'self-start'}"
                )

    def refresh() -> None:
        messages_container.clear()
        with messages_container:
            if not conversation.messages:
                with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
                    ui.icon("forum").classes("text-5xl text-gray-300")
                    ui.label("Start a conversation").classes("text-lg text-gray-400")
            for msg in conversation.messages:
                render_message(msg)

        streaming = conversation.is_streaming
        send_btn.set_enabled(not streaming)
        stop_btn.set_visibility(streaming)
        uploader.set_enabled(not streaming)
        remove_btn.set_enabled(not streaming)
        document = conversation.document
        document_chip.set_visibility(document is not None)
        document_label.set_text(document.filename if document else "")

    conversation = Conversation(on_change=lambda: refresh())

    async def send_message() -> None:
        text = input_field.value or ""
        if not text.strip() or conversation.is_streaming:
            return
        input_field.value = ""
        try:
            await conversation.submit(text)
        except ChatError as e:
            ui.notify(f"Failed to send message: {e.message}", type="negative")

    async def handle_upload(e: events.UploadEventArguments) -> None:
        try:
            text = await run.cpu_bound(extract_text, await e.file.read())
            conversation.attach_document(e.file.name, text)
        except ChatError as err:
            ui.notify(f"{err.message}: {err.details or ''}", type="negative")
            return
        finally:
            uploader.reset()
        ui.notify(f'"{e.file.name}" is ready for analysis.', type="positive")

    def remove_document() -> None:
        if conversation.detach_document() is not None:
            ui.notify("PDF removed", type="info")

    def new_chat() -> None:
        if not conversation.clear():
            ui.notify("Wait for the current reply to finish", type="warning")

    # === UI Layout ===
    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
        ui.column().classes("w-full max-w-3xl mx-auto app-container").style(
            "height: calc(100vh - 4rem)"
        ),
    ):
        with ui.row().classes("w-full header px-5 py-4 items-center justify-between"):
            with ui.row().classes("items-center gap-3"):
                ui.icon("auto_awesome").classes("text-white text-3xl")
                ui.label("PDF Chat").classes("text-lg font-semibold text-white")
            ui.button(icon="add", on_click=new_chat).props("flat round color=white")

        with (
            ui.scroll_area().classes("flex-grow w-full bg-gray-50"),
            ui.column().classes("w-full p-5"),
        ):
            messages_container = ui.column().classes("w-full gap-4")

        with ui.row().classes("w-full px-4 pt-2 items-center gap-2") as document_chip:
            ui.icon("description").classes("text-green-600")
            document_label = ui.label().classes("text-sm text-gray-600")
            remove_btn = ui.button(icon="close", on_click=remove_document).props(
                "flat round dense size=sm"
            )

        with ui.row().classes("w-full p-4 gap-3 items-end bg-white border-t"):
            uploader = (
                ui.upload(on_upload=handle_upload, auto_upload=True, max_file_size=MAX_FILE_SIZE)
                .props('accept=".pdf" flat')
                .on("rejected", lambda: ui.notify("Please select a PDF file smaller than 10MB.", type="negative"))
                .classes("w-40")
            )
            input_field = (
                ui.textarea(placeholder="Ask about your PDF or anything else...")
                .props("autogrow borderless dense rows=1")
                .classes("flex-grow")
                .on("keydown.enter.prevent", send_message)
            )
            send_btn = ui.button(icon="send", on_click=send_message).props("round unelevated")
            stop_btn = ui.button(icon="stop", on_click=lambda: conversation.cancel()).props(
                "round flat color=negative"
            )

    refresh()


def main() -> None:
    ui.run(title="PDF Chat", port=int(os.getenv("UI_PORT", "8080")), reload=False)


if __name__ in {"__main__", "__mp_main__"}:
    main()
