"""NiceGUI interface - thin visualization layer for chat interactions.

Responsibilities:
    - Chat message display with streaming updates
    - PDF upload, in-process text extraction and removal
    - Stop and new-chat controls

Holds no business logic; all state lives in ``pdfchat.chat.Conversation``.
"""
