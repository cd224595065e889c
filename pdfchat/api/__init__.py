"""FastAPI endpoints for the PDF chat relay.

Endpoints:
    - GET /health: Service health status
    - POST /api/chat: Streamed chat completion, optionally document-grounded
"""

from pdfchat.api.app import app, create_app

__all__ = ["app", "create_app"]
