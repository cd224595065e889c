"""FastAPI application factory and configuration.

Builds the relay app: CORS, the ``ChatError`` handler, the chat router
and a health check.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pdfchat.api.chat import router as chat_router
from pdfchat.models.errors import ChatError

logger = logging.getLogger(__name__)


async def chat_error_handler(request: Request, exc: ChatError) -> JSONResponse:
    """Convert a ChatError into a ``{error, details}`` response."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="PDF Chat API",
        description=(
            "Streaming chat relay for a hosted language model. Answers can be "
            "grounded in text extracted from an uploaded PDF."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    application.add_exception_handler(ChatError, chat_error_handler)
    application.include_router(chat_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "pdf-chat"}

    return application


app = create_app()
