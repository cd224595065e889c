"""Command-line entry point for PDF Chat.

``RUN_MODE=integrated`` (default) mounts the NiceGUI page on the relay app
and serves both from one uvicorn process. ``RUN_MODE=separate`` starts the
relay and the UI as two child processes.

Settings are read from the environment after loading ``.env``.
"""

import logging
import os
import subprocess
import sys
import time

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger("pdfchat")


def _configure_logging() -> None:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def serve_integrated(host: str, port: int) -> None:
    """Serve ``/api/chat`` and the chat page from a single server.

    Args:
        host: Interface to bind.
        port: Port for both the API and the page.
    """
    # The page's relay client reads this at import time
    os.environ.setdefault("API_BASE_URL", f"http://localhost:{port}")

    import uvicorn
    from nicegui import ui

    from pdfchat.api.app import create_app
    from pdfchat.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    relay_app = create_app()
    ui.run_with(
        relay_app,
        title="PDF Chat",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "pdf-chat-secret"),
    )

    logger.info(f"Chat page on http://localhost:{port}/, API docs on /docs")
    uvicorn.run(relay_app, host=host, port=port, log_level=os.getenv("LOG_LEVEL", "info").lower())


def serve_separate(host: str, api_port: int, ui_port: int) -> None:
    """Run the relay and the UI as two child processes.

    Returns when either child exits; the other one is then terminated.

    Args:
        host: Interface the relay binds.
        api_port: Relay port.
        ui_port: NiceGUI port.
    """
    ui_env = {
        **os.environ,
        "API_BASE_URL": os.getenv("API_BASE_URL", f"http://localhost:{api_port}"),
        "UI_PORT": str(ui_port),
    }
    children = [
        subprocess.Popen(
            [
                sys.executable, "-m", "uvicorn", "pdfchat.api.app:app",
                "--host", host, "--port", str(api_port),
            ]
        ),
        subprocess.Popen([sys.executable, "-m", "pdfchat.ui.chat_page"], env=ui_env),
    ]
    logger.info(f"Relay on http://localhost:{api_port}, chat page on http://localhost:{ui_port}")

    try:
        while all(child.poll() is None for child in children):
            time.sleep(1)
    except KeyboardInterrupt:
        logger.info("Shutting down servers...")
    finally:
        for child in children:
            if child.poll() is None:
                child.terminate()
            child.wait()


def main() -> None:
    """Start PDF Chat in the mode selected by ``RUN_MODE``."""
    _configure_logging()

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    mode = os.getenv("RUN_MODE", "integrated").lower()
    logger.info(f"Starting PDF Chat in {mode} mode")

    if mode == "separate":
        serve_separate(host, port, int(os.getenv("UI_PORT", "8080")))
    else:
        serve_integrated(host, port)


if __name__ == "__main__":
    main()
