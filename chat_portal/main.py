"""Main application entry point.

Serves the relay API and the NiceGUI chat page from one process, or from two
processes when RUN_MODE=separate. Environment variables are loaded from .env.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

API_PORT = int(os.getenv("PORT", "8000"))
UI_PORT = int(os.getenv("UI_PORT", "8080"))


def run_integrated() -> None:
    """Run the relay with the chat page mounted on the same server.

    The relay answers under /api, NiceGUI serves the page at /.
    """
    import uvicorn
    from nicegui import ui

    from chat_portal.api.app import create_app
    from chat_portal.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    app = create_app()

    ui.run_with(
        app,
        title="AI Chat Portal",
        favicon="💬",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "chat-portal-secret"),
    )

    if not os.getenv("ANTHROPIC_API_KEY"):
        logger.warning("ANTHROPIC_API_KEY is not set; chat requests will fail with 500")

    logger.info(f"Chat UI available at http://localhost:{API_PORT}/")
    logger.info(f"Relay endpoints at http://localhost:{API_PORT}/api/chat")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=API_PORT,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def run_separate() -> None:
    """Run the relay and the chat page as two processes.

    The relay listens on PORT, the page on UI_PORT and reaches the relay
    through API_BASE_URL.
    """
    import subprocess

    env = {**os.environ}
    env.setdefault("API_BASE_URL", f"http://localhost:{API_PORT}")

    logger.info(f"Starting relay on http://localhost:{API_PORT}")
    logger.info(f"Starting chat UI on http://localhost:{UI_PORT}")

    api_proc = subprocess.Popen(
        [
            sys.executable,
            "-m",
            "uvicorn",
            "chat_portal.api.app:app",
            "--host",
            os.getenv("HOST", "0.0.0.0"),
            "--port",
            str(API_PORT),
        ],
        env=env,
    )
    ui_proc = subprocess.Popen(
        [sys.executable, "-c", "from chat_portal.ui.chat_page import main; main()"],
        env=env,
    )

    try:
        api_proc.wait()
    except KeyboardInterrupt:
        logger.info("Shutting down servers...")
    finally:
        for proc in (api_proc, ui_proc):
            proc.terminate()
            proc.wait()


def main() -> None:
    """Application entry point.

    Set RUN_MODE=separate to run the relay and the UI on different ports.
    Default is integrated mode.
    """
    mode = os.getenv("RUN_MODE", "integrated").lower()

    logger.info(f"Starting Chat Portal in {mode} mode")

    if mode == "separate":
        run_separate()
    else:
        run_integrated()


if __name__ == "__main__":
    main()
