"""Main entry point for the DM auto-reply service."""

import os
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from autoreply import Application, Settings
from autoreply.api import create_fastapi_app
from autoreply.logging_config import get_logger, setup_logging
from sim import SimConversationSource

logger = get_logger(__name__)


def main():
    """Run the application."""
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env")
    setup_logging()

    # Get configuration from environment
    api_host = os.getenv("API_HOST", "localhost")
    api_port = int(os.getenv("API_PORT", "8000"))
    settings = Settings.from_env()

    source_factory = None
    if settings.conversation_source == "sim":
        # One shared simulator so replies persist across cycles
        sim = SimConversationSource(seed_scenario=True)
        source_factory = lambda: sim  # noqa: E731
        logger.info("Using simulated conversation source")

    application = Application(settings=settings, source_factory=source_factory)
    app = create_fastapi_app(application)

    # Run with uvicorn
    uvicorn.run(
        app,
        host=api_host,
        port=api_port,
        log_level="info",
    )


if __name__ == "__main__":
    main()
