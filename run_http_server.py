#!/usr/bin/env python
"""Entry point for running the HTTP server."""

import logging
import os

import uvicorn
from dotenv import load_dotenv

from eventdesk.logging_config import configure_logging
from eventdesk.models.config import EventDeskConfig

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def main():
    """Run the HTTP server."""
    config = EventDeskConfig()
    configure_logging(config.log_level)

    logger.info(f"Starting HTTP server on {config.http_host}:{config.http_port}")

    uvicorn.run(
        "eventdesk.http_server:app",
        host=config.http_host,
        port=config.http_port,
        reload=os.getenv("DEBUG", "false").lower() == "true",
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
