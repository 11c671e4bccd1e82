"""Entry point for running the userprofiled API server.

This module provides the entry point for serving the REST API.
"""

import logging
import sys

import uvicorn

from userprofile_library.config import load_settings

logger = logging.getLogger(__name__)


def main() -> None:
    """Run the userprofiled API server.

    Loads settings and starts the uvicorn server.
    """
    try:
        settings = load_settings()

        uvicorn.run(
            "userprofiled.main:app",
            host=settings.host,
            port=settings.port,
            log_level=settings.log_level.lower(),
        )

    except KeyboardInterrupt:
        logger.info("Received interrupt, shutting down")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Failed to start server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
