"""Run the API with uvicorn: python -m shopapi"""
import sys

import uvicorn

from shopapi.config import get_settings
from shopapi.logging import configure_logging, get_logger

logger = get_logger("shopapi")


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    try:
        uvicorn.run(
            "shopapi.main:app",
            host=settings.host,
            port=settings.port,
            log_level=settings.log_level.lower(),
        )
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception:
        logger.critical("Unrecoverable error, shutting down", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
