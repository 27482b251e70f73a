"""Run the catalog API with uvicorn: ``python -m catalog``."""

import logging

import uvicorn

from .config import settings
from .logging_config import setup_logging

logger = logging.getLogger("catalog")


def main() -> None:
    setup_logging(settings.log_level)
    logger.info("Server is running on http://%s:%s", settings.host, settings.port)
    uvicorn.run("catalog.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
