"""Run the Users API with uvicorn: ``python -m users_api``."""

import logging

import uvicorn

from users_api.config import get_settings
from users_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info(f"Server listening on {settings.host}:{settings.port}")
    uvicorn.run(
        "users_api.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
