import logging

import uvicorn

from inventory.config import get_settings
from inventory.main import configure_logging

logger = logging.getLogger(__name__)


def main():
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    logger.info(f"API lista en http://localhost:{settings.PORT}")
    uvicorn.run(
        "inventory.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
