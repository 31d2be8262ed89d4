#!/usr/bin/env python3
import uvicorn

from app.core.config import get_settings
from app.core.logging import configure_logging, get_logger

logger = get_logger(component="run_server")


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("server_starting", host=settings.host, port=settings.port, enable_cache=settings.enable_cache)
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
