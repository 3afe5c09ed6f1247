"""Main entry point for the relay service.

Starts the FastAPI + Socket.IO server with uvicorn.
"""

import logging

import uvicorn

from relay_service.config import get_config
from relay_service.observability.logger import setup_logging
from relay_service.server import create_app

logger = logging.getLogger(__name__)


def main() -> None:
    config = get_config()
    setup_logging(config.observability.log_level, config.observability.log_format)

    logger.info(f"Starting relay service on {config.server.host}:{config.server.port}")

    app = create_app(config)

    server = uvicorn.Server(
        uvicorn.Config(
            app,
            host=config.server.host,
            port=config.server.port,
            log_level=config.observability.log_level.lower(),
            access_log=True,
        )
    )
    server.run()


if __name__ == "__main__":
    main()
