"""Process entry point - logging, server construction, uvicorn"""

import logging
import sys

import uvicorn

from .. import config
from ..utils.logger import setup_logging
from .server import create_server

logger = logging.getLogger(__name__)


def main():
    setup_logging()
    
    try:
        server = create_server()
        logger.info(f"🚀 Server running on http://{config.HOST}:{config.PORT}")
        uvicorn.run(
            server.app,
            host=config.HOST,
            port=config.PORT,
            log_config=None,
            log_level=config.LOG_LEVEL.lower(),
        )
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception as e:
        logger.error(f"Server crashed: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
