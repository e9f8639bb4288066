import asyncio
import logging
import sys

import uvicorn

import config
from utils.logging_config import setup_logging

# Initialize centralized logging configuration
setup_logging()

from web.app import app

logger = logging.getLogger(__name__)


def install_fatal_error_handler(loop: asyncio.AbstractEventLoop, server: uvicorn.Server) -> None:
    """
    Errors the event loop cannot route anywhere (exceptions in callbacks,
    never-retrieved task exceptions) are treated as fatal: the server stops
    accepting requests and the process exits with status 1.
    """

    def handle(loop: asyncio.AbstractEventLoop, context: dict) -> None:
        exception = context.get("exception")
        logger.critical(f"Unhandled error in event loop: {context.get('message')}",
                        exc_info=exception if exception is not None else False)
        server.exit_code = 1
        server.should_exit = True

    loop.set_exception_handler(handle)


async def serve() -> int:
    server = uvicorn.Server(uvicorn.Config(app, host=config.WEBAPP_HOST, port=config.WEBAPP_PORT,
                                           log_config=None))
    server.exit_code = 0
    install_fatal_error_handler(asyncio.get_running_loop(), server)
    await server.serve()
    return server.exit_code


def main() -> None:
    logger.info(f"Starting FashionHub API on {config.WEBAPP_HOST}:{config.WEBAPP_PORT}")
    sys.exit(asyncio.run(serve()))


if __name__ == '__main__':
    main()
