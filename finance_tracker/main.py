import sys

import uvicorn
from loguru import logger

from . import config
from .api import create_app
from .database import connect, get_session_factory, init_db
from .repository import TransactionRepository


def configure_logging():
    """Send logs to stdout and a daily rotated file."""
    level = config.get_log_level()
    logger.remove()
    logger.add(
        sys.stdout,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=level
    )
    logger.add(
        config.get_log_file(),
        rotation="1 day",
        retention="7 days",
        level=level
    )


def build_app():
    """Connect to the store and wire the repository into the API.

    Exits the process if the store cannot be reached.
    """
    engine = connect(config.get_database_url())
    init_db(engine)
    repository = TransactionRepository(get_session_factory(engine))
    return create_app(repository)


def main():
    """Main entry point for the finance tracker API."""
    config.load_env()
    configure_logging()

    app = build_app()

    host = config.get_host()
    port = config.get_port()
    logger.info(f"Server starting on {host}:{port}...")
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
