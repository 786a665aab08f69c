import os

from dotenv import load_dotenv
from loguru import logger


def load_env(dotenv_path=None) -> bool:
    """Load a .env file. Variables already set in the environment are kept."""
    return load_dotenv(dotenv_path, override=False)


load_env()

# Unsafe fallback: embeds a plaintext credential. Deployments must set DATABASE_URL.
DEFAULT_DATABASE_URL = 'postgresql://admin:secret@db:5432/finance_db?sslmode=disable'


def normalize_database_url(url: str) -> str:
    """Rewrite the legacy ``postgres://`` scheme, which SQLAlchemy rejects."""
    if url.startswith('postgres://'):
        return 'postgresql://' + url[len('postgres://'):]
    return url


def get_database_url() -> str:
    """Read the store descriptor from the environment, warning on the fallback."""
    url = os.getenv('DATABASE_URL')
    if not url:
        logger.warning(
            "DATABASE_URL is not set, falling back to the built-in default "
            "which embeds a default credential. Override it for any real deployment."
        )
        url = DEFAULT_DATABASE_URL
    return normalize_database_url(url)


def get_host() -> str:
    return os.getenv('HOST', '0.0.0.0')


def get_port() -> int:
    return int(os.getenv('PORT', 8080))


def get_log_level() -> str:
    return os.getenv('LOG_LEVEL', 'INFO')


def get_log_file() -> str:
    return os.getenv('LOG_FILE', 'logs/finance_tracker.log')
