"""Application configuration using Pydantic Settings."""

import logging
from functools import lru_cache
from typing import Sequence

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application configuration."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="GIST_PROXY_")

    app_name: str = "GitHub Gist Proxy"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"

    # GitHub API settings
    github_api_base_url: str = "https://api.github.com"


@lru_cache
def get_settings() -> Settings:
    """Cached settings singleton."""
    return Settings()


def resolve_port(argv: Sequence[str], default: int) -> int:
    """
    Pick the listen port from the command-line arguments.

    The port is the sole positional argument. A missing argument yields
    ``default``; an unparsable one yields ``default`` with a warning.
    """
    if not argv:
        return default
    try:
        return int(argv[0])
    except ValueError:
        logger.warning(f"Invalid port argument {argv[0]!r}. Using default port {default}")
        return default
