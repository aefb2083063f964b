"""Shared CLI dependency helpers."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

from buildwire.config import AppSettings
from buildwire.container import ServiceContainer, build_container


def load_environment(env_file: Path | None = None) -> None:
    """Load ``.env`` values without overriding variables already set."""

    target = env_file or Path.cwd() / ".env"
    if target.exists():
        load_dotenv(target, override=False)


def configure_logging(settings: AppSettings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


@lru_cache(maxsize=1)
def get_container() -> ServiceContainer:
    """Return a cached service container for CLI commands."""

    load_environment()
    settings = AppSettings.from_env()
    configure_logging(settings)
    return build_container(settings)


def reset_container() -> None:
    """Clear the cached container (useful for tests)."""

    get_container.cache_clear()
