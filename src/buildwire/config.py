"""Lightweight application configuration loader."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from buildwire.layout import DEFAULT_BUILD_DIR_OFFSET


@dataclass(frozen=True)
class AppSettings:
    """Immutable configuration sourced from environment variables."""

    environment: str = "development"
    project_file: Path = Path("buildwire.toml")
    build_dir_offset: str = DEFAULT_BUILD_DIR_OFFSET
    log_level: str = "WARNING"

    @property
    def base_dir(self) -> Path:
        """Project source root; output offsets are resolved from here."""

        return self.project_file.expanduser().resolve().parent

    @classmethod
    def from_env(cls) -> AppSettings:
        return cls(
            environment=os.getenv("BUILDWIRE_ENV", cls.environment),
            project_file=Path(os.getenv("BUILDWIRE_PROJECT_FILE", str(cls.project_file))),
            build_dir_offset=os.getenv("BUILDWIRE_BUILD_DIR_OFFSET", cls.build_dir_offset),
            log_level=os.getenv("BUILDWIRE_LOG_LEVEL", cls.log_level).upper(),
        )


__all__ = ["AppSettings"]
