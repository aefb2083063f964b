"""Project definition loading."""

from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from buildwire.domain import ProjectDefinition
from buildwire.exceptions import ConfigurationError


def _read(path: Path) -> dict[str, Any]:
    suffix = path.suffix.lower()
    try:
        if suffix == ".toml":
            with path.open("rb") as handle:
                return tomllib.load(handle)
        if suffix == ".json":
            payload = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(payload, dict):
                msg = f"{path}: top-level JSON value must be an object"
                raise ConfigurationError(msg)
            return payload
    except FileNotFoundError as exc:
        msg = f"Project file {path} does not exist"
        raise ConfigurationError(msg) from exc
    except OSError as exc:
        msg = f"{path}: unable to read project file ({exc})"
        raise ConfigurationError(msg) from exc
    except (tomllib.TOMLDecodeError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        msg = f"{path}: unable to parse project file ({exc})"
        raise ConfigurationError(msg) from exc
    msg = f"{path}: unsupported project file type '{suffix}'; use .toml or .json"
    raise ConfigurationError(msg)


def parse_project(payload: dict[str, Any], *, source: str = "<memory>") -> ProjectDefinition:
    try:
        return ProjectDefinition.model_validate(payload)
    except ValidationError as exc:
        msg = f"{source}: invalid project definition\n{exc}"
        raise ConfigurationError(msg) from exc


def load_project(path: Path) -> ProjectDefinition:
    """Read and validate a TOML or JSON project definition."""

    resolved = Path(path).expanduser()
    return parse_project(_read(resolved), source=str(resolved))


__all__ = ["load_project", "parse_project"]
