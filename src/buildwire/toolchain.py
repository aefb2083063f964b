"""Compiler options derived from the version registry."""

from __future__ import annotations

import re
from collections.abc import Sequence

from buildwire.domain import CompileOptions, VersionKey
from buildwire.exceptions import ConfigurationError
from buildwire.versions import VersionRegistry

_MAJOR_MINOR = re.compile(r"^(\d+)\.(\d+)")


def language_level(version: str) -> str:
    """``major.minor`` of a language release, e.g. ``1.8.10`` -> ``1.8``."""

    match = _MAJOR_MINOR.match(version)
    if match is None:
        msg = f"Language version '{version}' does not start with major.minor"
        raise ConfigurationError(msg)
    return f"{match.group(1)}.{match.group(2)}"


def compile_options(
    registry: VersionRegistry,
    free_compiler_args: Sequence[str] = (),
) -> CompileOptions:
    """Options applied to every module's compile tasks."""

    platform = registry.get(VersionKey.PLATFORM_COMPATIBILITY_VERSION)
    level = language_level(registry.get(VersionKey.LANGUAGE_VERSION))
    return CompileOptions(
        jvm_target=platform,
        source_compatibility=platform,
        target_compatibility=platform,
        language_version=level,
        api_version=level,
        free_compiler_args=tuple(free_compiler_args),
    )


__all__ = ["compile_options", "language_level"]
