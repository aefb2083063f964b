"""Build output directory remapping."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from buildwire.exceptions import ConfigurationError

DEFAULT_BUILD_DIR_OFFSET = "../build"


def _normalize(path: Path) -> Path:
    # Lexical only; the directories need not exist yet.
    return Path(os.path.normpath(path))


def root_output_path(base_dir: Path, offset: str = DEFAULT_BUILD_DIR_OFFSET) -> Path:
    """Shared artifact root, resolved from the project source root."""

    return _normalize(Path(base_dir) / offset)


def module_output_path(root: Path, module_name: str) -> Path:
    """Artifact directory of ``module_name`` nested under ``root``."""

    if not module_name or module_name in {".", ".."} or any(
        sep in module_name for sep in ("/", "\\")
    ):
        msg = f"Module name '{module_name}' cannot be used as an output directory"
        raise ConfigurationError(msg)
    return Path(root) / module_name


@dataclass(slots=True)
class OutputPathRemapper:
    """Computes the root output directory first, then each module's below it."""

    offset: str = DEFAULT_BUILD_DIR_OFFSET
    _base_dir: Path | None = field(default=None, init=False)
    _root: Path | None = field(default=None, init=False)

    @property
    def root(self) -> Path:
        if self._root is None:
            msg = "Root output path has not been computed yet"
            raise ConfigurationError(msg)
        return self._root

    def root_output_path(self, base_dir: Path) -> Path:
        """Shared root for ``base_dir``; it must lie outside the source tree."""

        if not self.offset.strip():
            msg = "Build directory offset must not be empty"
            raise ConfigurationError(msg)
        base = _normalize(Path(base_dir))
        root = root_output_path(base, self.offset)
        if base == root or base.is_relative_to(root):
            msg = (
                f"Build directory offset '{self.offset}' resolves to {root}, "
                f"which contains the project source root {base}"
            )
            raise ConfigurationError(msg)
        self._base_dir = base
        self._root = root
        return root

    def module_output_path(self, module_name: str, override: str | None = None) -> Path:
        """Derived module directory, or ``override`` resolved against the source root."""

        root = self.root
        if override is None:
            return module_output_path(root, module_name)
        candidate = Path(override)
        if not candidate.is_absolute():
            candidate = (self._base_dir or root) / candidate
        return _normalize(candidate)


__all__ = [
    "DEFAULT_BUILD_DIR_OFFSET",
    "OutputPathRemapper",
    "module_output_path",
    "root_output_path",
]
