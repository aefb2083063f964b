"""Errors raised while evaluating a build configuration."""

from __future__ import annotations

from collections.abc import Sequence


class BuildwireError(RuntimeError):
    """Base class for configuration-phase failures."""


class ConfigurationError(BuildwireError):
    """Raised when configuration input is conflicting or malformed."""


class MissingKeyError(ConfigurationError, KeyError):
    """Raised when a version key is read before it was registered."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Version key '{key}' has not been registered")

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message instead.
        return str(self.args[0])


class CyclicDependencyError(ConfigurationError):
    """Raised when module evaluation dependencies form a cycle."""

    def __init__(self, modules: Sequence[str]) -> None:
        self.modules: tuple[str, ...] = tuple(modules)
        chain = " -> ".join((*self.modules, self.modules[0])) if self.modules else ""
        super().__init__(f"Cyclic evaluation dependency between modules: {chain}")


__all__ = [
    "BuildwireError",
    "ConfigurationError",
    "CyclicDependencyError",
    "MissingKeyError",
]
