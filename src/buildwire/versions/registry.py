"""Write-once registry of toolchain versions."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from buildwire.domain import VersionKey
from buildwire.exceptions import ConfigurationError, MissingKeyError


def _coerce_key(key: VersionKey | str) -> VersionKey:
    try:
        return VersionKey(key)
    except ValueError as exc:
        choices = ", ".join(item.value for item in VersionKey)
        msg = f"Unknown version key '{key}'. Expected one of: {choices}"
        raise ConfigurationError(msg) from exc


class VersionRegistry:
    """Single source of truth for toolchain versions.

    Each key may be set once while the root project initializes; repeating a
    set with the same value is accepted, a different value is a conflict.
    After :meth:`freeze` the registry is read-only.
    """

    def __init__(self) -> None:
        self._values: dict[VersionKey, str] = {}
        self._frozen = False

    @classmethod
    def from_mapping(cls, values: Mapping[VersionKey | str, str]) -> VersionRegistry:
        """Populate a registry from ``values`` and freeze it."""

        registry = cls()
        for key, value in values.items():
            registry.set(key, value)
        registry.freeze()
        return registry

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def set(self, key: VersionKey | str, value: str) -> None:
        version_key = _coerce_key(key)
        if self._frozen:
            msg = f"Version registry is frozen; cannot set '{version_key}'"
            raise ConfigurationError(msg)
        if not isinstance(value, str) or not value.strip():
            msg = f"Version for '{version_key}' must be a non-empty string"
            raise ConfigurationError(msg)
        normalized = value.strip()
        existing = self._values.get(version_key)
        if existing is not None and existing != normalized:
            msg = (
                f"Conflicting values for '{version_key}': "
                f"already '{existing}', attempted '{normalized}'"
            )
            raise ConfigurationError(msg)
        self._values[version_key] = normalized

    def get(self, key: VersionKey | str) -> str:
        try:
            version_key = VersionKey(key)
            return self._values[version_key]
        except (ValueError, KeyError) as exc:
            raise MissingKeyError(str(key)) from exc

    def freeze(self) -> None:
        self._frozen = True

    def snapshot(self) -> Mapping[str, str]:
        return MappingProxyType({key.value: value for key, value in self._values.items()})

    def __contains__(self, key: object) -> bool:
        try:
            return VersionKey(key) in self._values  # type: ignore[arg-type]
        except ValueError:
            return False

    def __iter__(self) -> Iterator[VersionKey]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)


__all__ = ["VersionRegistry"]
