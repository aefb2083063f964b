"""Artifact coordinate parsing."""

from __future__ import annotations

from dataclasses import dataclass

from buildwire.exceptions import ConfigurationError

from .types import ArtifactName


@dataclass(frozen=True, slots=True)
class ArtifactCoordinate:
    """A ``group:name[:version]`` reference to a library artifact."""

    group: str
    name: str
    version: str | None = None

    @classmethod
    def parse(cls, raw: str) -> ArtifactCoordinate:
        parts = raw.strip().split(":")
        if len(parts) not in (2, 3) or not all(part.strip() for part in parts):
            msg = f"Malformed artifact coordinate '{raw}'; expected group:name[:version]"
            raise ConfigurationError(msg)
        group, name = parts[0].strip(), parts[1].strip()
        version = parts[2].strip() if len(parts) == 3 else None
        return cls(group=group, name=name, version=version)

    @property
    def artifact(self) -> ArtifactName:
        return ArtifactName(f"{self.group}:{self.name}")

    def with_version(self, version: str) -> ArtifactCoordinate:
        return ArtifactCoordinate(group=self.group, name=self.name, version=version)

    def __str__(self) -> str:
        if self.version is None:
            return self.artifact
        return f"{self.artifact}:{self.version}"


__all__ = ["ArtifactCoordinate"]
