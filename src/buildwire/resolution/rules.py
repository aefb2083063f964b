"""Override rules pinning artifacts to a single version."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from buildwire.domain import ArtifactCoordinate, OverrideDeclaration
from buildwire.exceptions import ConfigurationError
from buildwire.versions import VersionRegistry


@dataclass(frozen=True, slots=True)
class OverrideRule:
    """Forces ``artifact`` to ``version`` wherever it is resolved."""

    artifact: str
    version: str


@dataclass(slots=True)
class OverrideRuleSet:
    """Rules keyed by artifact name; adding an existing artifact replaces its rule."""

    _rules: dict[str, OverrideRule] = field(default_factory=dict)

    @classmethod
    def from_declarations(
        cls,
        declarations: Iterable[OverrideDeclaration],
        registry: VersionRegistry,
    ) -> OverrideRuleSet:
        rules = cls()
        for declaration in declarations:
            if declaration.version_key is not None:
                version = registry.get(declaration.version_key)
            else:
                version = declaration.version or ""
            rules.add(declaration.artifact, version)
        return rules

    def add(self, artifact: str, version: str) -> OverrideRule:
        name = ArtifactCoordinate.parse(artifact).artifact
        if not version.strip():
            msg = f"Override for '{name}' has an empty version"
            raise ConfigurationError(msg)
        rule = OverrideRule(artifact=name, version=version)
        self._rules[name] = rule
        return rule

    def pinned(self, artifact: str) -> str | None:
        rule = self._rules.get(artifact)
        return rule.version if rule is not None else None

    def __contains__(self, artifact: object) -> bool:
        return artifact in self._rules

    def __iter__(self) -> Iterator[OverrideRule]:
        return iter(tuple(self._rules.values()))

    def __len__(self) -> int:
        return len(self._rules)


__all__ = ["OverrideRule", "OverrideRuleSet"]
