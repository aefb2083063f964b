"""Dependency resolution with global version overrides."""

from __future__ import annotations

import logging
import re
from collections import deque
from collections.abc import Mapping, Sequence

from buildwire.domain import (
    ArtifactCoordinate,
    ArtifactManifest,
    DependencyDeclaration,
    DependencyGraph,
    Edge,
    ModuleDefinition,
    ResolvedArtifact,
)
from buildwire.exceptions import ConfigurationError

from .rules import OverrideRuleSet

_VERSION_SPLIT = re.compile(r"[.\-+_]")
# Sorts above any qualifier and below any further numeric segment.
_RELEASE_MARKER = (0.5, 0, "")


def _version_key(version: str) -> tuple[tuple[float, int, str], ...]:
    parts: list[tuple[float, int, str]] = []
    for part in _VERSION_SPLIT.split(version):
        if not part:
            continue
        if part.isdigit():
            parts.append((1, int(part), ""))
        else:
            parts.append((0, 0, part.lower()))
    parts.append(_RELEASE_MARKER)
    return tuple(parts)


class ResolutionOverrideEngine:
    """Resolves module dependency closures and pins overridden artifacts.

    Traversal follows the static manifest ``catalog``; artifacts absent from
    the catalog are treated as leaves. Any artifact with an override rule is
    rewritten to the pinned version before its own requirements are read, at
    every depth and for every module and variant. Other conflicts are settled
    by taking the highest requested version.
    """

    def __init__(
        self,
        rules: OverrideRuleSet,
        catalog: Mapping[str, ArtifactManifest],
        *,
        max_rounds: int = 32,
        logger: logging.Logger | None = None,
    ) -> None:
        self._rules = rules
        self._catalog = catalog
        self._max_rounds = max_rounds
        self._logger = logger or logging.getLogger(__name__)

    def resolve(self, module: ModuleDefinition, variant: str) -> DependencyGraph:
        if variant not in module.variant_names():
            msg = f"Module '{module.name}' has no variant '{variant}'"
            raise ConfigurationError(msg)

        declared = [dep for dep in module.dependencies if dep.applies_to(variant)]
        constraints = self._platform_constraints(module, declared)
        roots = [self._root_request(module, dep, constraints) for dep in declared]

        selected: dict[str, str] = {}
        for _ in range(self._max_rounds):
            requested, edges = self._walk(roots, selected, constraints)
            chosen = {artifact: self._select(artifact, versions) for artifact, versions in requested.items()}
            if chosen == selected:
                break
            selected = chosen
        else:
            msg = f"Dependency resolution for {module.name}/{variant} did not converge"
            raise ConfigurationError(msg)

        direct = {artifact for artifact, _ in roots}
        artifacts = []
        for artifact, versions in requested.items():
            forced = artifact in self._rules
            version = selected[artifact]
            if forced and any(requested_version != version for requested_version in versions):
                self._logger.debug(
                    "Forcing %s to %s in %s/%s (requested %s)",
                    artifact,
                    version,
                    module.name,
                    variant,
                    ", ".join(versions),
                )
            artifacts.append(
                ResolvedArtifact(
                    artifact=artifact,
                    requested=tuple(versions),
                    version=version,
                    forced=forced,
                    direct=artifact in direct,
                )
            )
        return DependencyGraph(
            module=module.name,
            variant=variant,
            artifacts=tuple(artifacts),
            edges=tuple(edges),
        )

    def resolve_all(self, module: ModuleDefinition) -> tuple[DependencyGraph, ...]:
        return tuple(self.resolve(module, variant) for variant in module.variant_names())

    def _platform_constraints(
        self,
        module: ModuleDefinition,
        declared: Sequence[DependencyDeclaration],
    ) -> dict[str, str]:
        constraints: dict[str, str] = {}
        for dep in declared:
            if not dep.platform:
                continue
            target = dep.target
            if target.version is None:
                msg = f"Platform '{target}' in module '{module.name}' must declare a version"
                raise ConfigurationError(msg)
            version = self._rules.pinned(target.artifact) or target.version
            manifest = self._catalog.get(f"{target.artifact}:{version}")
            if manifest is None:
                self._logger.warning(
                    "Platform %s:%s has no catalog entry; no constraints applied",
                    target.artifact,
                    version,
                )
                continue
            for artifact, constrained in manifest.constraints.items():
                constraints.setdefault(artifact, constrained)
        return constraints

    def _root_request(
        self,
        module: ModuleDefinition,
        dep: DependencyDeclaration,
        constraints: Mapping[str, str],
    ) -> tuple[str, str]:
        target = dep.target
        version = target.version or constraints.get(target.artifact)
        if version is None:
            msg = (
                f"Dependency '{target.artifact}' in module '{module.name}' has no version "
                "and no platform constraint supplies one"
            )
            raise ConfigurationError(msg)
        return target.artifact, version

    def _walk(
        self,
        roots: Sequence[tuple[str, str]],
        selected: Mapping[str, str],
        constraints: Mapping[str, str],
    ) -> tuple[dict[str, list[str]], list[Edge]]:
        requested: dict[str, list[str]] = {}
        edges: dict[Edge, None] = {}
        expanded: set[str] = set()
        queue: deque[tuple[str, str, str | None]] = deque(
            (artifact, version, None) for artifact, version in roots
        )

        while queue:
            artifact, version, parent = queue.popleft()
            versions = requested.setdefault(artifact, [])
            if version not in versions:
                versions.append(version)
            if parent is not None:
                edges[(parent, artifact)] = None
            if artifact in expanded:
                continue
            expanded.add(artifact)

            effective = self._rules.pinned(artifact) or selected.get(artifact, version)
            manifest = self._catalog.get(f"{artifact}:{effective}")
            if manifest is None:
                continue
            for requirement in manifest.requires:
                coordinate = ArtifactCoordinate.parse(requirement)
                child_version = coordinate.version or constraints.get(coordinate.artifact)
                if child_version is None:
                    msg = (
                        f"'{artifact}:{effective}' requires '{coordinate.artifact}' "
                        "without a version and no platform constraint supplies one"
                    )
                    raise ConfigurationError(msg)
                queue.append((coordinate.artifact, child_version, artifact))

        return requested, list(edges)

    def _select(self, artifact: str, versions: Sequence[str]) -> str:
        pinned = self._rules.pinned(artifact)
        if pinned is not None:
            return pinned
        return max(versions, key=_version_key)


__all__ = ["ResolutionOverrideEngine"]
