"""Build plan models handed to the execution engine."""

from __future__ import annotations

from pathlib import Path

from buildwire.exceptions import ConfigurationError

from .base import DomainModel
from .enums import RepositoryId
from .types import Edge


class ResolvedArtifact(DomainModel):
    """One node of a resolved dependency graph."""

    artifact: str
    requested: tuple[str, ...]
    version: str
    forced: bool = False
    direct: bool = False

    @property
    def coordinate(self) -> str:
        return f"{self.artifact}:{self.version}"


class DependencyGraph(DomainModel):
    """Dependency closure of one module variant with overrides applied."""

    module: str
    variant: str
    artifacts: tuple[ResolvedArtifact, ...] = ()
    edges: tuple[Edge, ...] = ()

    def get(self, artifact: str) -> ResolvedArtifact | None:
        for node in self.artifacts:
            if node.artifact == artifact:
                return node
        return None

    def version_of(self, artifact: str) -> str | None:
        node = self.get(artifact)
        return node.version if node is not None else None


class CompileOptions(DomainModel):
    """Compiler settings shared by every module."""

    jvm_target: str
    source_compatibility: str
    target_compatibility: str
    language_version: str
    api_version: str
    free_compiler_args: tuple[str, ...] = ()


class ModulePlan(DomainModel):
    """Everything the execution engine needs to build a single module."""

    name: str
    output_dir: Path
    depends_on: tuple[str, ...] = ()
    namespace: str | None = None
    application_id: str | None = None
    plugins: tuple[str, ...] = ()
    compile_sdk: int | None = None
    min_sdk: int
    target_sdk: int | None = None
    ndk_version: str | None = None
    version_code: int
    version_name: str
    multidex: bool = False
    desugaring: bool = False
    compile_options: CompileOptions
    signing: dict[str, str | None]
    minify: dict[str, bool]
    graphs: tuple[DependencyGraph, ...] = ()

    def graph(self, variant: str) -> DependencyGraph:
        for graph in self.graphs:
            if graph.variant == variant:
                return graph
        msg = f"Module '{self.name}' has no variant '{variant}'"
        raise ConfigurationError(msg)


class BuildPlan(DomainModel):
    """Result of a successful configuration phase."""

    project: str
    versions: dict[str, str]
    repositories: tuple[RepositoryId, ...]
    order: tuple[str, ...]
    levels: tuple[tuple[str, ...], ...]
    root_output_dir: Path
    modules: tuple[ModulePlan, ...]

    def module(self, name: str) -> ModulePlan:
        for module in self.modules:
            if module.name == name:
                return module
        msg = f"Module '{name}' is not part of the plan"
        raise ConfigurationError(msg)


__all__ = [
    "BuildPlan",
    "CompileOptions",
    "DependencyGraph",
    "ModulePlan",
    "ResolvedArtifact",
]
