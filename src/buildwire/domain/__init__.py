"""Domain models and enums for buildwire."""

from .artifacts import ArtifactCoordinate
from .base import DomainModel
from .enums import BuildVariant, RepositoryId, VersionKey
from .plan import BuildPlan, CompileOptions, DependencyGraph, ModulePlan, ResolvedArtifact
from .project import (
    ArtifactManifest,
    DependencyDeclaration,
    ModuleDefinition,
    OverrideDeclaration,
    ProjectDefinition,
    SigningConfig,
    ToolchainDefinition,
    VariantDefinition,
)
from .types import ArtifactName, Edge

__all__ = [
    "ArtifactCoordinate",
    "ArtifactManifest",
    "ArtifactName",
    "BuildPlan",
    "BuildVariant",
    "CompileOptions",
    "DependencyDeclaration",
    "DependencyGraph",
    "DomainModel",
    "Edge",
    "ModuleDefinition",
    "ModulePlan",
    "OverrideDeclaration",
    "ProjectDefinition",
    "RepositoryId",
    "ResolvedArtifact",
    "SigningConfig",
    "ToolchainDefinition",
    "VariantDefinition",
    "VersionKey",
]
