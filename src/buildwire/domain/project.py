"""Declarative project and module definitions."""

from __future__ import annotations

import re
from typing import Annotated

from pydantic import Field, field_validator, model_validator

from buildwire.exceptions import ConfigurationError

from .artifacts import ArtifactCoordinate
from .base import DomainModel
from .enums import BuildVariant, RepositoryId, VersionKey

_BASE_CONFIGURATIONS: tuple[str, ...] = (
    "implementation",
    "api",
    "compileOnly",
    "runtimeOnly",
    "coreLibraryDesugaring",
)
_MODULE_NAME = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_.\-]*$")
_DEBUG_SIGNING = "debug"


def _parse_coordinate(value: str) -> ArtifactCoordinate:
    try:
        return ArtifactCoordinate.parse(value)
    except ConfigurationError as exc:
        raise ValueError(str(exc)) from exc


def _scoped(variant: str, base: str) -> str:
    return variant + base[0].upper() + base[1:]


class DependencyDeclaration(DomainModel):
    """A library dependency declared by a module."""

    coordinate: Annotated[str, Field(min_length=3)]
    configuration: str = "implementation"
    platform: bool = False

    @field_validator("coordinate")
    @classmethod
    def validate_coordinate(cls, value: str) -> str:
        return str(_parse_coordinate(value))

    @field_validator("configuration")
    @classmethod
    def validate_configuration(cls, value: str) -> str:
        if value in _BASE_CONFIGURATIONS:
            return value
        for base in _BASE_CONFIGURATIONS:
            suffix = base[0].upper() + base[1:]
            if value.endswith(suffix) and len(value) > len(suffix) and value[0].islower():
                return value
        msg = f"Unknown dependency configuration '{value}'"
        raise ValueError(msg)

    @property
    def target(self) -> ArtifactCoordinate:
        return ArtifactCoordinate.parse(self.coordinate)

    @property
    def variant_scope(self) -> str | None:
        """Variant prefix of a scoped configuration, e.g. ``debug`` for ``debugImplementation``."""

        if self.configuration in _BASE_CONFIGURATIONS:
            return None
        for base in _BASE_CONFIGURATIONS:
            suffix = base[0].upper() + base[1:]
            if self.configuration.endswith(suffix):
                return self.configuration[: -len(suffix)]
        return None

    @property
    def is_desugaring(self) -> bool:
        return self.configuration == "coreLibraryDesugaring" or (
            self.variant_scope is not None
            and self.configuration == _scoped(self.variant_scope, "coreLibraryDesugaring")
        )

    def applies_to(self, variant: str) -> bool:
        """Return True when this dependency participates in ``variant``'s classpath."""

        if self.configuration in _BASE_CONFIGURATIONS:
            return True
        return any(self.configuration == _scoped(variant, base) for base in _BASE_CONFIGURATIONS)


class SigningConfig(DomainModel):
    """Signing material reference handed to the execution engine."""

    store_file: str
    key_alias: str
    store_password_env: str | None = None
    key_password_env: str | None = None


class VariantDefinition(DomainModel):
    """A build variant and the signing configuration it selects."""

    name: Annotated[str, Field(min_length=1)]
    signing: str | None = None
    minify: bool = False


class ModuleDefinition(DomainModel):
    """Per-module declarations. Toolchain versions come from the registry."""

    name: str
    namespace: str | None = None
    application_id: str | None = None
    plugins: tuple[str, ...] = ()
    compile_sdk: Annotated[int | None, Field(ge=1)] = None
    min_sdk: Annotated[int, Field(ge=1)] = 21
    target_sdk: Annotated[int | None, Field(ge=1)] = None
    ndk_version: str | None = None
    version_code: Annotated[int, Field(ge=1)] = 1
    version_name: str = "1.0"
    multidex: bool = False
    desugaring: bool = False
    dependencies: tuple[DependencyDeclaration, ...] = ()
    depends_on: tuple[str, ...] = ()
    variants: tuple[VariantDefinition, ...] = (
        VariantDefinition(name=BuildVariant.DEBUG.value, signing=_DEBUG_SIGNING),
        VariantDefinition(name=BuildVariant.RELEASE.value),
    )
    signing_configs: dict[str, SigningConfig] = Field(default_factory=dict)
    output_dir: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        if not _MODULE_NAME.match(value) or value in {".", ".."}:
            msg = f"Invalid module name '{value}'"
            raise ValueError(msg)
        return value

    @model_validator(mode="after")
    def check_consistency(self) -> ModuleDefinition:
        if self.target_sdk is not None and self.target_sdk < self.min_sdk:
            msg = f"target_sdk {self.target_sdk} is below min_sdk {self.min_sdk}"
            raise ValueError(msg)
        names = [variant.name for variant in self.variants]
        if len(set(names)) != len(names):
            msg = f"Duplicate variant names in module '{self.name}'"
            raise ValueError(msg)
        known = set(self.signing_configs) | {_DEBUG_SIGNING}
        for variant in self.variants:
            if variant.signing is not None and variant.signing not in known:
                msg = f"Variant '{variant.name}' references unknown signing config '{variant.signing}'"
                raise ValueError(msg)
        for dep in self.dependencies:
            scope = dep.variant_scope
            if scope is not None and scope not in names:
                msg = (
                    f"Dependency '{dep.coordinate}' uses configuration '{dep.configuration}' "
                    f"but module '{self.name}' has no variant '{scope}'"
                )
                raise ValueError(msg)
        if self.desugaring and not any(dep.is_desugaring for dep in self.dependencies):
            msg = f"Module '{self.name}' enables desugaring without a coreLibraryDesugaring dependency"
            raise ValueError(msg)
        return self

    def variant_names(self) -> tuple[str, ...]:
        return tuple(variant.name for variant in self.variants)


class OverrideDeclaration(DomainModel):
    """Pins an artifact either to a literal version or to a registry key."""

    artifact: str
    version: str | None = None
    version_key: VersionKey | None = None

    @field_validator("artifact")
    @classmethod
    def validate_artifact(cls, value: str) -> str:
        coordinate = _parse_coordinate(value)
        if coordinate.version is not None:
            msg = f"Override artifact '{value}' must not carry a version"
            raise ValueError(msg)
        return coordinate.artifact

    @model_validator(mode="after")
    def exactly_one_source(self) -> OverrideDeclaration:
        if (self.version is None) == (self.version_key is None):
            msg = f"Override for '{self.artifact}' needs exactly one of version or version_key"
            raise ValueError(msg)
        return self


class ArtifactManifest(DomainModel):
    """What a published artifact version requires, plus platform constraints."""

    requires: tuple[str, ...] = ()
    constraints: dict[str, str] = Field(default_factory=dict)

    @field_validator("requires")
    @classmethod
    def validate_requires(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(str(_parse_coordinate(item)) for item in value)

    @field_validator("constraints")
    @classmethod
    def validate_constraints(cls, value: dict[str, str]) -> dict[str, str]:
        normalized: dict[str, str] = {}
        for artifact, version in value.items():
            coordinate = _parse_coordinate(artifact)
            normalized[coordinate.artifact] = version
        return normalized


class ToolchainDefinition(DomainModel):
    """Compiler settings applied uniformly to every module."""

    free_compiler_args: tuple[str, ...] = ()


class ProjectDefinition(DomainModel):
    """Root project: versions, resolution policy and the module set."""

    name: Annotated[str, Field(min_length=1)]
    versions: dict[VersionKey, str] = Field(default_factory=dict)
    repositories: tuple[RepositoryId, ...] = (RepositoryId.GOOGLE, RepositoryId.MAVEN_CENTRAL)
    overrides: tuple[OverrideDeclaration, ...] = ()
    catalog: dict[str, ArtifactManifest] = Field(default_factory=dict)
    build_dir_offset: str | None = None
    toolchain: ToolchainDefinition = ToolchainDefinition()
    modules: Annotated[tuple[ModuleDefinition, ...], Field(min_length=1)]
    all_modules_depend_on: str | None = None

    @field_validator("catalog")
    @classmethod
    def validate_catalog(cls, value: dict[str, ArtifactManifest]) -> dict[str, ArtifactManifest]:
        normalized: dict[str, ArtifactManifest] = {}
        for key, manifest in value.items():
            coordinate = _parse_coordinate(key)
            if coordinate.version is None:
                msg = f"Catalog entry '{key}' must be a versioned coordinate"
                raise ValueError(msg)
            normalized[str(coordinate)] = manifest
        return normalized

    @model_validator(mode="after")
    def unique_modules(self) -> ProjectDefinition:
        names = [module.name for module in self.modules]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            msg = f"Duplicate module declarations: {', '.join(duplicates)}"
            raise ValueError(msg)
        return self

    def module(self, name: str) -> ModuleDefinition:
        for module in self.modules:
            if module.name == name:
                return module
        msg = f"Module '{name}' is not declared"
        raise ConfigurationError(msg)


__all__ = [
    "ArtifactManifest",
    "DependencyDeclaration",
    "ModuleDefinition",
    "OverrideDeclaration",
    "ProjectDefinition",
    "SigningConfig",
    "ToolchainDefinition",
    "VariantDefinition",
]
