from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from pydantic import ValidationError

from buildwire import ConfigurationError
from buildwire.domain import ArtifactCoordinate, DependencyDeclaration, OverrideDeclaration, VersionKey
from buildwire.loader import load_project, parse_project

TOML_PROJECT = """
name = "pantry_pal"
all_modules_depend_on = "app"

[versions]
languageVersion = "1.8.10"
platformCompatibilityVersion = "1.8"

[[overrides]]
artifact = "org.jetbrains.kotlin:kotlin-stdlib"
version_key = "languageVersion"

[[modules]]
name = "app"
min_sdk = 23

[[modules.dependencies]]
coordinate = "org.jetbrains.kotlin:kotlin-stdlib:1.8.10"

[[modules]]
name = "firebase_core"
"""


def test_load_toml_project(tmp_path: Path) -> None:
    path = tmp_path / "buildwire.toml"
    path.write_text(TOML_PROJECT, encoding="utf-8")
    project = load_project(path)
    assert project.name == "pantry_pal"
    assert project.versions[VersionKey.LANGUAGE_VERSION] == "1.8.10"
    assert [module.name for module in project.modules] == ["app", "firebase_core"]
    assert project.module("app").min_sdk == 23


def test_load_json_project(project_file: Path) -> None:
    project = load_project(project_file)
    assert project.module("app").application_id == "com.tbd.pantry_pal"
    assert len(project.overrides) == 5


def test_unknown_keys_rejected(project_payload: dict[str, Any]) -> None:
    project_payload["modules"][0]["compileSdkVersion"] = 34
    with pytest.raises(ConfigurationError, match="compileSdkVersion"):
        parse_project(project_payload)


def test_unknown_version_key_rejected(project_payload: dict[str, Any]) -> None:
    project_payload["versions"]["gradleVersion"] = "8.0"
    with pytest.raises(ConfigurationError):
        parse_project(project_payload)


def test_duplicate_modules_rejected(project_payload: dict[str, Any]) -> None:
    project_payload["modules"].append({"name": "app"})
    with pytest.raises(ConfigurationError, match="Duplicate module"):
        parse_project(project_payload)


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="does not exist"):
        load_project(tmp_path / "absent.toml")


def test_unsupported_suffix(tmp_path: Path) -> None:
    path = tmp_path / "build.gradle.kts"
    path.write_text("plugins {}", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="unsupported"):
        load_project(path)


def test_malformed_json(tmp_path: Path) -> None:
    path = tmp_path / "buildwire.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="unable to parse"):
        load_project(path)


def test_json_must_be_object(tmp_path: Path) -> None:
    path = tmp_path / "buildwire.json"
    path.write_text(json.dumps(["app"]), encoding="utf-8")
    with pytest.raises(ConfigurationError, match="object"):
        load_project(path)


def test_coordinate_parsing() -> None:
    coordinate = ArtifactCoordinate.parse("org.jetbrains.kotlin:kotlin-stdlib:1.8.10")
    assert coordinate.artifact == "org.jetbrains.kotlin:kotlin-stdlib"
    assert coordinate.version == "1.8.10"
    assert str(coordinate.with_version("1.9.0")) == "org.jetbrains.kotlin:kotlin-stdlib:1.9.0"
    for raw in ("kotlin-stdlib", "a::1.0", "a:b:c:d"):
        with pytest.raises(ConfigurationError):
            ArtifactCoordinate.parse(raw)


def test_override_needs_exactly_one_version_source() -> None:
    with pytest.raises(ValidationError):
        OverrideDeclaration(artifact="org.jetbrains.kotlin:kotlin-stdlib")
    with pytest.raises(ValidationError):
        OverrideDeclaration(
            artifact="org.jetbrains.kotlin:kotlin-stdlib",
            version="1.8.10",
            version_key=VersionKey.LANGUAGE_VERSION,
        )


def test_dependency_configuration_validation() -> None:
    scoped = DependencyDeclaration(coordinate="a:b:1.0", configuration="releaseImplementation")
    assert scoped.applies_to("release")
    assert not scoped.applies_to("debug")
    with pytest.raises(ValidationError):
        DependencyDeclaration(coordinate="a:b:1.0", configuration="compile")


def test_signing_reference_must_exist(project_payload: dict[str, Any]) -> None:
    project_payload["modules"][0]["variants"] = [{"name": "release", "signing": "upload"}]
    with pytest.raises(ConfigurationError, match="unknown signing config"):
        parse_project(project_payload)


@pytest.mark.parametrize("suffix", [".toml", ".json"])
def test_invalid_utf8_is_a_configuration_error(tmp_path: Path, suffix: str) -> None:
    path = tmp_path / f"buildwire{suffix}"
    path.write_bytes(b'name = "\xff\xfe"\n')
    with pytest.raises(ConfigurationError, match="unable to parse") as excinfo:
        load_project(path)
    assert str(path) in str(excinfo.value)


def test_directory_is_a_configuration_error(tmp_path: Path) -> None:
    path = tmp_path / "buildwire.toml"
    path.mkdir()
    with pytest.raises(ConfigurationError, match="unable to read"):
        load_project(path)


def test_scoped_configuration_needs_declared_variant(project_payload: dict[str, Any]) -> None:
    project_payload["modules"][0]["dependencies"].append(
        {"coordinate": "com.example:x:1.0", "configuration": "releseImplementation"}
    )
    with pytest.raises(ConfigurationError, match="no variant 'relese'"):
        parse_project(project_payload)


def test_custom_variant_scope_accepted(project_payload: dict[str, Any]) -> None:
    app = project_payload["modules"][0]
    app["variants"].append({"name": "staging"})
    app["dependencies"].append(
        {"coordinate": "com.example:x:1.0", "configuration": "stagingImplementation"}
    )
    project = parse_project(project_payload)
    declared = project.module("app").dependencies[-1]
    assert declared.variant_scope == "staging"
    assert declared.applies_to("staging")


def test_desugaring_requires_library(project_payload: dict[str, Any]) -> None:
    app = project_payload["modules"][0]
    app["dependencies"] = [
        dep for dep in app["dependencies"] if dep.get("configuration") != "coreLibraryDesugaring"
    ]
    with pytest.raises(ConfigurationError, match="desugaring"):
        parse_project(project_payload)
