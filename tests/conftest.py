from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import pytest

# Ensure the src/ directory is importable when tests run via `uv run pytest`.
sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from buildwire.domain import ProjectDefinition  # noqa: E402
from buildwire.loader import parse_project  # noqa: E402

KOTLIN = "org.jetbrains.kotlin"


def sample_payload() -> dict[str, Any]:
    """Flutter-style Android project: an app module plus two plugin modules."""

    return {
        "name": "pantry_pal",
        "versions": {"languageVersion": "1.8.10", "platformCompatibilityVersion": "1.8"},
        "repositories": ["google", "mavenCentral"],
        "overrides": [
            {"artifact": f"{KOTLIN}:kotlin-stdlib", "version_key": "languageVersion"},
            {"artifact": f"{KOTLIN}:kotlin-stdlib-common", "version_key": "languageVersion"},
            {"artifact": f"{KOTLIN}:kotlin-stdlib-jdk7", "version_key": "languageVersion"},
            {"artifact": f"{KOTLIN}:kotlin-stdlib-jdk8", "version_key": "languageVersion"},
            {"artifact": f"{KOTLIN}:kotlin-reflect", "version_key": "languageVersion"},
        ],
        "toolchain": {"free_compiler_args": ["-Xskip-metadata-version-check", "-Xuse-ir"]},
        "catalog": {
            "com.google.firebase:firebase-bom:33.12.0": {
                "constraints": {
                    "com.google.firebase:firebase-analytics": "22.4.0",
                    "com.google.firebase:firebase-auth": "23.2.0",
                    "com.google.firebase:firebase-firestore": "25.1.3",
                }
            },
            "com.google.firebase:firebase-auth:23.2.0": {
                "requires": [
                    f"{KOTLIN}:kotlin-stdlib:1.9.22",
                    "com.google.android.gms:play-services-auth:21.0.0",
                ]
            },
            "com.google.android.gms:play-services-auth:21.0.0": {
                "requires": [f"{KOTLIN}:kotlin-stdlib-jdk8:1.6.0"]
            },
            "com.google.firebase:firebase-firestore:25.1.3": {
                "requires": [f"{KOTLIN}:kotlin-stdlib:1.7.10", "io.grpc:grpc-okhttp:1.62.2"]
            },
            "io.grpc:grpc-okhttp:1.62.2": {"requires": ["com.squareup.okio:okio:3.6.0"]},
            "com.squareup.okio:okio:3.6.0": {"requires": [f"{KOTLIN}:kotlin-stdlib:1.9.10"]},
            f"{KOTLIN}:kotlin-stdlib:1.8.10": {
                "requires": [f"{KOTLIN}:kotlin-stdlib-common:1.8.10", "org.jetbrains:annotations:13.0"]
            },
            f"{KOTLIN}:kotlin-stdlib:1.9.22": {
                "requires": [
                    f"{KOTLIN}:kotlin-stdlib-common:1.9.22",
                    "org.jetbrains:annotations:23.0.0",
                ]
            },
            f"{KOTLIN}:kotlin-stdlib-jdk8:1.8.10": {
                "requires": [f"{KOTLIN}:kotlin-stdlib-jdk7:1.8.10", f"{KOTLIN}:kotlin-stdlib:1.8.10"]
            },
            "com.google.firebase:firebase-common:21.0.0": {
                "requires": [f"{KOTLIN}:kotlin-stdlib:1.9.0", "com.squareup.okio:okio:3.2.0"]
            },
        },
        "all_modules_depend_on": "app",
        "modules": [
            {
                "name": "app",
                "namespace": "com.tbd.pantry_pal",
                "application_id": "com.tbd.pantry_pal",
                "plugins": ["com.android.application", "kotlin-android"],
                "min_sdk": 23,
                "target_sdk": 34,
                "ndk_version": "27.0.12077973",
                "multidex": True,
                "desugaring": True,
                "dependencies": [
                    {
                        "coordinate": "com.android.tools:desugar_jdk_libs:1.2.2",
                        "configuration": "coreLibraryDesugaring",
                    },
                    {"coordinate": f"{KOTLIN}:kotlin-stdlib:1.8.10"},
                    {"coordinate": f"{KOTLIN}:kotlin-stdlib-jdk8:1.8.10"},
                    {"coordinate": "com.google.firebase:firebase-bom:33.12.0", "platform": True},
                    {"coordinate": "com.google.firebase:firebase-analytics"},
                    {"coordinate": "com.google.firebase:firebase-auth"},
                    {"coordinate": "com.google.firebase:firebase-firestore"},
                    {"coordinate": "androidx.multidex:multidex:2.0.1"},
                    {
                        "coordinate": "com.squareup.leakcanary:leakcanary-android:2.14",
                        "configuration": "debugImplementation",
                    },
                ],
                "variants": [
                    {"name": "debug", "signing": "debug"},
                    {"name": "release", "signing": "debug"},
                ],
            },
            {
                "name": "firebase_core",
                "dependencies": [{"coordinate": "com.google.firebase:firebase-common:21.0.0"}],
            },
            {
                "name": "cloud_firestore",
                "depends_on": ["firebase_core"],
                "dependencies": [{"coordinate": "com.squareup.okio:okio:3.6.0"}],
            },
        ],
    }


@pytest.fixture()
def project_payload() -> dict[str, Any]:
    return sample_payload()


@pytest.fixture()
def project() -> ProjectDefinition:
    return parse_project(sample_payload())


@pytest.fixture()
def project_file(tmp_path: Path) -> Path:
    source = tmp_path / "android"
    source.mkdir()
    path = source / "buildwire.json"
    path.write_text(json.dumps(sample_payload()), encoding="utf-8")
    return path
