"""Enumerations used across the buildwire domain layer."""

from __future__ import annotations

from enum import StrEnum


class VersionKey(StrEnum):
    """Toolchain version identifiers shared by every module."""

    LANGUAGE_VERSION = "languageVersion"
    PLATFORM_COMPATIBILITY_VERSION = "platformCompatibilityVersion"


class RepositoryId(StrEnum):
    """Artifact repositories the execution engine may resolve from."""

    GOOGLE = "google"
    MAVEN_CENTRAL = "mavenCentral"
    MAVEN_LOCAL = "mavenLocal"


class BuildVariant(StrEnum):
    """Build variants every application module provides by default."""

    DEBUG = "debug"
    RELEASE = "release"
