"""Toolchain version registry exports."""

from .registry import VersionRegistry

__all__ = ["VersionRegistry"]
