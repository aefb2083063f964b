"""Shared type aliases for the domain layer."""

from __future__ import annotations

from typing import NewType

ArtifactName = NewType("ArtifactName", str)
Edge = tuple[str, str]

__all__ = ["ArtifactName", "Edge"]
