"""Module graph exports."""

from .graph import ModuleGraph

__all__ = ["ModuleGraph"]
