"""Dependency resolution and override rule exports."""

from .engine import ResolutionOverrideEngine
from .rules import OverrideRule, OverrideRuleSet

__all__ = ["OverrideRule", "OverrideRuleSet", "ResolutionOverrideEngine"]
