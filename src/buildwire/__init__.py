"""Configuration-phase engine for multi-module mobile builds."""

from .exceptions import BuildwireError, ConfigurationError, CyclicDependencyError, MissingKeyError

__version__ = "0.1.0"

__all__ = [
    "BuildwireError",
    "ConfigurationError",
    "CyclicDependencyError",
    "MissingKeyError",
    "__version__",
]
