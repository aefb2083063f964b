"""Output layout exports."""

from .paths import DEFAULT_BUILD_DIR_OFFSET, OutputPathRemapper, module_output_path, root_output_path

__all__ = [
    "DEFAULT_BUILD_DIR_OFFSET",
    "OutputPathRemapper",
    "module_output_path",
    "root_output_path",
]
