"""Core utilities for cfimport."""

from cfimport.core.config import (
    ImportOptions,
    get_global_config_path,
    load_global_config,
    resolve_options,
)

__all__ = [
    "ImportOptions",
    "get_global_config_path",
    "load_global_config",
    "resolve_options",
]
