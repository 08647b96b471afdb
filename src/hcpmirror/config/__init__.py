"""
Configuration management.

YAML config file loading, environment resolution, and run option validation.
"""

from hcpmirror.config.loader import Config, load_config
from hcpmirror.config.options import LinkMode, RunOptions, Tool, resolve_options
from hcpmirror.config.resolver import resolve_config

__all__ = [
    "load_config",
    "Config",
    "resolve_config",
    "resolve_options",
    "RunOptions",
    "LinkMode",
    "Tool",
]
