"""
Configuration resolution and environment variable substitution.
"""

import os
import re
from typing import Any


def resolve_config(config_data: dict[str, Any]) -> dict[str, Any]:
    """
    Resolve configuration with environment variable substitution.

    Substitutes ``${VAR_NAME}`` in every string value. Variables that are not
    set are left verbatim.

    Args:
        config_data: Configuration dictionary

    Returns:
        Resolved configuration
    """
    return _resolve_value(config_data)


def _resolve_value(value: Any) -> Any:
    """Recursively resolve values in configuration."""
    if isinstance(value, dict):
        return {k: _resolve_value(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_resolve_value(item) for item in value]
    elif isinstance(value, str):
        return re.sub(r"\${([^}]+)}", lambda m: os.getenv(m.group(1), m.group(0)), value)
    else:
        return value
