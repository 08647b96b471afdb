"""
hcpmirror exception hierarchy.

All domain-specific exceptions inherit from HcpMirrorError, so callers can
catch any provisioning error with a single base class while still handling
the individual cases where it matters.

Hierarchy::

    HcpMirrorError
    ├── ConfigurationError   - CLI options, subject lists, config files
    └── OverwriteDeclined    - user refused to replace an existing subject tree

Failures from the filesystem or the object store (``OSError``, botocore
errors) are not wrapped; they propagate as raised.
"""

from __future__ import annotations

from pathlib import Path


class HcpMirrorError(Exception):
    """Base exception for all hcpmirror errors."""

    def __init__(self, message: str, *, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


# --- Configuration -----------------------------------------------------------


class ConfigurationError(HcpMirrorError):
    """Raised when options, subject lists or config files are invalid.

    A single instance may carry several problems found in one validation
    pass; ``errors`` lists them in the order they were detected.
    """

    def __init__(self, errors: str | list[str]) -> None:
        if isinstance(errors, str):
            errors = [errors]
        super().__init__("\n".join(errors), details={"errors": list(errors)})
        self.errors = list(errors)


# --- Destructive operations --------------------------------------------------


class OverwriteDeclined(HcpMirrorError):
    """Raised when the user declines deletion of an existing subject tree.

    This aborts the whole run. It is not a failure of the tool itself, so the
    CLI reports it as an informational message.
    """

    def __init__(self, path: str | Path) -> None:
        super().__init__(f"Not replacing existing directory: {path}", details={"path": str(path)})
        self.path = Path(path)
