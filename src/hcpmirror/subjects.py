"""
Subject set resolution.

Turns the "which subjects" input (a single ID or a subject-list file) into an
ordered list of subject identifiers.
"""

from __future__ import annotations

from pathlib import Path

from hcpmirror.exceptions import ConfigurationError


def read_subject_list(path: str | Path) -> list[str]:
    """
    Read whitespace-separated subject IDs from a file.

    Tokens may be spread over any number of lines. Order is preserved and
    nothing is deduplicated or validated.

    Raises:
        ConfigurationError: If the file cannot be read
    """
    path = Path(path)
    try:
        content = path.read_text()
    except OSError as e:
        reason = e.strerror or str(e)
        raise ConfigurationError(f"Cannot read subject list {path}: {reason}") from e
    return content.split()


def resolve_subjects(subject: str | None = None, subject_list: str | Path | None = None) -> list[str]:
    """
    Resolve exactly one of a subject ID or a subject-list file.

    Args:
        subject: A single subject identifier
        subject_list: Path to a file of whitespace-separated identifiers

    Returns:
        Subject identifiers in input order

    Raises:
        ConfigurationError: If both or neither are given, or the file is unreadable
    """
    if subject is not None and subject_list is not None:
        raise ConfigurationError("Specify only one of --subject or --subjlist")
    if subject is None and subject_list is None:
        raise ConfigurationError("One of --subject or --subjlist is required")
    if subject is not None and not subject.strip():
        raise ConfigurationError("--subject must not be empty")
    if subject is not None:
        return [subject]
    return read_subject_list(subject_list)  # type: ignore[arg-type]
