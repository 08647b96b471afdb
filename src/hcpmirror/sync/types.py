"""
Type definitions for the provisioning drivers and their collaborators.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol


class TreeSync(Protocol):
    """
    One-way, non-deleting, idempotent transfer of a remote tree.

    ``remote_path`` is relative to the dataset root (``<subject>/<subdir>``).
    Returns the number of files transferred.
    """

    def sync_tree(self, remote_path: str, local_path: Path) -> int: ...


class ReferenceMaterializer(Protocol):
    """Expose ``source`` at ``dest`` without duplicating its storage."""

    def materialize_reference(self, source: Path, dest: Path) -> None: ...


class Remover(Protocol):
    """Recursive delete; returns False when the path did not exist."""

    def remove_tree(self, path: Path) -> bool: ...


@dataclass
class SubjectResult:
    """What one subject's processing produced."""

    subject: str
    path: Path
    # subdirectory -> files transferred (sync) or entries materialized (link)
    counts: dict[str, int] = field(default_factory=dict)
    pruned: list[Path] = field(default_factory=list)
    replaced: bool = False

    @property
    def total(self) -> int:
        return sum(self.counts.values())


@dataclass
class RunSummary:
    """Results of a whole run, one entry per processed subject."""

    results: list[SubjectResult] = field(default_factory=list)

    @property
    def subjects(self) -> list[str]:
        return [r.subject for r in self.results]

    def as_dict(self) -> dict:
        return {
            "subjects": len(self.results),
            "items": sum(r.total for r in self.results),
            "replaced": sum(1 for r in self.results if r.replaced),
            "pruned": [str(p) for r in self.results for p in r.pruned],
        }
