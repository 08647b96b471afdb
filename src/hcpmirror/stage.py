"""
Stage policy.

A stage names how complete a subject's data tree should be. Each stage maps
to a fixed, ordered set of top-level subject subdirectories and an optional
set of paths pruned once those subdirectories are in place. Both the remote
sync and the local link drivers read this one table.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from hcpmirror.exceptions import ConfigurationError


class Stage(str, Enum):
    """Tier of data completeness, ordered unproc < struct < proc."""

    UNPROC = "unproc"
    STRUCT = "struct"
    PROC = "proc"

    def __str__(self) -> str:
        return self.value


DEFAULT_STAGE = Stage.UNPROC


@dataclass(frozen=True)
class StagePlan:
    """Subdirectories to materialize for a stage, and what to prune afterwards.

    Prune paths are relative to the subject directory.
    """

    stage: Stage
    subdirectories: tuple[str, ...]
    prune: tuple[str, ...] = ()

    @property
    def prunes(self) -> bool:
        return bool(self.prune)


_BASE = ("release-notes", "unprocessed")
_PREPROCESSED = _BASE + ("T1w", "MNINonLinear")

# struct needs MNINonLinear for the structural outputs, but not the
# functional Results tree that only proc analyses use.
STAGE_PLANS: dict[Stage, StagePlan] = {
    Stage.UNPROC: StagePlan(Stage.UNPROC, _BASE),
    Stage.STRUCT: StagePlan(Stage.STRUCT, _PREPROCESSED, prune=("MNINonLinear/Results",)),
    Stage.PROC: StagePlan(Stage.PROC, _PREPROCESSED),
}


def parse_stage(value: str | Stage | None) -> Stage:
    """
    Parse a stage name.

    Args:
        value: One of ``unproc``, ``struct``, ``proc``; None means the default

    Returns:
        Stage member

    Raises:
        ConfigurationError: If the value is not a known stage
    """
    if value is None:
        return DEFAULT_STAGE
    if isinstance(value, Stage):
        return value
    try:
        return Stage(value)
    except ValueError:
        valid = ", ".join(s.value for s in Stage)
        raise ConfigurationError(f"Invalid stage '{value}' (expected one of: {valid})") from None


def subdirectories_for(stage: str | Stage) -> StagePlan:
    """Return the materialization plan for a stage."""
    return STAGE_PLANS[parse_stage(stage)]
