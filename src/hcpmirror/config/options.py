"""
Run options.

Command-line values are validated once, up front, into an immutable
RunOptions value that the drivers receive by parameter.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from hcpmirror.exceptions import ConfigurationError
from hcpmirror.stage import DEFAULT_STAGE, Stage, StagePlan, parse_stage, subdirectories_for
from hcpmirror.subjects import resolve_subjects


class Tool(str, Enum):
    SYNC = "sync"
    LINK = "link"


class LinkMode(str, Enum):
    """How the link tool materializes references to source entries."""

    CLONE = "clone"
    SYMLINK = "symlink"


@dataclass(frozen=True)
class RunOptions:
    """Validated options for one run of either tool."""

    tool: Tool
    dest: Path
    subjects: tuple[str, ...]
    stage: Stage = DEFAULT_STAGE
    source: Path | None = None
    subject: str | None = None
    subject_list: Path | None = None
    quiet: bool = False
    mode: LinkMode = LinkMode.CLONE

    @property
    def plan(self) -> StagePlan:
        return subdirectories_for(self.stage)


def resolve_options(
    tool: Tool | str,
    *,
    dest: str | Path | None,
    subject: str | None = None,
    subject_list: str | Path | None = None,
    stage: str | None = None,
    source: str | Path | None = None,
    quiet: bool = False,
    mode: str | LinkMode | None = None,
) -> RunOptions:
    """
    Validate raw option values into RunOptions.

    Every problem is collected before raising, so one run reports all of
    its configuration errors together.

    Raises:
        ConfigurationError: Listing each invalid or missing option
    """
    tool = Tool(tool)
    errors: list[str] = []

    if tool is Tool.LINK and not source:
        errors.append("--source is required")
    if not dest:
        errors.append("--dest is required")

    resolved_stage = DEFAULT_STAGE
    try:
        resolved_stage = parse_stage(stage)
    except ConfigurationError as e:
        errors.extend(e.errors)

    resolved_mode = LinkMode.CLONE
    if mode is not None:
        try:
            resolved_mode = LinkMode(mode)
        except ValueError:
            valid = ", ".join(m.value for m in LinkMode)
            errors.append(f"Invalid mode '{mode}' (expected one of: {valid})")

    subjects: list[str] = []
    try:
        subjects = resolve_subjects(subject, subject_list)
    except ConfigurationError as e:
        errors.extend(e.errors)

    if errors:
        raise ConfigurationError(errors)

    return RunOptions(
        tool=tool,
        dest=Path(dest),  # type: ignore[arg-type]
        subjects=tuple(subjects),
        stage=resolved_stage,
        source=Path(source) if source else None,
        subject=subject,
        subject_list=Path(subject_list) if subject_list else None,
        quiet=quiet,
        mode=resolved_mode,
    )
