"""
Local link materializer.

Rebuilds ``dest/<subject>`` from ``source/<subject>`` as lightweight
references, scoped by stage. An existing subject directory is only deleted
after the user confirms; a refusal stops the whole run.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from hcpmirror.config.options import RunOptions
from hcpmirror.connections.filesystem import make_writable
from hcpmirror.exceptions import OverwriteDeclined
from hcpmirror.sync.types import ReferenceMaterializer, Remover, RunSummary, SubjectResult
from hcpmirror.utils.logging import get_logger

logger = get_logger("hcpmirror.sync.link")


def run_local_link(
    options: RunOptions,
    *,
    materializer: ReferenceMaterializer,
    confirm: Callable[[str], bool],
    remover: Remover,
    grant_write: Callable[[Path], None] = make_writable,
) -> RunSummary:
    """
    Materialize every subject in ``options`` from the local source mirror.

    Args:
        options: Validated link options (``source`` must be set)
        materializer: Creates one reference per source entry
        confirm: Asked before an existing subject directory is deleted
        remover: Deletes replaced subject trees and prune paths
        grant_write: Recursive owner-write grant, applied to the
            destination root after each subject

    Returns:
        RunSummary with entries materialized per subject and subdirectory

    Raises:
        OverwriteDeclined: When the user refuses to replace a subject
            directory; earlier subjects are left as they are
    """
    if options.source is None:
        raise ValueError("run_local_link requires options.source")

    plan = options.plan
    options.dest.mkdir(parents=True, exist_ok=True)
    summary = RunSummary()

    logger.info(
        f"Linking {len(options.subjects)} subject(s) at stage '{plan.stage}' "
        f"from {options.source} into {options.dest}"
    )
    for subject in options.subjects:
        subject_dir = options.dest / subject
        result = SubjectResult(subject=subject, path=subject_dir)

        if subject_dir.exists() or subject_dir.is_symlink():
            logger.warning(f"{subject_dir} already exists and will be deleted")
            if not confirm(f"Delete {subject_dir} and recreate it?"):
                raise OverwriteDeclined(subject_dir)
            grant_write(subject_dir)
            remover.remove_tree(subject_dir)
            result.replaced = True

        logger.info(f"Subject {subject}")
        for subdir in plan.subdirectories:
            source_dir = options.source / subject / subdir
            dest_dir = subject_dir / subdir
            dest_dir.mkdir(parents=True, exist_ok=True)

            entries = sorted(source_dir.iterdir(), key=lambda p: p.name)
            for entry in entries:
                materializer.materialize_reference(entry, dest_dir / entry.name)
            result.counts[subdir] = len(entries)
            logger.info(f"  {subdir}: {len(entries)} entr{'y' if len(entries) == 1 else 'ies'}")

        # Clones keep the source's (often read-only) modes
        grant_write(options.dest)

        for relative in plan.prune:
            target = subject_dir / relative
            if remover.remove_tree(target):
                result.pruned.append(target)
                logger.info(f"  pruned {target}")

        summary.results.append(result)

    return summary
