"""
Remote sync driver.

For each subject, pulls the stage's subdirectories from the remote dataset
into the destination tree. Nothing local is ever deleted except the stage's
prune paths, so re-running is always safe.
"""

from __future__ import annotations

from hcpmirror.config.options import RunOptions
from hcpmirror.sync.types import Remover, RunSummary, SubjectResult, TreeSync
from hcpmirror.utils.logging import get_logger

logger = get_logger("hcpmirror.sync.remote")


def run_remote_sync(options: RunOptions, *, tree_sync: TreeSync, remover: Remover) -> RunSummary:
    """
    Sync every subject in ``options`` from the remote dataset.

    Subjects are processed one at a time in input order. Transfer failures
    propagate and may leave the current subject partially synced.

    Returns:
        RunSummary with files transferred per subject and subdirectory
    """
    plan = options.plan
    options.dest.mkdir(parents=True, exist_ok=True)
    summary = RunSummary()

    logger.info(
        f"Syncing {len(options.subjects)} subject(s) at stage '{plan.stage}' into {options.dest}"
    )
    for subject in options.subjects:
        subject_dir = options.dest / subject
        subject_dir.mkdir(parents=True, exist_ok=True)
        result = SubjectResult(subject=subject, path=subject_dir)
        logger.info(f"Subject {subject}")

        for subdir in plan.subdirectories:
            local_dir = subject_dir / subdir
            local_dir.mkdir(parents=True, exist_ok=True)
            result.counts[subdir] = tree_sync.sync_tree(f"{subject}/{subdir}", local_dir)
            logger.info(f"  {subdir}: {result.counts[subdir]} file(s) transferred")

        for relative in plan.prune:
            target = subject_dir / relative
            if remover.remove_tree(target):
                result.pruned.append(target)
                logger.info(f"  pruned {target}")

        summary.results.append(result)

    return summary
