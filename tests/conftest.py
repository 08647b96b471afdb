"""
Shared fixtures: logger isolation, an on-disk HCP-style source mirror, and
fake collaborators for the drivers.
"""

import logging
from pathlib import Path

import pytest

from hcpmirror.utils.logging import FSOPS_LOGGER, ROOT_LOGGER

SUBDIRS = ("release-notes", "unprocessed", "T1w", "MNINonLinear")


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers a CLI run attached to captured (now closed) streams."""
    yield
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    logging.getLogger(FSOPS_LOGGER).setLevel(logging.NOTSET)


def build_subject(root: Path, subject: str) -> Path:
    """Create a small HCP-like subject tree under ``root``."""
    base = root / subject
    (base / "release-notes").mkdir(parents=True)
    (base / "release-notes" / "Structural_preproc.txt").write_text("notes")
    (base / "unprocessed" / "3T" / "T1w_MPR1").mkdir(parents=True)
    (base / "unprocessed" / "3T" / "T1w_MPR1" / f"{subject}_3T_T1w_MPR1.nii.gz").write_bytes(b"t1-raw")
    (base / "unprocessed" / "3T" / "rfMRI_REST1_LR").mkdir(parents=True)
    (base / "T1w").mkdir()
    (base / "T1w" / "T1w_acpc_dc_restore.nii.gz").write_bytes(b"t1-acpc")
    (base / "MNINonLinear" / "Results" / "rfMRI_REST1_LR").mkdir(parents=True)
    (base / "MNINonLinear" / "Results" / "rfMRI_REST1_LR" / "rfMRI_REST1_LR.nii.gz").write_bytes(b"bold")
    (base / "MNINonLinear" / "T1w.nii.gz").write_bytes(b"t1-mni")
    return base


@pytest.fixture
def source_root(tmp_path):
    root = tmp_path / "src"
    build_subject(root, "100307")
    build_subject(root, "100408")
    return root


@pytest.fixture
def dest_root(tmp_path):
    return tmp_path / "dst"


class FakeTreeSync:
    """Copies from an in-memory {remote_path: {relative: bytes}} store."""

    def __init__(self, remote: dict[str, dict[str, bytes]] | None = None):
        self.remote = remote or {}
        self.calls: list[tuple[str, Path]] = []

    def sync_tree(self, remote_path: str, local_path: Path) -> int:
        self.calls.append((remote_path, local_path))
        transferred = 0
        for relative, content in self.remote.get(remote_path, {}).items():
            target = local_path / relative
            if target.exists() and target.read_bytes() == content:
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
            transferred += 1
        return transferred


class RecordingMaterializer:
    """Records calls and creates an empty marker file per entry."""

    def __init__(self):
        self.calls: list[tuple[Path, Path]] = []

    def materialize_reference(self, source: Path, dest: Path) -> None:
        self.calls.append((source, dest))
        dest.write_text(str(source))


class ScriptedConfirm:
    """Returns scripted answers and records every prompt."""

    def __init__(self, *answers: bool):
        self.answers = list(answers)
        self.prompts: list[str] = []

    def __call__(self, prompt: str) -> bool:
        self.prompts.append(prompt)
        return self.answers.pop(0) if self.answers else False
