"""
Local filesystem operations for the link tool.

Reference materializers expose a source entry at a destination path without
duplicating its storage: copy-on-write clones (default) or symbolic links.
Also provides the permission and removal helpers used around them.
"""

from __future__ import annotations

import errno
import os
import shutil
import stat
from pathlib import Path

try:
    import fcntl
except ImportError:  # not available on Windows
    fcntl = None  # type: ignore[assignment]

from hcpmirror.config.options import LinkMode
from hcpmirror.utils.logging import FSOPS_LOGGER, get_logger

logger = get_logger("hcpmirror.connections.filesystem")
ops_logger = get_logger(FSOPS_LOGGER)

# linux/fs.h: _IOW(0x94, 9, int)
FICLONE = 0x40049409

_CLONE_UNSUPPORTED = {
    errno.EOPNOTSUPP,
    errno.ENOTTY,
    errno.EXDEV,
    errno.EINVAL,
    errno.ENOSYS,
    errno.EPERM,
}


def clone_file(src: str, dst: str) -> str:
    """
    Copy a file as a copy-on-write clone, preserving metadata.

    The clone shares data blocks with ``src`` until either side is written.
    Filesystems without reflink support (or cross-device pairs) get a regular
    copy instead. Signature matches ``shutil.copytree``'s ``copy_function``.
    """
    cloned = False
    if fcntl is not None:
        with open(src, "rb") as fsrc, open(dst, "wb") as fdst:
            try:
                fcntl.ioctl(fdst.fileno(), FICLONE, fsrc.fileno())
                cloned = True
            except OSError as e:
                if e.errno not in _CLONE_UNSUPPORTED:
                    raise
    if not cloned:
        logger.debug(f"Reflink unsupported for {src}, copying")
        shutil.copyfile(src, dst)
    shutil.copystat(src, dst)
    return dst


class CloneMaterializer:
    """Materialize references as copy-on-write clones of the source tree."""

    mode = LinkMode.CLONE

    def materialize_reference(self, source: Path, dest: Path) -> None:
        ops_logger.info(f"clone: {source} -> {dest}")
        if source.is_dir() and not source.is_symlink():
            shutil.copytree(source, dest, symlinks=True, copy_function=clone_file)
        elif source.is_symlink():
            os.symlink(os.readlink(source), dest)
        else:
            clone_file(str(source), str(dest))


class SymlinkMaterializer:
    """Materialize references as absolute symbolic links to the source."""

    mode = LinkMode.SYMLINK

    def materialize_reference(self, source: Path, dest: Path) -> None:
        target = source.absolute()
        ops_logger.info(f"link: {dest} -> {target}")
        os.symlink(target, dest, target_is_directory=target.is_dir())


def build_materializer(mode: LinkMode | str) -> CloneMaterializer | SymlinkMaterializer:
    """Return the materializer for a link mode."""
    mode = LinkMode(mode)
    if mode is LinkMode.SYMLINK:
        return SymlinkMaterializer()
    return CloneMaterializer()


def _add_owner_write(path: str) -> None:
    mode = os.lstat(path).st_mode
    if not mode & stat.S_IWUSR:
        os.chmod(path, stat.S_IMODE(mode) | stat.S_IWUSR)


def make_writable(path: Path) -> None:
    """
    Grant owner write permission on ``path`` and everything below it.

    Symbolic links are skipped, never followed, so link targets outside the
    tree keep their permissions.
    """
    if path.is_symlink() or not path.exists():
        return
    _add_owner_write(str(path))
    if not path.is_dir():
        return
    for root, dirs, files in os.walk(path):
        for name in dirs + files:
            full = os.path.join(root, name)
            if not os.path.islink(full):
                _add_owner_write(full)


class TreeRemover:
    """Delete directory trees, clearing write protection first."""

    def remove_tree(self, path: Path) -> bool:
        """
        Remove ``path`` recursively.

        Returns:
            False if nothing existed at ``path``, True otherwise
        """
        if path.is_symlink() or path.is_file():
            ops_logger.info(f"remove: {path}")
            path.unlink()
            return True
        if not path.exists():
            return False
        make_writable(path)
        ops_logger.info(f"remove: {path}")
        shutil.rmtree(path)
        return True
