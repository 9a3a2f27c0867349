"""
deproot.project — Project discovery and loading.

A project root is the nearest directory (searching upward) that contains
a manifest.json. The lock.json beside it is optional.

    <workspace>/src/github.com/me/app/
    ├── manifest.json    ← required
    ├── lock.json        ← optional
    └── cmd/app/         ← discovery from here finds ../../
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from deproot.errors import NoManifestFound
from deproot.lock import LOCK_NAME, Lock, read_lock
from deproot.manifest import MANIFEST_NAME, Manifest, read_manifest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Project:
    """A loaded project."""
    abs_root: Path
    import_root: str
    manifest: Manifest
    lock: Lock | None = None

    @property
    def manifest_path(self) -> Path:
        return self.abs_root / MANIFEST_NAME

    @property
    def lock_path(self) -> Path:
        return self.abs_root / LOCK_NAME

    @property
    def has_lock(self) -> bool:
        return self.lock is not None


def has_manifest(directory: str | Path) -> bool:
    return (Path(directory) / MANIFEST_NAME).is_file()


def find_project_root(start: str | Path, stop_at: str | Path | None = None) -> Path:
    """Search upward from `start` for a directory containing a manifest.

    Args:
        start: Directory to start from
        stop_at: Last directory to check (None = filesystem root)

    Returns:
        The project root directory

    Raises:
        NoManifestFound: No manifest between start and the boundary
    """
    start = Path(start)
    boundary = Path(stop_at) if stop_at is not None else None

    for parent in [start, *start.parents]:
        if has_manifest(parent):
            logger.debug("found %s in %s", MANIFEST_NAME, parent)
            return parent
        if boundary is not None and parent == boundary:
            break

    raise NoManifestFound(
        f"No {MANIFEST_NAME} found in {start} or any parent directory"
    )


def read_project_files(root: Path) -> tuple[Manifest, Lock | None]:
    """Parse the manifest and, when present, the lock at `root`."""
    manifest = read_manifest(root / MANIFEST_NAME)

    lock_path = root / LOCK_NAME
    lock = None
    if lock_path.exists():
        lock = read_lock(lock_path)
    else:
        logger.debug("no %s in %s", LOCK_NAME, root)

    return manifest, lock
