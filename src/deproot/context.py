"""
deproot.context — Workspace context.

The context holds the workspace root. Every project lives in its source
tree, named by its path relative to `<workspace>/src`:

    /home/me/work/src/github.com/pkg/errors  ⇄  "github.com/pkg/errors"

A Context is immutable and is passed explicitly to whatever needs it;
several can coexist (tests build one per temporary workspace).
"""

from __future__ import annotations

import logging
import os
import stat
from dataclasses import dataclass, field
from pathlib import Path

from deproot.config import workspace_candidates
from deproot.errors import (
    NoManifestFound,
    NoValidWorkspaceRoot,
    NoWorkspaceConfigured,
    PathNotInWorkspace,
    ProjectRootNotADirectory,
    ProjectRootNotFound,
)
from deproot.manifest import MANIFEST_NAME
from deproot.project import (
    Project, find_project_root, has_manifest, read_project_files,
)
from deproot.vcs import GitInspector, classify
from deproot.version import Version

logger = logging.getLogger(__name__)


SRC_DIR = "src"


@dataclass(frozen=True)
class Context:
    """Resolved workspace context."""
    workspace_root: Path
    vcs: GitInspector = field(default_factory=GitInspector, compare=False, repr=False)

    def __post_init__(self):
        object.__setattr__(
            self, "workspace_root", Path(os.path.abspath(self.workspace_root)),
        )

    @property
    def src_dir(self) -> Path:
        return self.workspace_root / SRC_DIR

    # ── path ⇄ project root ───────────────────

    def split_absolute_project_root(self, path: str | Path) -> str:
        """Turn an absolute path under <workspace>/src into a project root.

        Raises:
            PathNotInWorkspace: path is relative, outside the source
                tree, or the source tree itself
        """
        p = Path(path)
        if not p.is_absolute():
            raise PathNotInWorkspace(f"Not an absolute path: {path}")

        p = Path(os.path.normpath(p))
        rel = _relative_to(p, self.src_dir)
        if rel is None:
            # cwd discovery yields real paths; the root may be a symlink
            rel = _relative_to(p.resolve(), self.src_dir.resolve())
        if rel is None:
            raise PathNotInWorkspace(
                f"{p} is not within the workspace source tree {self.src_dir}"
            )

        root = rel.as_posix()
        if root in ("", "."):
            raise PathNotInWorkspace(
                f"{p} is the workspace source tree itself, not a project"
            )
        return root

    def absolute_project_root(self, root: str) -> Path:
        """Locate the directory of a project root.

        Raises:
            PathNotInWorkspace: root does not name a path under src
            ProjectRootNotFound: nothing exists there
            ProjectRootNotADirectory: a file exists there
        """
        parts = root.replace("\\", "/").split("/")
        if any(part in ("", ".", "..") for part in parts):
            raise PathNotInWorkspace(f"Invalid project root: {root!r}")

        path = self.src_dir.joinpath(*parts)
        try:
            st = path.stat()
        except FileNotFoundError:
            raise ProjectRootNotFound(f"No project at {path}") from None
        except OSError as e:
            raise ProjectRootNotFound(f"Cannot stat {path}: {e}") from e

        if not stat.S_ISDIR(st.st_mode):
            raise ProjectRootNotADirectory(f"{path} is a file, not a directory")
        return path

    # ── installed version ─────────────────────

    def version_in_workspace(self, root: str) -> Version:
        """Report the version currently checked out for a project root.

        Raises:
            ProjectRootError: the project directory is missing
            VCSQueryError: the directory is not a usable repository
        """
        path = self.absolute_project_root(root)
        version = classify(self.vcs.inspect(path))
        logger.debug("%s is at %r", root, version)
        return version

    # ── project loading ───────────────────────

    def load_project(self, hint: str | Path | None = None, search_up: bool = False) -> Project:
        """Find and load a project.

        Args:
            hint: Project directory (None/"" = discover upward from cwd).
                Relative hints are taken from cwd.
            search_up: Also search upward from a non-empty hint

        Returns:
            Project with its manifest and, if present, its lock

        Raises:
            NoManifestFound: no manifest where one was required
            ManifestSyntaxError: manifest is malformed
            LockSyntaxError: lock is malformed or unreadable
            PathNotInWorkspace: project is outside the workspace source tree
        """
        if hint:
            candidate = Path(hint)
            if not candidate.is_absolute():
                candidate = Path.cwd() / candidate
            candidate = Path(os.path.normpath(candidate))

            if search_up:
                abs_root = find_project_root(candidate)
            elif has_manifest(candidate):
                abs_root = candidate
            else:
                raise NoManifestFound(f"No {MANIFEST_NAME} found in {candidate}")
        else:
            abs_root = find_project_root(Path.cwd())

        manifest, lock = read_project_files(abs_root)
        import_root = self.split_absolute_project_root(abs_root)

        return Project(
            abs_root=abs_root,
            import_root=import_root,
            manifest=manifest,
            lock=lock,
        )


def _relative_to(path: Path, base: Path) -> Path | None:
    try:
        return path.relative_to(base)
    except ValueError:
        return None


def new_context(vcs: GitInspector | None = None) -> Context:
    """Build a Context from the configured workspace roots.

    The first candidate that is an existing directory wins.

    Raises:
        ConfigError: the config file is malformed
        NoWorkspaceConfigured: no candidates configured
        NoValidWorkspaceRoot: no candidate exists
    """
    candidates = workspace_candidates()
    if not candidates:
        raise NoWorkspaceConfigured(
            "No workspace configured. Set DEPROOT_PATH or "
            "workspace_roots in ~/.deproot/config.yaml"
        )

    for candidate in candidates:
        path = Path(candidate).expanduser()
        if path.is_absolute() and path.is_dir():
            return Context(path, vcs or GitInspector())
        logger.debug("skipping workspace candidate %s: not a directory", candidate)

    raise NoValidWorkspaceRoot(
        f"None of the configured workspace roots exists: {', '.join(candidates)}"
    )
