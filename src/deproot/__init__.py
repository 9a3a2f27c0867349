"""
deproot — Workspace context for dependency-managed projects.

Maps paths to project roots and back, finds and loads a project's
manifest and lock, and reports which version of a dependency is
checked out in the workspace.
"""

from deproot.context import Context, new_context
from deproot.errors import (
    DeprootError,
    ConfigError,
    NoWorkspaceConfigured,
    NoValidWorkspaceRoot,
    PathNotInWorkspace,
    ProjectRootError,
    ProjectRootNotFound,
    ProjectRootNotADirectory,
    NoManifestFound,
    ManifestSyntaxError,
    LockSyntaxError,
    LockUnreadable,
    VCSQueryError,
)
from deproot.lock import Lock, LockedProject, read_lock, write_lock
from deproot.manifest import Manifest, read_manifest, write_manifest
from deproot.project import Project, find_project_root
from deproot.vcs import GitInspector, RepoState, classify
from deproot.version import (
    Version,
    VersionKind,
    new_revision,
    new_branch,
    new_tag,
    is_semver,
)

__version__ = "0.1.0"

__all__ = [
    # context
    "Context",
    "new_context",
    # project files
    "Project",
    "find_project_root",
    "Manifest",
    "read_manifest",
    "write_manifest",
    "Lock",
    "LockedProject",
    "read_lock",
    "write_lock",
    # versions
    "Version",
    "VersionKind",
    "new_revision",
    "new_branch",
    "new_tag",
    "is_semver",
    "GitInspector",
    "RepoState",
    "classify",
    # errors
    "DeprootError",
    "ConfigError",
    "NoWorkspaceConfigured",
    "NoValidWorkspaceRoot",
    "PathNotInWorkspace",
    "ProjectRootError",
    "ProjectRootNotFound",
    "ProjectRootNotADirectory",
    "NoManifestFound",
    "ManifestSyntaxError",
    "LockSyntaxError",
    "LockUnreadable",
    "VCSQueryError",
]
