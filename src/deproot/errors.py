"""
deproot.errors — Error kinds raised by the workspace core.

None of these are retried; callers decide how to present them.
"""

from __future__ import annotations

from pathlib import Path


class DeprootError(Exception):
    """Base class for all deproot errors."""
    pass


class ConfigError(DeprootError):
    """The deproot config file is malformed."""
    pass


class NoWorkspaceConfigured(DeprootError):
    """No workspace root candidates are configured."""
    pass


class NoValidWorkspaceRoot(DeprootError):
    """None of the configured workspace roots is an existing directory."""
    pass


class PathNotInWorkspace(DeprootError):
    """A path lies outside the workspace source tree."""
    pass


class ProjectRootError(DeprootError):
    """The expected project directory is missing or not a directory."""
    pass


class ProjectRootNotFound(ProjectRootError):
    pass


class ProjectRootNotADirectory(ProjectRootError):
    pass


class NoManifestFound(DeprootError):
    """Manifest discovery was exhausted."""
    pass


class _FileSyntaxError(DeprootError):
    def __init__(self, path: str | Path, message: str):
        self.path = Path(path)
        super().__init__(f"{self.path}: {message}")


class ManifestSyntaxError(_FileSyntaxError):
    """The manifest file is not structurally valid."""
    pass


class LockSyntaxError(_FileSyntaxError):
    """The lock file is not structurally valid."""
    pass


class LockUnreadable(LockSyntaxError):
    """A lock file exists but could not be read."""
    pass


class VCSQueryError(DeprootError):
    """Repository inspection failed."""
    pass
