"""
deproot.version — Version model.

A Version is one of three kinds:

    revision   immutable commit id            Version(REVISION, None, "645ef00...")
    branch     movable pointer, may be bound  Version(BRANCH, "master", "8e69...")
    tag        semver label, may be bound     Version(TAG, "v0.8.0", "645ef00...")

Binding attaches the commit a branch or tag currently points at. It does
not change the symbolic identity: `new_tag("v1.0.0").bind(rev).name` is
still "v1.0.0".

Equality compares bound revisions when both sides have one, otherwise
kind + name.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from enum import Enum


class VersionKind(Enum):
    REVISION = "revision"
    BRANCH = "branch"
    TAG = "tag"


_SEMVER = re.compile(
    r"^v?(0|[1-9]\d*)"
    r"(?:\.(0|[1-9]\d*))?"
    r"(?:\.(0|[1-9]\d*))?"
    r"(?:-([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)


def is_semver(name: str) -> bool:
    """Check whether a tag name looks like a semantic version.

    >>> is_semver("v0.8.0")
    True
    >>> is_semver("1.2")
    True
    >>> is_semver("release-candidate")
    False
    """
    return _SEMVER.match(name) is not None


def semver_key(name: str) -> tuple:
    """Sort key following semver precedence (prereleases sort first)."""
    m = _SEMVER.match(name)
    if m is None:
        raise ValueError(f"Not a semantic version: {name!r}")

    major, minor, patch, pre, _build = m.groups()
    core = (int(major), int(minor or 0), int(patch or 0))
    if pre is None:
        return core + (1, ())

    idents = tuple(
        (0, int(p), "") if p.isdigit() else (1, 0, p)
        for p in pre.split(".")
    )
    return core + (0, idents)


@dataclass(frozen=True, eq=False)
class Version:
    """A revision, branch or tag, optionally bound to a revision."""
    kind: VersionKind
    name: str | None = None
    revision: str | None = None

    # Equality is not transitive between bound and unbound values.
    __hash__ = None

    @property
    def is_bound(self) -> bool:
        return self.revision is not None

    def bind(self, revision: str) -> Version:
        """Return a copy bound to `revision`."""
        if self.kind is VersionKind.REVISION:
            raise ValueError("A revision cannot be bound to another revision")
        return replace(self, revision=revision)

    def unbound(self) -> Version:
        if self.kind is VersionKind.REVISION:
            return self
        return replace(self, revision=None)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        if self.revision is not None and other.revision is not None:
            return self.revision == other.revision
        return self.kind is other.kind and self.name == other.name

    def __str__(self) -> str:
        if self.kind is VersionKind.REVISION:
            return self.revision or ""
        return self.name or ""

    def __repr__(self) -> str:
        if self.kind is VersionKind.REVISION:
            return f"Revision({self.revision!r})"
        label = "Branch" if self.kind is VersionKind.BRANCH else "Tag"
        if self.revision:
            return f"{label}({self.name!r} @ {self.revision!r})"
        return f"{label}({self.name!r})"


def new_revision(revision: str) -> Version:
    if not revision:
        raise ValueError("revision must not be empty")
    return Version(VersionKind.REVISION, None, revision)


def new_branch(name: str) -> Version:
    if not name:
        raise ValueError("branch name must not be empty")
    return Version(VersionKind.BRANCH, name)


def new_tag(name: str) -> Version:
    if not name:
        raise ValueError("tag name must not be empty")
    return Version(VersionKind.TAG, name)
