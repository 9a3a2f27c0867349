"""
deproot.lock — lock.json parsing.

lock.json format:

    {
        "memo": "cdafe8641b28cd16fe025df278b0a49b9416859345d8b6ba0ace0272b74925ee",
        "projects": [
            {
                "name": "github.com/pkg/errors",
                "version": "v0.8.0",
                "revision": "645ef00459ed84a119197bfb8d8205042c6df63d",
                "packages": ["."]
            },
            {
                "name": "github.com/Sirupsen/logrus",
                "branch": "master",
                "revision": "42b84f9ec624953ecbf81a94feccb3f5935c5edf",
                "source": "github.com/me/logrus"
            }
        ]
    }

Memo: opaque fingerprint of the manifest the lock was solved from. It is
kept as-is; computing or verifying it is the solver's job.

Each project carries a revision, plus at most one of branch or version.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from deproot.errors import LockSyntaxError, LockUnreadable
from deproot.version import (
    Version, VersionKind, new_branch, new_revision, new_tag,
)


LOCK_NAME = "lock.json"

_PROJECT_FIELDS = ("name", "branch", "version", "revision", "source", "packages")


@dataclass
class LockedProject:
    """A project pinned to a resolved version."""
    name: str
    version: Version
    source: str | None = None
    packages: list[str] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name}
        v = self.version
        if v.kind is VersionKind.BRANCH:
            data["branch"] = v.name
        elif v.kind is VersionKind.TAG:
            data["version"] = v.name
        if v.revision:
            data["revision"] = v.revision
        if self.source:
            data["source"] = self.source
        if self.packages:
            data["packages"] = list(self.packages)
        data.update(self.extra)
        return data


@dataclass
class Lock:
    """Parsed lock.json."""
    memo: str = ""
    projects: list[LockedProject] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    def get(self, name: str) -> LockedProject | None:
        for p in self.projects:
            if p.name == name:
                return p
        return None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "memo": self.memo,
            "projects": [p.to_dict() for p in self.projects],
        }
        data.update(self.extra)
        return data


def read_lock(path: str | Path) -> Lock:
    """Read and parse a lock file.

    Raises:
        LockUnreadable: the file exists but cannot be read
        LockSyntaxError: invalid JSON or wrong structure
    """
    p = Path(path)
    try:
        with open(p, encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise LockUnreadable(p, f"cannot read lock: {e}") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise LockSyntaxError(p, f"invalid JSON: {e}") from e

    return parse_lock_dict(data, p)


def parse_lock_dict(data: Any, path: str | Path = LOCK_NAME) -> Lock:
    """Create a Lock from decoded JSON."""
    if not isinstance(data, dict):
        raise LockSyntaxError(
            path, f"lock must be a JSON object, got {type(data).__name__}"
        )

    memo = data.get("memo", "")
    if not isinstance(memo, str):
        raise LockSyntaxError(path, "memo must be a string")

    projects_raw = data.get("projects", [])
    if not isinstance(projects_raw, list):
        raise LockSyntaxError(path, "projects must be a list")

    projects = [
        _parse_project(entry, i, path)
        for i, entry in enumerate(projects_raw)
    ]

    return Lock(
        memo=memo,
        projects=projects,
        extra={k: v for k, v in data.items() if k not in ("memo", "projects")},
    )


def _parse_project(entry: Any, i: int, path: str | Path) -> LockedProject:
    if not isinstance(entry, dict):
        raise LockSyntaxError(path, f"projects[{i}] must be an object")

    name = entry.get("name")
    if not isinstance(name, str) or not name:
        raise LockSyntaxError(path, f"projects[{i}].name is required")

    for key in ("branch", "version", "revision", "source"):
        if key in entry and not isinstance(entry[key], str):
            raise LockSyntaxError(path, f"projects[{i}].{key} must be a string")

    branch = entry.get("branch")
    tag = entry.get("version")
    revision = entry.get("revision")

    if branch and tag:
        raise LockSyntaxError(
            path, f"projects[{i}] ({name}) cannot have both branch and version"
        )

    if branch:
        version = new_branch(branch)
    elif tag:
        version = new_tag(tag)
    elif revision:
        version = new_revision(revision)
    else:
        raise LockSyntaxError(
            path, f"projects[{i}] ({name}) has no branch, version or revision"
        )
    if revision and version.kind is not VersionKind.REVISION:
        version = version.bind(revision)

    packages = entry.get("packages", [])
    if not isinstance(packages, list) or not all(isinstance(p, str) for p in packages):
        raise LockSyntaxError(path, f"projects[{i}].packages must be a list of strings")

    return LockedProject(
        name=name,
        version=version,
        source=entry.get("source"),
        packages=list(packages),
        extra={k: v for k, v in entry.items() if k not in _PROJECT_FIELDS},
    )


def write_lock(lock: Lock, path: str | Path) -> None:
    """Write a lock file."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(lock.to_dict(), f, indent=4)
        f.write("\n")
