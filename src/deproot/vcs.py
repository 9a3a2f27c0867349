"""
deproot.vcs — Local repository inspection.

Only answers "what is checked out here": the active commit, the local
branch tips and the tags. Nothing is fetched.

Classification, most to least specific:
    1. active commit is a local branch tip   → Branch(name) @ commit
    2. active commit carries a semver tag    → Tag(name) @ commit
    3. otherwise                             → Revision(commit)
"""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

from deproot.errors import VCSQueryError
from deproot.version import (
    Version, new_branch, new_revision, new_tag, is_semver, semver_key,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RepoState:
    """Snapshot of a repository's local refs."""
    commit: str
    branches: dict[str, str] = field(default_factory=dict)  # name → commit
    tags: dict[str, str] = field(default_factory=dict)      # name → commit
    head_branch: str | None = None                          # None = detached


class GitInspector:
    """Reads RepoState from a git working tree."""

    def __init__(self, git: str = "git", timeout: float | None = None):
        self.git = git
        self.timeout = timeout

    def inspect(self, path: str | Path) -> RepoState:
        repo = Path(path)
        if not repo.is_dir():
            raise VCSQueryError(f"Not a directory: {repo}")

        toplevel = self._git(repo, "rev-parse", "--show-toplevel").strip()
        if not toplevel or not _same_dir(Path(toplevel), repo):
            raise VCSQueryError(f"Not a git repository root: {repo}")

        commit = self._git(repo, "rev-parse", "HEAD").strip()
        head_branch = self._head_branch(repo)

        branches: dict[str, str] = {}
        out = self._git(
            repo, "for-each-ref",
            "--format=%(objectname) %(refname:lstrip=2)", "refs/heads",
        )
        for line in out.splitlines():
            parts = line.split()
            if len(parts) == 2:
                branches[parts[1]] = parts[0]

        # Annotated tags are peeled to the commit they point at.
        tags: dict[str, str] = {}
        out = self._git(
            repo, "for-each-ref",
            "--format=%(objectname) %(*objectname) %(refname:lstrip=2)",
            "refs/tags",
        )
        for line in out.splitlines():
            parts = line.split()
            if len(parts) == 3:
                tags[parts[2]] = parts[1]
            elif len(parts) == 2:
                tags[parts[1]] = parts[0]

        logger.debug(
            "%s: HEAD=%s branch=%s (%d branches, %d tags)",
            repo, commit, head_branch, len(branches), len(tags),
        )
        return RepoState(
            commit=commit,
            branches=branches,
            tags=tags,
            head_branch=head_branch,
        )

    def _head_branch(self, repo: Path) -> str | None:
        try:
            result = self._run(repo, "symbolic-ref", "-q", "--short", "HEAD")
        except subprocess.CalledProcessError:
            return None  # detached HEAD
        return result.stdout.strip() or None

    def _git(self, repo: Path, *args: str) -> str:
        try:
            return self._run(repo, *args).stdout
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            raise VCSQueryError(
                f"git {' '.join(args)} failed in {repo}: {stderr or e.returncode}"
            ) from e

    def _run(self, repo: Path, *args: str) -> subprocess.CompletedProcess:
        try:
            return subprocess.run(
                [self.git, *args],
                cwd=repo,
                capture_output=True,
                text=True,
                check=True,
                timeout=self.timeout,
                env={**os.environ, "GIT_TERMINAL_PROMPT": "0"},
            )
        except FileNotFoundError as e:
            raise VCSQueryError(f"git executable not found: {self.git}") from e
        except subprocess.TimeoutExpired as e:
            raise VCSQueryError(f"git {' '.join(args)} timed out in {repo}") from e


def _same_dir(a: Path, b: Path) -> bool:
    try:
        return os.path.samefile(a, b)
    except OSError:
        return False


def classify(state: RepoState) -> Version:
    """Map a repository snapshot onto the Version model."""
    commit = state.commit

    at_head = sorted(n for n, c in state.branches.items() if c == commit)
    if at_head:
        name = state.head_branch if state.head_branch in at_head else at_head[0]
        return new_branch(name).bind(commit)

    semver_tags = [
        n for n, c in state.tags.items() if c == commit and is_semver(n)
    ]
    if semver_tags:
        name = max(semver_tags, key=lambda n: (semver_key(n), n))
        return new_tag(name).bind(commit)

    return new_revision(commit)
