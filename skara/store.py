"""Capability surface consumed from the version-control backend."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

CommitId = str


class RevisionStore(Protocol):
    """Commit-graph queries needed by outgoing resolution and self-update."""

    def resolve(self, ref: str) -> CommitId | None:
        """Resolve a symbolic reference, or return None when it does not exist."""

    def head(self) -> CommitId:
        """Return the commit HEAD points at."""

    def current_branch(self) -> str | None:
        """Return the checked out branch, or None on a detached HEAD."""

    def upstream_for(self, branch: str) -> str | None:
        """Return the configured upstream of a local branch."""

    def remotes(self) -> list[str]:
        """Return configured remote names."""

    def remote_branches(self, remote: str) -> list[str]:
        """Return branch names published by a remote, in listing order."""

    def pull_path(self, remote: str) -> str:
        """Return the URL used to fetch from a remote."""

    def fetch(self, uri: str, branch: str) -> CommitId:
        """Fetch a remote branch and return the commit it points at."""

    def merge_base(self, a: CommitId, b: CommitId) -> CommitId:
        """Return the most recent common ancestor of two commits."""

    def commit_count(self, base: CommitId, head: CommitId) -> int:
        """Count commits reachable from head but not from base."""

    def config(self, key: str) -> list[str]:
        """Return every configured value for a key."""

    def pull(self) -> None:
        """Pull from the default upstream."""

    def root(self) -> Path:
        """Return the working tree root."""

    def diff(self, base: CommitId, paths: list[Path] | None = None) -> str:
        """Return a unified diff of the working tree against base."""
