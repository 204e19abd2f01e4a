"""Git subprocess helpers."""

from __future__ import annotations

import logging
from pathlib import Path
from subprocess import CalledProcessError, run

from skara.store import CommitId

logger = logging.getLogger(__name__)

FETCH_REF_PREFIX = "refs/skara/fetch/"


class GitError(RuntimeError):
    """Raised when git command execution fails."""


class Repository:
    """A git working tree queried through the git executable."""

    def __init__(self, root: Path) -> None:
        self._root = root

    @classmethod
    def get(cls, path: Path) -> Repository | None:
        """Return the repository containing path, or None if there is none."""
        if not path.is_dir():
            return None
        try:
            toplevel = _run_git(path, ["rev-parse", "--show-toplevel"]).strip()
        except GitError:
            return None
        return cls(Path(toplevel))

    def root(self) -> Path:
        return self._root

    def resolve(self, ref: str) -> CommitId | None:
        try:
            return self._git(["rev-parse", "--quiet", "--verify", f"{ref}^{{commit}}"]).strip()
        except GitError:
            return None

    def head(self) -> CommitId:
        return self._git(["rev-parse", "--verify", "HEAD"]).strip()

    def current_branch(self) -> str | None:
        try:
            branch = self._git(["symbolic-ref", "--quiet", "--short", "HEAD"]).strip()
        except GitError:
            return None
        return branch or None

    def upstream_for(self, branch: str) -> str | None:
        upstream = self._git(
            ["for-each-ref", "--format=%(upstream:short)", f"refs/heads/{branch}"]
        ).strip()
        return upstream or None

    def remotes(self) -> list[str]:
        return [line for line in self._git(["remote"]).splitlines() if line]

    def remote_branches(self, remote: str) -> list[str]:
        branches: list[str] = []
        for line in self._git(["ls-remote", "--heads", remote]).splitlines():
            parts = line.split("\t", 1)
            if len(parts) == 2 and parts[1].startswith("refs/heads/"):
                branches.append(parts[1][len("refs/heads/") :])
        return branches

    def pull_path(self, remote: str) -> str:
        urls = self.config(f"remote.{remote}.url")
        return urls[-1] if urls else remote

    def fetch(self, uri: str, branch: str) -> CommitId:
        # FETCH_HEAD is shared by every fetch, so each branch lands in its own
        # flat, short-lived ref; hex names never clash as directory and file
        target = f"{FETCH_REF_PREFIX}{branch.encode('utf-8').hex()}"
        self._git(
            ["fetch", "--quiet", "--no-write-fetch-head", uri, f"+refs/heads/{branch}:{target}"]
        )
        try:
            return self._git(["rev-parse", "--verify", target]).strip()
        finally:
            self._git(["update-ref", "-d", target])

    def merge_base(self, a: CommitId, b: CommitId) -> CommitId:
        return self._git(["merge-base", a, b]).strip()

    def commit_count(self, base: CommitId, head: CommitId) -> int:
        return int(self._git(["rev-list", "--count", f"{base}..{head}"]).strip())

    def config(self, key: str) -> list[str]:
        return read_vcs_config("git", key, cwd=self._root)

    def pull(self) -> None:
        self._git(["pull", "--quiet"])

    def diff(self, base: CommitId, paths: list[Path] | None = None) -> str:
        args = ["diff", "--no-color", base]
        if paths:
            args.extend(["--", *(str(path) for path in paths)])
        return self._git(args)

    def _git(self, args: list[str]) -> str:
        return _run_git(self._root, args)


def read_vcs_config(vcs: str, key: str, cwd: Path | None = None) -> list[str]:
    """Return all values configured for key; a missing key yields an empty list."""
    args = [vcs, "config", "--get-all", key] if vcs == "git" else [vcs, "config", key]
    logger.debug("running %s", " ".join(args))
    try:
        completed = run(args, cwd=cwd, check=False, capture_output=True, text=True)
    except FileNotFoundError as exc:
        raise GitError(f"{vcs} executable not found") from exc
    if completed.returncode != 0:
        return []
    return [line for line in completed.stdout.splitlines() if line]


def _run_git(repo: Path, args: list[str]) -> str:
    logger.debug("running git %s in %s", " ".join(args), repo)
    try:
        completed = run(
            ["git", *args],
            cwd=repo,
            check=True,
            capture_output=True,
            text=True,
        )
    except CalledProcessError as exc:
        stderr = (exc.stderr or "").strip()
        raise GitError(stderr or f"git {' '.join(args)} failed") from exc

    return completed.stdout
