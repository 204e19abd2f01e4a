"""Resolution of the base revision that outgoing changes are diffed against.

Without an explicit revision the base is, in order of preference: HEAD when
outgoing comparison is disabled, the upstream of the current branch, or the
merge-base with the nearest branch on a remote.  "Nearest" means the fewest
local commits on top of the merge-base; ties go to the branch listed first.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Literal

from skara.config import OutgoingConfig
from skara.errors import AmbiguousRemote, NoCandidateRevision, UnresolvedReference
from skara.store import CommitId, RevisionStore

logger = logging.getLogger(__name__)

DEFAULT_REMOTE = "origin"
DEFAULT_MAX_WORKERS = 4

Provenance = Literal["explicit", "head", "upstream", "merge-base"]


@dataclass(frozen=True, slots=True)
class ResolvedBase:
    """The commit to diff against and how it was chosen."""

    commit: CommitId
    provenance: Provenance

    def to_dict(self) -> dict[str, str]:
        return {"commit": self.commit, "provenance": self.provenance}


@dataclass(frozen=True, slots=True)
class Candidate:
    """Merge-base of a remote branch with HEAD."""

    branch: str
    merge_base: CommitId
    distance: int


def resolve_outgoing(
    repo: RevisionStore,
    *,
    rev: str | None = None,
    remote: str | None = None,
    no_outgoing: bool = False,
    config: OutgoingConfig | None = None,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> ResolvedBase:
    """Return the base revision for outgoing changes in repo."""
    config = config or OutgoingConfig()

    if rev is not None:
        return ResolvedBase(resolve_ref(repo, rev), "explicit")

    if no_outgoing or config.no_outgoing:
        return ResolvedBase(resolve_ref(repo, "HEAD"), "head")

    branch = repo.current_branch()
    upstream = repo.upstream_for(branch) if branch is not None else None
    if upstream is not None:
        logger.debug("branch %s tracks %s", branch, upstream)
        return ResolvedBase(resolve_ref(repo, upstream), "upstream")

    chosen_remote = select_remote(repo, remote or config.remote)
    best = nearest_candidate(repo, chosen_remote, max_workers=max_workers)
    logger.debug(
        "nearest branch on %s is %s (%d commits ahead of %s)",
        chosen_remote,
        best.branch,
        best.distance,
        best.merge_base,
    )
    return ResolvedBase(best.merge_base, "merge-base")


def resolve_ref(repo: RevisionStore, ref: str) -> CommitId:
    """Resolve ref or raise UnresolvedReference."""
    commit = repo.resolve(ref)
    if commit is None:
        raise UnresolvedReference(ref)
    return commit


def select_remote(repo: RevisionStore, remote: str | None) -> str:
    """Pick the remote to search when none was given explicitly."""
    if remote is not None:
        return remote

    remotes = repo.remotes()
    if not remotes:
        raise AmbiguousRemote(
            "no remotes present, cannot figure out outgoing changes "
            "(use --rev to specify revision to compare against)"
        )
    if len(remotes) == 1:
        return remotes[0]
    if DEFAULT_REMOTE in remotes:
        return DEFAULT_REMOTE
    raise AmbiguousRemote(
        "multiple remotes without origin remote present, cannot figure out outgoing changes "
        "(use --remote or --rev to choose what to compare against)"
    )


def nearest_candidate(
    repo: RevisionStore, remote: str, *, max_workers: int = DEFAULT_MAX_WORKERS
) -> Candidate:
    """Evaluate every branch of remote and return the one closest to HEAD.

    Every branch is fetched, including the ones that lose.  A failed fetch
    aborts the whole search.
    """
    branches = repo.remote_branches(remote)
    if not branches:
        raise NoCandidateRevision(remote)

    head = repo.head()
    pull_path = repo.pull_path(remote)

    def evaluate(branch: str) -> Candidate:
        fetched = repo.fetch(pull_path, branch)
        merge_base = repo.merge_base(fetched, head)
        distance = repo.commit_count(merge_base, head)
        logger.debug(
            "candidate %s/%s: merge-base %s, distance %d", remote, branch, merge_base, distance
        )
        return Candidate(branch=branch, merge_base=merge_base, distance=distance)

    with ThreadPoolExecutor(max_workers=max(1, max_workers)) as executor:
        # map() yields in submission order, which keeps the tie-break stable
        candidates = list(executor.map(evaluate, branches))

    best = candidates[0]
    for candidate in candidates[1:]:
        if candidate.distance < best.distance:
            best = candidate
    return best
