"""Outgoing base resolution against real git repositories."""

from __future__ import annotations

from pathlib import Path

import pytest

from skara.config import load_outgoing_config
from skara.errors import AmbiguousRemote, UnresolvedReference
from skara.git import FETCH_REF_PREFIX, Repository
from skara.outgoing import resolve_outgoing
from tests.helpers_git import clone_repo, commit_file, git, init_repo, rev


@pytest.fixture
def upstream(tmp_path: Path) -> Path:
    """main: A-B-C, feature: A-B-D."""
    repo = init_repo(tmp_path, "upstream")
    commit_file(repo, "README", "a\n")
    commit_file(repo, "README", "b\n")
    git(repo, "branch", "feature")
    commit_file(repo, "README", "c\n")
    git(repo, "checkout", "-q", "feature")
    commit_file(repo, "src/feature.txt", "d\n")
    git(repo, "checkout", "-q", "main")
    return repo


def _untracked_work_branch(upstream: Path, tmp_path: Path, start: str) -> Path:
    local = clone_repo(upstream, tmp_path / "local")
    git(local, "checkout", "-q", "--no-track", "-b", "work", start)
    commit_file(local, "local.txt", "e\n")
    return local


def test_tracking_branch_resolves_to_upstream(upstream: Path, tmp_path: Path) -> None:
    local = clone_repo(upstream, tmp_path / "local")
    commit_file(local, "local.txt", "e\n")
    repo = Repository.get(local)
    assert repo is not None

    resolved = resolve_outgoing(repo)

    assert resolved.provenance == "upstream"
    assert resolved.commit == rev(upstream, "main")


def test_search_picks_nearest_remote_branch(upstream: Path, tmp_path: Path) -> None:
    local = _untracked_work_branch(upstream, tmp_path, "origin/feature")
    repo = Repository.get(local)
    assert repo is not None

    resolved = resolve_outgoing(repo)

    assert resolved.provenance == "merge-base"
    assert resolved.commit == rev(upstream, "feature")
    assert git(local, "for-each-ref", FETCH_REF_PREFIX) == ""
    assert git(local, "cat-file", "-t", rev(upstream, "main")).strip() == "commit"


def test_search_from_main_line(upstream: Path, tmp_path: Path) -> None:
    local = _untracked_work_branch(upstream, tmp_path, "origin/main")
    repo = Repository.get(local)
    assert repo is not None

    resolved = resolve_outgoing(repo, max_workers=1)

    assert resolved.commit == rev(upstream, "main")


def test_no_outgoing_config_returns_head(upstream: Path, tmp_path: Path) -> None:
    local = _untracked_work_branch(upstream, tmp_path, "origin/feature")
    git(local, "config", "webrev.no-outgoing", "Enabled")
    repo = Repository.get(local)
    assert repo is not None

    resolved = resolve_outgoing(repo, config=load_outgoing_config(repo))

    assert resolved.provenance == "head"
    assert resolved.commit == rev(local)


def test_unknown_revision(upstream: Path, tmp_path: Path) -> None:
    repo = Repository.get(upstream)
    assert repo is not None

    with pytest.raises(UnresolvedReference):
        resolve_outgoing(repo, rev="does-not-exist")


def test_two_remotes_without_origin(upstream: Path, tmp_path: Path) -> None:
    local = init_repo(tmp_path, "local")
    commit_file(local, "x", "x\n")
    git(local, "remote", "add", "upstream", str(upstream))
    git(local, "remote", "add", "mirror", str(upstream))
    repo = Repository.get(local)
    assert repo is not None

    with pytest.raises(AmbiguousRemote):
        resolve_outgoing(repo)


def test_search_survives_branch_replaced_by_nested_branch(
    upstream: Path, tmp_path: Path
) -> None:
    git(upstream, "branch", "topic", "feature")
    local = _untracked_work_branch(upstream, tmp_path, "origin/feature")
    repo = Repository.get(local)
    assert repo is not None
    resolve_outgoing(repo)

    git(upstream, "branch", "-D", "topic")
    git(upstream, "branch", "topic/sub", "feature")
    resolved = resolve_outgoing(repo)

    assert resolved.commit == rev(upstream, "feature")
    assert git(local, "for-each-ref", FETCH_REF_PREFIX) == ""


def test_leftover_fetch_ref_does_not_block_search(upstream: Path, tmp_path: Path) -> None:
    local = _untracked_work_branch(upstream, tmp_path, "origin/feature")
    git(local, "update-ref", f"{FETCH_REF_PREFIX}feature", rev(upstream, "main"))
    repo = Repository.get(local)
    assert repo is not None

    resolved = resolve_outgoing(repo, max_workers=1)

    assert resolved.commit == rev(upstream, "feature")
