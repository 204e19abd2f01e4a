"""Helpers shared by the typer-based subcommands."""

from __future__ import annotations

import sys
from pathlib import Path

import typer

from skara.config import OutgoingConfig, load_outgoing_config
from skara.errors import SkaraError
from skara.git import GitError, Repository
from skara.log import configure_logging
from skara.outgoing import ResolvedBase, resolve_outgoing


def die(message: str) -> typer.Exit:
    """Report a fatal error on stderr and return the exit to raise."""
    typer.echo(f"error: {message}", err=True)
    return typer.Exit(code=1)


def open_repository(path: Path) -> Repository:
    cwd = path.resolve()
    repo = Repository.get(cwd)
    if repo is None:
        raise die(f"{cwd} is not a repository")
    return repo


def resolve_base_or_exit(
    repo: Repository,
    *,
    rev: str | None,
    remote: str | None,
    no_outgoing: bool,
) -> ResolvedBase:
    """Resolve the outgoing base, turning resolution failures into exit code 1."""
    config = _load_config_or_raise(repo)
    try:
        return resolve_outgoing(
            repo,
            rev=rev,
            remote=remote,
            no_outgoing=no_outgoing,
            config=config,
        )
    except (SkaraError, GitError) as exc:
        raise die(str(exc)) from exc


def read_path_list(source: str | None) -> list[Path]:
    """Read newline separated paths from a file, or from stdin when source is '-'."""
    if source is None:
        return []
    text = sys.stdin.read() if source == "-" else Path(source).read_text(encoding="utf-8")
    return [Path(line.strip()) for line in text.splitlines() if line.strip()]


def warn_mercurial(mercurial: bool) -> None:
    if mercurial:
        typer.echo("warning: --mercurial is deprecated and has no effect", err=True)


def _load_config_or_raise(repo: Repository) -> OutgoingConfig:
    try:
        return load_outgoing_config(repo)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="config") from exc


def run_app(app: typer.Typer, argv: list[str] | None, prog_name: str) -> int:
    """Run a typer app as a dispatcher entry point and return its exit code."""
    configure_logging()
    try:
        app(args=argv, prog_name=prog_name)
    except SystemExit as exc:
        code = exc.code
        if code is None:
            return 0
        return code if isinstance(code, int) else 1
    return 0
