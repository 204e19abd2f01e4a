"""git jackpot: run the jackpot analysis on outgoing changes."""

from __future__ import annotations

import tempfile
from pathlib import Path
from subprocess import run
from typing import Annotated

import typer

from skara import __version__
from skara.commands._shared import (
    die,
    open_repository,
    read_path_list,
    resolve_base_or_exit,
    run_app,
    warn_mercurial,
)
from skara.diff_parser import parse_unified_diff, touched_modules
from skara.git import GitError

app = typer.Typer(
    name="git-jackpot",
    add_completion=False,
    help="Run jackpot on the modules touched by outgoing changes.",
)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"git-jackpot version: {__version__}")
        raise typer.Exit()


def run_make(root: Path, modules: list[str], patch_file: Path) -> int:
    """Invoke the jackpot make target in root and return its exit status."""
    command = [
        "make",
        f"JACKPOT_MODULES={' '.join(modules)}",
        f"JACKPOT_EXTRA_OPTIONS=--filter-patch {patch_file}",
        "jackpot",
    ]
    return run(command, cwd=root, check=False).returncode


@app.command()
def jackpot_command(
    file: Annotated[
        str | None,
        typer.Argument(metavar="FILE", help="File listing paths to restrict to, '-' for stdin."),
    ] = None,
    rev: Annotated[
        str | None,
        typer.Option("--rev", "-r", metavar="REV", help="Compare against a specified revision."),
    ] = None,
    remote: Annotated[
        str | None,
        typer.Option(metavar="NAME", help="Use remote to calculate outgoing changes."),
    ] = None,
    mercurial: Annotated[
        bool,
        typer.Option("--mercurial", "-m", help="Deprecated: force use of mercurial."),
    ] = False,
    no_outgoing: Annotated[
        bool,
        typer.Option(
            "--no-outgoing", "-N", help="Do not compare against remote, use only 'status'."
        ),
    ] = False,
    repo_path: Annotated[Path, typer.Option("--repo", help="Repository path.")] = Path("."),
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Print the version of this tool.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Run jackpot on the modules touched by outgoing changes."""
    _ = version
    warn_mercurial(mercurial)
    repo = open_repository(repo_path)
    base = resolve_base_or_exit(repo, rev=rev, remote=remote, no_outgoing=no_outgoing)

    try:
        paths = read_path_list(file)
    except OSError as exc:
        raise die(f"could not read {file}: {exc.strerror}") from exc
    try:
        diff_text = repo.diff(base.commit, paths)
    except GitError as exc:
        raise die(str(exc)) from exc
    modules = touched_modules(parse_unified_diff(diff_text))

    with tempfile.NamedTemporaryFile(
        "w", prefix="patch", suffix=".patch", encoding="utf-8", delete=False
    ) as handle:
        handle.write(diff_text)
        patch_file = Path(handle.name)
    try:
        returncode = run_make(repo.root(), modules, patch_file)
    finally:
        patch_file.unlink(missing_ok=True)
    raise typer.Exit(code=returncode)


def main(argv: list[str] | None = None) -> int:
    """Entry point for git-jackpot and the dispatcher."""
    return run_app(app, argv, "git jackpot")
