"""git outgoing: show the revision outgoing changes are compared against."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any

import typer

from skara.commands._shared import die, open_repository, resolve_base_or_exit, run_app
from skara.diff_parser import parse_unified_diff
from skara.git import GitError

app = typer.Typer(
    name="git-outgoing",
    add_completion=False,
    help="Show the base revision of outgoing changes.",
)


@app.command()
def outgoing_command(
    rev: Annotated[
        str | None,
        typer.Option("--rev", "-r", metavar="REV", help="Compare against a specified revision."),
    ] = None,
    remote: Annotated[
        str | None,
        typer.Option(metavar="NAME", help="Use remote to calculate outgoing changes."),
    ] = None,
    no_outgoing: Annotated[
        bool,
        typer.Option("--no-outgoing", "-N", help="Do not compare against remote."),
    ] = False,
    stat: Annotated[
        bool, typer.Option("--stat", help="Also list changed files with line counts.")
    ] = False,
    repo_path: Annotated[Path, typer.Option("--repo", help="Repository path.")] = Path("."),
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
) -> None:
    """Show the base revision of outgoing changes."""
    output_format = format.lower()
    if output_format not in {"human", "json"}:
        raise typer.BadParameter("format must be one of: human, json", param_hint="--format")

    repo = open_repository(repo_path)
    base = resolve_base_or_exit(repo, rev=rev, remote=remote, no_outgoing=no_outgoing)

    files: list[dict[str, Any]] = []
    if stat:
        try:
            diff_text = repo.diff(base.commit)
        except GitError as exc:
            raise die(str(exc)) from exc
        files = [
            {"path": item.path, "added": item.added, "deleted": item.deleted}
            for item in parse_unified_diff(diff_text)
        ]

    if output_format == "json":
        payload: dict[str, Any] = base.to_dict()
        if stat:
            payload["files"] = files
        typer.echo(json.dumps(payload, sort_keys=True))
        return

    lines = [f"{base.commit} ({base.provenance})"]
    for item in files:
        lines.append(f"- {item['path']}: +{item['added']} -{item['deleted']}")
    typer.echo("\n".join(lines))


def main(argv: list[str] | None = None) -> int:
    """Entry point used by the dispatcher."""
    return run_app(app, argv, "git outgoing")
