"""git-skara: entry point multiplexing the skara subcommands."""

from __future__ import annotations

import sys
from collections.abc import Callable, Mapping
from types import MappingProxyType

import click

from skara import __version__
from skara.commands import jackpot, outgoing
from skara.config import MERCURIAL, Personality, detect_personality
from skara.errors import SkaraError, UnknownCommand
from skara.git import GitError
from skara.log import configure_logging
from skara.update import update as update_installation

EntryPoint = Callable[[list[str]], int]

META_COMMANDS = ("help", "version", "update")
MERCURIAL_COMMANDS = ("webrev", "defpath", "jcheck")


def build_registry() -> Mapping[str, EntryPoint]:
    """Return the read-only table of subcommands shipped with this package."""
    return MappingProxyType(
        {
            "jackpot": jackpot.main,
            "outgoing": outgoing.main,
        }
    )


class CommandDispatcher:
    """Route an argument vector to a registered subcommand or a meta-command."""

    def __init__(self, commands: Mapping[str, EntryPoint]) -> None:
        overlap = set(commands) & set(META_COMMANDS)
        if overlap:
            raise ValueError(f"reserved command names: {', '.join(sorted(overlap))}")
        self._commands = MappingProxyType(dict(commands))
        self._meta: Mapping[str, EntryPoint] = MappingProxyType(
            {"help": self.help, "version": self.version, "update": self.update}
        )

    def dispatch(self, argv: list[str]) -> int:
        """Run the command named by argv[0] with the remaining arguments."""
        if not argv:
            return self.help([])

        name, args = argv[0], list(argv[1:])
        entry_point = self._meta.get(name) or self._commands.get(name)
        if entry_point is None:
            click.echo(f"error: {UnknownCommand(name)}", err=True)
            self.help(argv)
            return 1
        return entry_point(args)

    def command_names(self, personality: Personality) -> list[str]:
        """Names advertised by help for personality."""
        if personality == MERCURIAL:
            return [*MERCURIAL_COMMANDS, *META_COMMANDS]
        return sorted([*self._commands, *META_COMMANDS])

    def help(self, args: list[str]) -> int:
        personality = detect_personality(args)
        vcs = personality.vcs
        names = self.command_names(personality)
        lines = [
            f"usage: {vcs} skara <{'|'.join(names)}>",
            "",
            f"Additional available {vcs} commands:",
        ]
        lines.extend(f"- {vcs} {name}" for name in names if name not in META_COMMANDS)
        lines.extend(
            [
                "",
                "For more information, please see the Skara wiki:",
                "",
                f"    {personality.docs_url}",
                "",
            ]
        )
        click.echo("\n".join(lines))
        return 0

    def version(self, args: list[str]) -> int:
        personality = detect_personality(args)
        click.echo(f"{personality.vcs} skara version: {__version__}")
        return 0

    def update(self, args: list[str]) -> int:
        personality = detect_personality(args)
        try:
            update_installation(personality)
        except (SkaraError, GitError) as exc:
            click.echo(f"error: {exc}", err=True)
            return 1
        return 0


def main(argv: list[str] | None = None) -> int:
    """Console script entrypoint."""
    configure_logging()
    dispatcher = CommandDispatcher(build_registry())
    return dispatcher.dispatch(list(sys.argv[1:] if argv is None else argv))
