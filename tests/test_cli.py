"""Dispatcher routing, help and version output."""

from __future__ import annotations

import pytest

from skara import __version__, cli
from skara.cli import CommandDispatcher, build_registry, main
from skara.errors import InstallationNotFound


def _dispatcher(calls: list[tuple[str, list[str]]]) -> CommandDispatcher:
    def make(name: str, code: int = 0):
        def entry_point(args: list[str]) -> int:
            calls.append((name, args))
            return code

        return entry_point

    return CommandDispatcher({"jcheck": make("jcheck"), "pr": make("pr", 3)})


def test_forwards_remaining_arguments() -> None:
    calls: list[tuple[str, list[str]]] = []
    dispatcher = _dispatcher(calls)

    assert dispatcher.dispatch(["jcheck", "--rev", "HEAD~1"]) == 0
    assert dispatcher.dispatch(["pr"]) == 3
    assert calls == [("jcheck", ["--rev", "HEAD~1"]), ("pr", [])]


def test_no_arguments_is_help(capsys) -> None:
    dispatcher = _dispatcher([])

    assert dispatcher.dispatch([]) == 0
    empty = capsys.readouterr().out
    assert dispatcher.dispatch(["help"]) == 0
    assert capsys.readouterr().out == empty


def test_git_help_lists_registered_commands(capsys) -> None:
    _dispatcher([]).dispatch(["help"])
    out = capsys.readouterr().out

    assert out.startswith("usage: git skara <help|jcheck|pr|update|version>\n")
    assert "- git jcheck\n" in out
    assert "- git pr\n" in out
    assert "- git help" not in out
    assert "https://wiki.openjdk.java.net/display/skara" in out


def test_mercurial_help_lists_allow_list_only(capsys) -> None:
    _dispatcher([]).dispatch(["help", "--mercurial"])
    out = capsys.readouterr().out

    assert out.startswith("usage: hg skara <webrev|defpath|jcheck|help|version|update>\n")
    assert "- hg webrev\n" in out
    assert "- hg pr" not in out
    assert "https://wiki.openjdk.java.net/display/SKARA/Mercurial" in out


def test_unknown_command_prints_error_then_help(capsys) -> None:
    calls: list[tuple[str, list[str]]] = []

    assert _dispatcher(calls).dispatch(["bogus", "x"]) == 1

    captured = capsys.readouterr()
    assert captured.err.strip() == "error: unknown command: bogus"
    assert captured.out.startswith("usage: git skara")
    assert calls == []


@pytest.mark.parametrize(("args", "vcs"), [([], "git"), (["--mercurial"], "hg")])
def test_version(args: list[str], vcs: str, capsys) -> None:
    assert _dispatcher([]).dispatch(["version", *args]) == 0
    assert capsys.readouterr().out.strip() == f"{vcs} skara version: {__version__}"


def test_update_errors_exit_nonzero(monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    seen = []

    def fake_update(personality):
        seen.append(personality.name)
        raise InstallationNotFound("could not find skara repository")

    monkeypatch.setattr(cli, "update_installation", fake_update)

    assert _dispatcher([]).dispatch(["update", "--mercurial"]) == 1
    assert seen == ["mercurial"]
    assert "error: could not find skara repository" in capsys.readouterr().err


def test_update_success(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "update_installation", lambda personality: False)

    assert _dispatcher([]).dispatch(["update"]) == 0


def test_reserved_names_cannot_be_registered() -> None:
    with pytest.raises(ValueError, match="help"):
        CommandDispatcher({"help": lambda args: 0})


def test_registry_is_read_only() -> None:
    registry = build_registry()

    assert set(registry) == {"jackpot", "outgoing"}
    with pytest.raises(TypeError):
        registry["extra"] = lambda args: 0  # type: ignore[index]


def test_main_help(capsys) -> None:
    assert main([]) == 0
    out = capsys.readouterr().out
    assert "- git jackpot" in out
    assert "- git outgoing" in out
