"""Configuration resolved from version-control settings."""

from __future__ import annotations

from dataclasses import dataclass
from skara.store import RevisionStore

CONFIG_SECTION = "webrev"
ENABLED_VALUES = frozenset({"TRUE", "ON", "1", "ENABLED"})


@dataclass(frozen=True, slots=True)
class Personality:
    """Presentation and configuration vocabulary of the dispatcher."""

    name: str
    vcs: str
    docs_url: str
    install_key: str
    install_suffix: str | None = None


GIT = Personality(
    name="git",
    vcs="git",
    docs_url="https://wiki.openjdk.java.net/display/skara",
    install_key="include.path",
    install_suffix="skara.gitconfig",
)

MERCURIAL = Personality(
    name="mercurial",
    vcs="hg",
    docs_url="https://wiki.openjdk.java.net/display/SKARA/Mercurial",
    install_key="extensions.skara",
)

MERCURIAL_FLAG = "--mercurial"


def detect_personality(args: list[str]) -> Personality:
    """Pick the mercurial personality when the first argument is --mercurial."""
    if args and args[0] == MERCURIAL_FLAG:
        return MERCURIAL
    return GIT


@dataclass(slots=True)
class OutgoingConfig:
    """Defaults for outgoing-change resolution."""

    no_outgoing: bool = False
    remote: str | None = None


def load_outgoing_config(repo: RevisionStore, section: str = CONFIG_SECTION) -> OutgoingConfig:
    """Read outgoing defaults; keys are honoured only when set exactly once."""
    no_outgoing = _single_value(repo.config(f"{section}.no-outgoing"))
    remote = _single_value(repo.config(f"{section}.remote"))
    return OutgoingConfig(
        no_outgoing=_as_enabled(no_outgoing) if no_outgoing is not None else False,
        remote=_as_remote(remote, f"{section}.remote") if remote is not None else None,
    )


def _single_value(values: list[str]) -> str | None:
    if len(values) != 1:
        return None
    return values[0]


def _as_enabled(raw: str) -> bool:
    return raw.strip().upper() in ENABLED_VALUES


def _as_remote(raw: str, field_name: str) -> str:
    value = raw.strip()
    if not value or any(char.isspace() for char in value):
        raise ValueError(f"{field_name} must be a remote name")
    return value
