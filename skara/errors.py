"""Fatal error kinds reported at the process boundary."""

from __future__ import annotations


class SkaraError(Exception):
    """Base class for fatal, user-facing failures."""


class UnresolvedReference(SkaraError):
    """A symbolic reference does not resolve to a commit."""

    def __init__(self, ref: str) -> None:
        super().__init__(f"could not resolve reference '{ref}'")
        self.ref = ref


class AmbiguousRemote(SkaraError):
    """The remote to search for outgoing changes cannot be chosen automatically."""


class NoCandidateRevision(SkaraError):
    """Outgoing search found no remote branches to compare against."""

    def __init__(self, remote: str) -> None:
        super().__init__(f"remote '{remote}' has no branches, cannot figure out outgoing changes")
        self.remote = remote


class InstallationNotFound(SkaraError):
    """The self-update mechanism cannot locate the installation."""


class RebuildFailed(SkaraError):
    """The rebuild after an update returned a non-zero status."""

    def __init__(self, returncode: int) -> None:
        super().__init__(
            f"could not build Skara tooling (exit status {returncode}), "
            "the checkout was updated, inspect the build output above"
        )
        self.returncode = returncode


class UnknownCommand(SkaraError):
    """The dispatcher received a command name it does not know."""

    def __init__(self, name: str) -> None:
        super().__init__(f"unknown command: {name}")
        self.name = name
