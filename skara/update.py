"""Self-update of the installed skara checkout."""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from pathlib import Path
from subprocess import run

import click

from skara.config import Personality
from skara.errors import InstallationNotFound, RebuildFailed
from skara.git import Repository, read_vcs_config
from skara.store import RevisionStore

logger = logging.getLogger(__name__)

ConfigReader = Callable[[str, str], list[str]]
RepositoryLocator = Callable[[Path], RevisionStore | None]
Builder = Callable[[Path], int]


def locate_installation(personality: Personality, read_config: ConfigReader) -> Path:
    """Return the path configured as the skara entry point for personality."""
    lines = read_config(personality.vcs, personality.install_key)
    if personality.install_suffix is None:
        if len(lines) != 1:
            raise InstallationNotFound("could not find skara repository")
        line = lines[0]
    else:
        matches = [item for item in lines if item.endswith(personality.install_suffix)]
        if len(matches) != 1:
            raise InstallationNotFound("could not find skara repository")
        line = matches[0]
    return expand_home(line.strip())


def expand_home(value: str) -> Path:
    """Replace a leading ~ with the user's home directory."""
    if value.startswith("~"):
        return Path(str(Path.home()) + value[1:])
    return Path(value)


def build_command(platform: str | None = None) -> list[str]:
    """Return the rebuild command for the current platform."""
    platform = platform or sys.platform
    if platform.startswith("win"):
        return ["gradlew.bat"]
    return ["sh", "gradlew"]


def run_build(root: Path) -> int:
    """Run the rebuild in root with inherited standard streams."""
    return run(build_command(), cwd=root, check=False).returncode


def update(
    personality: Personality,
    *,
    read_config: ConfigReader = read_vcs_config,
    locate_repository: RepositoryLocator = Repository.get,
    build: Builder = run_build,
) -> bool:
    """Pull the installation and rebuild it if anything changed.

    Returns True when updates were downloaded and rebuilt, False when the
    installation was already current.
    """
    path = locate_installation(personality, read_config)
    parent = path.parent
    if not parent.is_dir():
        raise InstallationNotFound(f"{parent} does not exist")

    repo = locate_repository(parent)
    if repo is None:
        raise InstallationNotFound(f"could not find skara repository at {parent}")

    head = repo.head()
    click.echo("Checking for updates ...", nl=False)
    try:
        repo.pull()
    except Exception:
        click.echo()
        raise
    new_head = repo.head()
    logger.debug("installation head %s -> %s", head, new_head)

    if head == new_head:
        click.echo("no updates found")
        return False

    click.echo("updates downloaded")
    click.echo("Rebuilding ...")
    returncode = build(repo.root())
    if returncode != 0:
        raise RebuildFailed(returncode)
    return True
