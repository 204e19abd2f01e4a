"""File-level view of git unified diffs."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath

DEV_NULL = "/dev/null"


@dataclass(slots=True)
class FileDiff:
    """Paths and line counts of one file in a patch."""

    old_path: str | None
    new_path: str | None
    added: int = 0
    deleted: int = 0

    @property
    def path(self) -> str:
        """Best-effort canonical path for reporting."""
        if self.new_path and self.new_path != DEV_NULL:
            return self.new_path
        if self.old_path and self.old_path != DEV_NULL:
            return self.old_path
        return "<unknown>"


def parse_unified_diff(diff_text: str) -> list[FileDiff]:
    """Split unified diff text into per-file entries."""
    files: list[FileDiff] = []
    current: FileDiff | None = None
    in_hunk = False

    for raw_line in diff_text.splitlines():
        if raw_line.startswith("diff --git "):
            current = _start_file_from_diff_header(raw_line)
            files.append(current)
            in_hunk = False
            continue

        if current is None:
            continue

        if raw_line.startswith("@@ "):
            in_hunk = True
        elif in_hunk and raw_line.startswith("+"):
            current.added += 1
        elif in_hunk and raw_line.startswith("-"):
            current.deleted += 1
        elif raw_line.startswith("--- "):
            current.old_path = _parse_path(raw_line[4:])
        elif raw_line.startswith("+++ "):
            current.new_path = _parse_path(raw_line[4:])
        elif raw_line.startswith("rename from "):
            current.old_path = raw_line[len("rename from ") :]
        elif raw_line.startswith("rename to "):
            current.new_path = raw_line[len("rename to ") :]

    return files


def touched_modules(files: list[FileDiff], source_root: str = "src") -> list[str]:
    """Return module names for files under <source_root>/<module>/, in first-seen order."""
    modules: dict[str, None] = {}
    for file_diff in files:
        # new files count; a file directly under source_root names no module
        parts = PurePosixPath(file_diff.path).parts
        if len(parts) > 2 and parts[0] == source_root:
            modules.setdefault(parts[1], None)
    return list(modules)


def _start_file_from_diff_header(line: str) -> FileDiff:
    parts = line.split(maxsplit=3)
    old_path = _strip_ab_prefix(parts[2]) if len(parts) > 2 else None
    new_path = _strip_ab_prefix(parts[3]) if len(parts) > 3 else None
    return FileDiff(old_path=old_path, new_path=new_path)


def _parse_path(value: str) -> str:
    token = value.strip().split("\t", 1)[0]
    return _strip_ab_prefix(token)


def _strip_ab_prefix(path: str) -> str:
    if path.startswith("a/") or path.startswith("b/"):
        return path[2:]
    return path
