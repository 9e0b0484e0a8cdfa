"""Per-file exclusion rules for pull request diffs."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import re
from typing import Optional, Sequence, Union

logger = logging.getLogger(__name__)

# Matched as case-insensitive substrings of the path, not as true suffixes:
# "docs/mdfiles/app.py" is excluded because it contains ".md".
EXCLUDED_EXTENSIONS = (".json", ".lock", ".md", ".txt", ".png", ".jpg", ".pdf")

DIFF_GIT_PATH_RE = re.compile(r"diff --git a/(.+?) b/")
OLD_PATH_RE = re.compile(r"^--- a/(.+)$")
NEW_PATH_RE = re.compile(r"^\+\+\+ b/(.+)$")

PATH_PATTERNS = (DIFF_GIT_PATH_RE, OLD_PATH_RE, NEW_PATH_RE)


@dataclass(frozen=True)
class FilePath:
    """A path recovered from a diff header line."""

    path: str


@dataclass(frozen=True)
class UnknownPath:
    """A header line no path pattern could parse."""

    line: str


PathResult = Union[FilePath, UnknownPath]


def extract_file_path(line: str) -> PathResult:
    """Pull the file path out of a ``diff --git``, ``---`` or ``+++`` line.

    Patterns are tried in that order and the first capture wins.
    """
    for pattern in PATH_PATTERNS:
        match = pattern.search(line)
        if match:
            return FilePath(match.group(1))
    return UnknownPath(line)


def has_excluded_extension(text: str, extensions: Sequence[str] = EXCLUDED_EXTENSIONS) -> bool:
    lowered = text.lower()
    return any(ext in lowered for ext in extensions)


def matches_exclude_pattern(file_path: str, exclude_pattern: Optional[str]) -> bool:
    """Search ``file_path`` with the user supplied regex.

    An invalid regex is logged and treated as non-matching.
    """
    if not exclude_pattern:
        return False

    try:
        regex = re.compile(exclude_pattern)
    except re.error as exc:
        logger.warning("Invalid exclude-pattern regex: %s. Error: %s", exclude_pattern, exc)
        return False
    return regex.search(file_path) is not None


@dataclass(frozen=True)
class ExclusionPolicy:
    """Decides whether a file section of a diff is dropped."""

    exclude_pattern: Optional[str] = None
    excluded_extensions: Sequence[str] = EXCLUDED_EXTENSIONS

    def is_excluded(self, line: str) -> bool:
        return is_excluded_file(line, self.excluded_extensions, self.exclude_pattern)


def is_excluded_file(
    line: str,
    excluded_extensions: Sequence[str] = EXCLUDED_EXTENSIONS,
    exclude_pattern: Optional[str] = None,
) -> bool:
    """Decide exclusion for the file introduced by a diff header line.

    Args:
        line: The ``diff --git`` (or ``---``/``+++``) header line.
        excluded_extensions: Substrings that exclude a path outright.
        exclude_pattern: Optional user regex, consulted only when no
            extension matched.

    Returns:
        True when the file's lines must not reach the filtered diff.
    """
    result = extract_file_path(line)

    if isinstance(result, UnknownPath):
        return has_excluded_extension(result.line, excluded_extensions)

    if has_excluded_extension(result.path, excluded_extensions):
        return True

    return matches_exclude_pattern(result.path, exclude_pattern)
