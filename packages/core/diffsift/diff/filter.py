"""Single-pass filtering of unified diffs."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import List, Optional, Tuple

from diffsift.diff.policy import ExclusionPolicy, FilePath, extract_file_path

logger = logging.getLogger(__name__)

FILE_HEADER_PREFIX = "diff --git"
DIFF_LINE_PREFIXES = ("+++", "---", "+", "-")


class FileState(Enum):
    """Whether lines of the current file section are kept."""

    KEEPING = "keeping"
    SKIPPING = "skipping"


@dataclass
class DiffSummary:
    """Size and file breakdown of one filtering run."""

    original_length: int
    filtered_length: int
    kept_files: List[str] = field(default_factory=list)
    skipped_files: List[str] = field(default_factory=list)

    def to_json(self) -> dict:
        return {
            "original_length": self.original_length,
            "filtered_length": self.filtered_length,
            "kept_files": self.kept_files,
            "skipped_files": self.skipped_files,
        }


def is_diff_line(line: str) -> bool:
    return line.startswith(DIFF_LINE_PREFIXES)


def _header_name(line: str) -> str:
    result = extract_file_path(line)
    return result.path if isinstance(result, FilePath) else line


def sift(
    raw_diff: str,
    exclude_pattern: Optional[str] = None,
    policy: Optional[ExclusionPolicy] = None,
) -> Tuple[str, DiffSummary]:
    """Filter a diff and report the per-file decisions made along the way.

    Each ``diff --git`` header is judged exactly once, so a user pattern is
    evaluated (and an invalid one warned about) once per file section.

    Args:
        raw_diff: Unified diff text, possibly spanning many files.
        exclude_pattern: Optional regex of paths to drop, used when no
            ``policy`` is given.
        policy: Exclusion rules; overrides ``exclude_pattern``.

    Returns:
        The filtered diff and a DiffSummary of kept and skipped files.
    """
    if policy is None:
        policy = ExclusionPolicy(exclude_pattern=exclude_pattern)

    filtered: List[str] = []
    kept_files: List[str] = []
    skipped_files: List[str] = []
    state = FileState.KEEPING

    for line in raw_diff.split("\n"):
        if line.startswith(FILE_HEADER_PREFIX):
            if policy.is_excluded(line):
                state = FileState.SKIPPING
                skipped_files.append(_header_name(line))
            else:
                state = FileState.KEEPING
                kept_files.append(_header_name(line))
            continue

        if state is FileState.SKIPPING or not is_diff_line(line):
            continue

        filtered.append(line)

    clean_diff = "\n".join(filtered)
    summary = DiffSummary(
        original_length=len(raw_diff),
        filtered_length=len(clean_diff),
        kept_files=kept_files,
        skipped_files=skipped_files,
    )
    logger.debug("Diff summary: kept=%d skipped=%d", len(kept_files), len(skipped_files))
    return clean_diff, summary


def filter_diff(
    raw_diff: str,
    exclude_pattern: Optional[str] = None,
    policy: Optional[ExclusionPolicy] = None,
) -> str:
    """Keep only added/removed lines and path markers of non-excluded files.

    Returns:
        Retained lines joined with newlines, in input order.
    """
    clean_diff, _ = sift(raw_diff, exclude_pattern=exclude_pattern, policy=policy)
    return clean_diff
