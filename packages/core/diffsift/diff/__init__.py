"""Diff filtering and exclusion helpers."""

from diffsift.diff.filter import (
    DiffSummary,
    FileState,
    filter_diff,
    is_diff_line,
    sift,
)
from diffsift.diff.policy import (
    EXCLUDED_EXTENSIONS,
    ExclusionPolicy,
    FilePath,
    UnknownPath,
    extract_file_path,
    has_excluded_extension,
    is_excluded_file,
    matches_exclude_pattern,
)

__all__ = [
    "DiffSummary",
    "FileState",
    "filter_diff",
    "is_diff_line",
    "sift",
    "EXCLUDED_EXTENSIONS",
    "ExclusionPolicy",
    "FilePath",
    "UnknownPath",
    "extract_file_path",
    "has_excluded_extension",
    "is_excluded_file",
    "matches_exclude_pattern",
]
