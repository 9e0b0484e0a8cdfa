"""Tests for single-pass diff filtering."""

import logging

from diffsift.diff.filter import DiffSummary, FileState, filter_diff, is_diff_line, sift
from diffsift.diff.policy import ExclusionPolicy


def _is_subsequence(needles, haystack):
    it = iter(haystack)
    return all(any(line == candidate for candidate in it) for line in needles)


def test_filter_keeps_source_file_lines(app_ts_diff):
    """Added lines and path markers of a source file survive."""
    result = filter_diff(app_ts_diff)

    assert result.split("\n") == [
        "--- a/src/app.ts",
        "+++ b/src/app.ts",
        "+const port = 8080;",
        "+start(port);",
    ]


def test_filter_drops_lock_file_section(mixed_diff):
    """Nothing from package-lock.json reaches the output."""
    result = filter_diff(mixed_diff)

    assert "package-lock.json" not in result
    assert "left-pad" not in result
    assert result == filter_diff(mixed_diff.split("diff --git a/package-lock.json")[0])


def test_filter_never_emits_file_headers(mixed_diff):
    result = filter_diff(mixed_diff)
    assert "diff --git" not in result
    assert "index " not in result
    assert "@@" not in result


def test_exclude_pattern_drops_matching_paths(docs_and_core_diff):
    """^docs/ removes the docs file while lib/core.rs survives."""
    result = filter_diff(docs_and_core_diff, exclude_pattern="^docs/")

    assert "Usage notes" not in result
    assert "docs/readme.rst" not in result
    assert result.split("\n") == [
        "--- a/lib/core.rs",
        "+++ b/lib/core.rs",
        "-    let limit = 10;",
        "+    let limit = 20;",
    ]


def test_exclude_pattern_is_searched_not_full_matched(docs_and_core_diff):
    result = filter_diff(docs_and_core_diff, exclude_pattern="readme")
    assert "Usage notes" not in result
    assert "+    let limit = 20;" in result


def test_without_pattern_docs_file_is_kept(docs_and_core_diff):
    result = filter_diff(docs_and_core_diff)
    assert "+Usage notes" in result


def test_invalid_pattern_falls_back_to_extension_rules(core_rs_diff, caplog):
    """An unparsable regex behaves like no pattern and logs a warning."""
    with caplog.at_level(logging.WARNING, logger="diffsift"):
        result = filter_diff(core_rs_diff, exclude_pattern="[unclosed")

    assert result == filter_diff(core_rs_diff)
    assert "+    let limit = 20;" in result
    assert any("Invalid exclude-pattern regex: [unclosed" in r.message for r in caplog.records)


def test_invalid_pattern_still_applies_extension_rules(mixed_diff):
    assert filter_diff(mixed_diff, exclude_pattern="(") == filter_diff(mixed_diff)


def test_changelog_only_diff_filters_to_empty(changelog_diff):
    assert filter_diff(changelog_diff) == ""


def test_context_only_diff_filters_to_empty():
    """Unprefixed context lines are never diff-content lines."""
    diff = "\n".join(
        [
            "diff --git a/src/main.py b/src/main.py",
            "index 1111111..2222222 100644",
            "@@ -1,2 +1,2 @@",
            " import os",
            " print(os.getcwd())",
        ]
    )
    assert filter_diff(diff) == ""


def test_empty_input():
    assert filter_diff("") == ""


def test_lines_before_first_header_are_kept_when_diff_lines():
    """The initial state keeps lines, matching a headerless patch."""
    diff = "--- a/app.py\n+++ b/app.py\n+print('hi')\n context"
    assert filter_diff(diff) == "--- a/app.py\n+++ b/app.py\n+print('hi')"


def test_output_is_subsequence_of_input(mixed_diff, docs_and_core_diff):
    combined = mixed_diff + docs_and_core_diff
    result = filter_diff(combined, exclude_pattern="^docs/")
    assert _is_subsequence(result.split("\n"), combined.split("\n"))


def test_filtering_is_idempotent_without_excluded_files(core_rs_diff, app_ts_diff):
    once = filter_diff(core_rs_diff + app_ts_diff)
    assert filter_diff(once) == once


def test_policy_argument_overrides_exclude_pattern(docs_and_core_diff):
    policy = ExclusionPolicy(exclude_pattern="^lib/")
    result = filter_diff(docs_and_core_diff, exclude_pattern="^docs/", policy=policy)
    assert "+Usage notes" in result
    assert "core.rs" not in result


def test_excluded_section_ends_at_next_header(changelog_diff, core_rs_diff):
    """Skipping state resets when the next file section starts."""
    result = filter_diff(changelog_diff + core_rs_diff)
    assert "Added port option" not in result
    assert result.startswith("--- a/lib/core.rs")


def test_directory_containing_extension_is_excluded():
    """Extensions are matched as substrings anywhere in the path.

    A directory such as ``docs.md/`` excludes every file below it. This is
    existing behavior that callers rely on, not an accident.
    """
    diff = "\n".join(
        [
            "diff --git a/vendor/docs.md/render.py b/vendor/docs.md/render.py",
            "--- a/vendor/docs.md/render.py",
            "+++ b/vendor/docs.md/render.py",
            "+def render(): pass",
        ]
    )
    assert filter_diff(diff) == ""


def test_is_diff_line_classification():
    assert is_diff_line("+++ b/app.py")
    assert is_diff_line("--- a/app.py")
    assert is_diff_line("+added")
    assert is_diff_line("-removed")
    assert not is_diff_line(" context")
    assert not is_diff_line("@@ -1 +1 @@")
    assert not is_diff_line("")


def test_file_state_values():
    assert {state.value for state in FileState} == {"keeping", "skipping"}


def test_sift_reports_kept_and_skipped_files(mixed_diff):
    filtered, summary = sift(mixed_diff)

    assert filtered == filter_diff(mixed_diff)
    assert isinstance(summary, DiffSummary)
    assert summary.kept_files == ["src/app.ts"]
    assert summary.skipped_files == ["package-lock.json"]
    assert summary.original_length == len(mixed_diff)
    assert summary.filtered_length == len(filtered)
    assert summary.to_json()["skipped_files"] == ["package-lock.json"]


def test_sift_judges_each_file_once(docs_and_core_diff, caplog):
    """An invalid pattern warns once per kept file, not again for the summary."""
    with caplog.at_level(logging.WARNING, logger="diffsift"):
        _, summary = sift(docs_and_core_diff, exclude_pattern="[unclosed")

    warnings = [r for r in caplog.records if "Invalid exclude-pattern" in r.message]
    assert len(warnings) == 2
    assert summary.kept_files == ["docs/readme.rst", "lib/core.rs"]


def test_crlf_line_endings_are_preserved():
    diff = "diff --git a/x.py b/x.py\r\n--- a/x.py\r\n+++ b/x.py\r\n+x = 1\r\n"
    assert filter_diff(diff).split("\n") == ["--- a/x.py\r", "+++ b/x.py\r", "+x = 1\r"]
