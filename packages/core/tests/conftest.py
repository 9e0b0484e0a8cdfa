"""Shared test fixtures."""

import pytest


APP_TS_DIFF = """diff --git a/src/app.ts b/src/app.ts
index 1111111..2222222 100644
--- a/src/app.ts
+++ b/src/app.ts
@@ -1,3 +1,5 @@
 import { start } from "./server";
+const port = 8080;
+start(port);
 export default start;
"""

LOCKFILE_DIFF = """diff --git a/package-lock.json b/package-lock.json
index 3333333..4444444 100644
--- a/package-lock.json
+++ b/package-lock.json
@@ -10,6 +10,7 @@
     "lodash": "4.17.21",
+    "left-pad": "1.3.0",
"""

CORE_RS_DIFF = """diff --git a/lib/core.rs b/lib/core.rs
index 5555555..6666666 100644
--- a/lib/core.rs
+++ b/lib/core.rs
@@ -4,4 +4,4 @@ fn main() {
     let total = 0;
-    let limit = 10;
+    let limit = 20;
     run(total, limit);
"""

DOCS_DIFF = """diff --git a/docs/readme.rst b/docs/readme.rst
index 7777777..8888888 100644
--- a/docs/readme.rst
+++ b/docs/readme.rst
@@ -1,2 +1,3 @@
 Overview
+Usage notes
"""

CHANGELOG_DIFF = """diff --git a/CHANGELOG.md b/CHANGELOG.md
index 9999999..aaaaaaa 100644
--- a/CHANGELOG.md
+++ b/CHANGELOG.md
@@ -1,2 +1,3 @@
 # Changelog
+- Added port option
"""


@pytest.fixture
def app_ts_diff() -> str:
    return APP_TS_DIFF


@pytest.fixture
def mixed_diff() -> str:
    """A source file followed by a lock file."""
    return APP_TS_DIFF + LOCKFILE_DIFF


@pytest.fixture
def core_rs_diff() -> str:
    return CORE_RS_DIFF


@pytest.fixture
def docs_and_core_diff() -> str:
    return DOCS_DIFF + CORE_RS_DIFF


@pytest.fixture
def changelog_diff() -> str:
    return CHANGELOG_DIFF
