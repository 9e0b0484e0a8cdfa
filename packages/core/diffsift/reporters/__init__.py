"""Pull request comment formatting"""

from diffsift.reporters.comment import CommentReporter

__all__ = ["CommentReporter"]
