"""
DiffSift - Trim pull-request diffs down to the lines worth sending to a model
"""

from diffsift.diff.filter import filter_diff
from diffsift.diff.policy import ExclusionPolicy

__version__ = "0.1.0"

__all__ = [
    "filter_diff",
    "ExclusionPolicy",
]
