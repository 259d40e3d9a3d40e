"""
Shared utilities.
"""

from reviewers_by_blame.core.utils.logging import log_operation

__all__ = [
    "log_operation",
]
