"""
Reviewers by Blame.

Suggests pull request reviewers from line-level blame of the code a change touches.
"""

__version__ = "0.1.0"
