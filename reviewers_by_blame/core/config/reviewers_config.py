"""
Reviewer selection configuration.
"""

import re
from dataclasses import dataclass, replace
from typing import Any

OVERRIDABLE_KEYS = ("max_reviewers", "ignore_file_pattern", "ignore_subject_pattern", "ignore_drafts", "enabled")


@dataclass(frozen=True)
class ReviewersConfig:
    """Reviewer selection settings, service-wide or overridden per repository."""

    max_reviewers: int = 3
    ignore_file_pattern: str = ""
    ignore_subject_pattern: str = ""
    ignore_drafts: bool = True
    enabled: bool = True

    def with_overrides(self, overrides: dict[str, Any]) -> "ReviewersConfig":
        """
        Return a copy with the known keys of a repository settings file applied.

        Raises:
            ValueError: If a value has the wrong type, ``max_reviewers`` is not
                positive, or a pattern does not compile.
        """
        known = {key: overrides[key] for key in OVERRIDABLE_KEYS if overrides.get(key) is not None}

        if "max_reviewers" in known:
            value = known["max_reviewers"]
            # YAML booleans are ints to Python
            if isinstance(value, bool):
                raise ValueError(f"max_reviewers must be an integer, got {value!r}")
            known["max_reviewers"] = int(value)
            if known["max_reviewers"] < 1:
                raise ValueError(f"max_reviewers must be a positive integer, got {value!r}")

        for key in ("ignore_file_pattern", "ignore_subject_pattern"):
            if key in known:
                known[key] = str(known[key])
                try:
                    re.compile(known[key])
                except re.error as e:
                    raise ValueError(f"{key} {known[key]!r} is not a valid regular expression: {e}") from e

        for key in ("ignore_drafts", "enabled"):
            if key in known and not isinstance(known[key], bool):
                raise ValueError(f"{key} must be true or false, got {known[key]!r}")

        return replace(self, **known)
