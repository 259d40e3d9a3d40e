"""
Repository configuration.
"""

from dataclasses import dataclass


@dataclass
class RepoConfig:
    """Location of the per-repository settings file."""

    base_path: str = ".github"
    config_file: str = "reviewers-by-blame.yaml"

    @property
    def file_path(self) -> str:
        return f"{self.base_path}/{self.config_file}" if self.base_path else self.config_file
