"""
Main configuration class that composes all configs.
"""

import os
import tempfile

from dotenv import load_dotenv

from reviewers_by_blame.core.config.github_config import GitHubConfig
from reviewers_by_blame.core.config.logging_config import LoggingConfig
from reviewers_by_blame.core.config.repo_config import RepoConfig
from reviewers_by_blame.core.config.reviewers_config import ReviewersConfig
from reviewers_by_blame.core.config.workspace_config import WorkspaceConfig

# Load environment variables from a .env file
load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


class Config:
    """Main configuration class."""

    def __init__(self) -> None:
        self.github = GitHubConfig(
            app_name=os.getenv("APP_NAME_GITHUB", ""),
            app_id=os.getenv("APP_CLIENT_ID_GITHUB", ""),
            private_key=os.getenv("PRIVATE_KEY_BASE64_GITHUB", ""),
            webhook_secret=os.getenv("WEBHOOK_SECRET_GITHUB", ""),
            api_base_url=os.getenv("GITHUB_API_BASE_URL", "https://api.github.com"),
            git_base_url=os.getenv("GITHUB_GIT_BASE_URL", "https://github.com"),
        )

        self.reviewers = ReviewersConfig(
            max_reviewers=int(os.getenv("MAX_REVIEWERS", "3")),
            ignore_file_pattern=os.getenv("IGNORE_FILE_PATTERN", ""),
            ignore_subject_pattern=os.getenv("IGNORE_SUBJECT_PATTERN", ""),
            ignore_drafts=_env_flag("IGNORE_DRAFTS", "true"),
        )

        self.repo_config = RepoConfig(
            base_path=os.getenv("REPO_CONFIG_BASE_PATH", ".github"),
            config_file=os.getenv("REPO_CONFIG_FILE", "reviewers-by-blame.yaml"),
        )

        self.workspace = WorkspaceConfig(
            repo_cache_dir=os.getenv(
                "REPO_CACHE_DIR", os.path.join(tempfile.gettempdir(), "reviewers-by-blame")
            ),
        )

        self.logging = LoggingConfig(
            level=os.getenv("LOG_LEVEL", "INFO"),
            format=os.getenv("LOG_FORMAT", "%(asctime)s %(levelname)8s %(name)s %(message)s"),
        )

    def validate(self) -> bool:
        """Validate configuration."""
        errors = [f"{name} is required" for name in self.github.missing_settings()]

        if self.reviewers.max_reviewers < 1:
            errors.append("MAX_REVIEWERS must be a positive integer")

        if errors:
            raise ValueError(f"Configuration errors: {', '.join(errors)}")

        return True


# Global config instance
config = Config()
