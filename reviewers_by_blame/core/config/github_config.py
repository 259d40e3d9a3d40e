"""
GitHub App configuration.
"""

from dataclasses import dataclass


@dataclass
class GitHubConfig:
    """Credentials of the GitHub App and the endpoints it talks to."""

    app_name: str
    app_id: str
    private_key: str
    webhook_secret: str
    api_base_url: str = "https://api.github.com"
    # Clones and fetches go to the web host, not the API host
    git_base_url: str = "https://github.com"

    def missing_settings(self) -> list[str]:
        """Names of the required environment variables that are unset."""
        required = {
            "APP_NAME_GITHUB": self.app_name,
            "APP_CLIENT_ID_GITHUB": self.app_id,
            "PRIVATE_KEY_BASE64_GITHUB": self.private_key,
            "WEBHOOK_SECRET_GITHUB": self.webhook_secret,
        }
        return [name for name, value in required.items() if not value]
