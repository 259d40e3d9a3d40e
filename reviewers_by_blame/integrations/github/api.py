import base64
import logging
import time
from typing import Any

import httpx
import jwt
from cachetools import TTLCache
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from reviewers_by_blame.core.config import config
from reviewers_by_blame.core.errors import GitHubRateLimitError

logger = logging.getLogger(__name__)


class GitHubClient:
    """
    A client for interacting with the GitHub API.

    This client handles the authentication flow for a GitHub App, including
    generating a JWT and exchanging it for an installation access token.
    Tokens are cached to improve performance and avoid rate limiting.

    Calls are blocking: the reviewer selection task runs in a worker thread.
    """

    def __init__(self, base_url: str | None = None, http_client: httpx.Client | None = None):
        self.base_url = (base_url or config.github.api_base_url).rstrip("/")
        self._app_id = config.github.app_id
        self._http = http_client or httpx.Client(timeout=30.0)
        # Cache for installation tokens (TTL: 50 minutes, GitHub tokens expire in 60)
        self._token_cache: TTLCache = TTLCache(maxsize=100, ttl=50 * 60)

    def close(self) -> None:
        """Closes the underlying HTTP client."""
        self._http.close()

    @retry(
        retry=retry_if_exception_type(httpx.TransportError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=8),
        reraise=True,
    )
    def get_installation_access_token(self, installation_id: int) -> str | None:
        """
        Gets an access token for a specific installation of the GitHub App.
        Caches the token to avoid regenerating it for every request.
        """
        if installation_id in self._token_cache:
            logger.debug(f"Using cached installation token for installation_id {installation_id}.")
            return self._token_cache[installation_id]

        headers = {
            "Authorization": f"Bearer {self._generate_jwt()}",
            "Accept": "application/vnd.github.v3+json",
        }
        url = f"{self.base_url}/app/installations/{installation_id}/access_tokens"

        response = self._http.post(url, headers=headers)
        if response.status_code == 201:
            token = response.json()["token"]
            self._token_cache[installation_id] = token
            logger.info(f"Generated new installation token for installation_id {installation_id}.")
            return token

        logger.error(
            f"Failed to get installation access token for installation {installation_id}. "
            f"Status: {response.status_code}, Response: {response.text}"
        )
        return None

    def request(
        self,
        method: str,
        path: str,
        token: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """
        Perform an authenticated REST call.

        Raises:
            GitHubRateLimitError: If GitHub answers with a rate limit error.
            httpx.TransportError: On network failure.
        """
        headers = {"Authorization": f"Bearer {token}", "Accept": "application/vnd.github.v3+json"}
        response = self._http.request(method, f"{self.base_url}{path}", headers=headers, params=params, json=json)
        if response.status_code in (403, 429) and "rate limit" in response.text.lower():
            raise GitHubRateLimitError(f"GitHub API rate limit exceeded for {method} {path}")
        return response

    def _generate_jwt(self) -> str:
        """Generates a JSON Web Token (JWT) to authenticate as the GitHub App."""
        now = int(time.time())
        payload = {
            "iat": now - 60,
            "exp": now + (10 * 60),
            "iss": self._app_id,
        }
        return jwt.encode(payload, self._decode_private_key(), algorithm="RS256")

    @staticmethod
    def _decode_private_key() -> str:
        """Decodes the base64-encoded private key from the configuration."""
        try:
            return base64.b64decode(config.github.private_key).decode("utf-8")
        except Exception as e:
            logger.error(f"Failed to decode private key: {e}")
            raise ValueError("Invalid private key format. Expected base64-encoded PEM key.") from e


# Global instance
github_client = GitHubClient()
