import json
from unittest.mock import AsyncMock, patch

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from reviewers_by_blame.webhooks.auth import sign_payload, verify_github_signature
from reviewers_by_blame.webhooks.router import get_dispatcher, router


@pytest.fixture
def mock_dispatcher() -> AsyncMock:
    dispatcher = AsyncMock()
    dispatcher.dispatch.return_value = {"status": "processed", "handler": "PullRequestEventHandler"}
    return dispatcher


@pytest.fixture
def app(mock_dispatcher: AsyncMock) -> FastAPI:
    """Create FastAPI test app with webhook router and signature check disabled."""
    test_app = FastAPI()
    test_app.include_router(router, prefix="/webhooks")
    test_app.dependency_overrides[verify_github_signature] = lambda: True
    test_app.dependency_overrides[get_dispatcher] = lambda: mock_dispatcher
    return test_app


@pytest.fixture
def pr_payload() -> dict[str, object]:
    return {
        "action": "opened",
        "sender": {"login": "octocat", "id": 1, "type": "User"},
        "installation": {"id": 7},
        "repository": {"id": 123456, "full_name": "octocat/hello"},
        "pull_request": {"number": 42, "title": "Fix the parser"},
    }


class TestWebhookRouter:
    @pytest.mark.asyncio
    async def test_pull_request_is_dispatched(self, app, mock_dispatcher, pr_payload) -> None:
        headers = {"X-GitHub-Event": "pull_request", "X-GitHub-Delivery": "d-1"}

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.post("/webhooks/github", json=pr_payload, headers=headers)

        assert response.status_code == 200
        assert response.json()["status"] == "event dispatched successfully"
        event = mock_dispatcher.dispatch.call_args.args[0]
        assert event.repo_full_name == "octocat/hello"
        assert event.delivery_id == "d-1"

    @pytest.mark.asyncio
    async def test_unsupported_event_is_acknowledged(self, app, mock_dispatcher, pr_payload) -> None:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.post("/webhooks/github", json=pr_payload, headers={"X-GitHub-Event": "star"})

        assert response.status_code == 200
        assert response.json()["status"] == "event received but not supported"
        mock_dispatcher.dispatch.assert_not_called()

    @pytest.mark.asyncio
    async def test_ping_is_acknowledged(self, app, mock_dispatcher) -> None:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.post(
                "/webhooks/github", json={"zen": "Keep it simple."}, headers={"X-GitHub-Event": "ping"}
            )

        assert response.json() == {"status": "pong"}
        mock_dispatcher.dispatch.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_event_header_is_rejected(self, app, pr_payload) -> None:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.post("/webhooks/github", json=pr_payload)

        assert response.status_code == 400


class TestSignature:
    @pytest.fixture
    def signed_app(self, mock_dispatcher: AsyncMock) -> FastAPI:
        test_app = FastAPI()
        test_app.include_router(router, prefix="/webhooks")
        test_app.dependency_overrides[get_dispatcher] = lambda: mock_dispatcher
        return test_app

    @pytest.mark.asyncio
    async def test_valid_signature_is_accepted(self, signed_app, pr_payload) -> None:
        body = json.dumps(pr_payload).encode()
        signature = sign_payload("s3cret", body)
        headers = {
            "X-GitHub-Event": "pull_request",
            "X-Hub-Signature-256": signature,
            "Content-Type": "application/json",
        }

        with patch("reviewers_by_blame.webhooks.auth.config") as mock_config:
            mock_config.github.webhook_secret = "s3cret"
            async with AsyncClient(transport=ASGITransport(app=signed_app), base_url="http://test") as client:
                response = await client.post("/webhooks/github", content=body, headers=headers)

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_invalid_signature_is_rejected(self, signed_app, pr_payload) -> None:
        headers = {"X-GitHub-Event": "pull_request", "X-Hub-Signature-256": "sha256=bogus"}

        with patch("reviewers_by_blame.webhooks.auth.config") as mock_config:
            mock_config.github.webhook_secret = "s3cret"
            async with AsyncClient(transport=ASGITransport(app=signed_app), base_url="http://test") as client:
                response = await client.post("/webhooks/github", json=pr_payload, headers=headers)

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_missing_signature_is_rejected(self, signed_app, pr_payload) -> None:
        async with AsyncClient(transport=ASGITransport(app=signed_app), base_url="http://test") as client:
            response = await client.post(
                "/webhooks/github", json=pr_payload, headers={"X-GitHub-Event": "pull_request"}
            )

        assert response.status_code == 401
