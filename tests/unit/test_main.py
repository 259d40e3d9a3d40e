from unittest.mock import patch

import pytest
from httpx import ASGITransport, AsyncClient

from reviewers_by_blame.main import app, lifespan


@pytest.mark.asyncio
async def test_root_health_check() -> None:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_task_health_reports_queue_state() -> None:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/health/tasks")

    body = response.json()
    assert response.status_code == 200
    assert body["task_queue_status"] == "stopped"
    assert set(body["tasks"]) >= {"pending", "completed", "failed", "total"}


@pytest.mark.asyncio
async def test_startup_fails_on_invalid_configuration() -> None:
    with (
        patch("reviewers_by_blame.main.config") as mock_config,
        patch("reviewers_by_blame.main.task_queue") as mock_queue,
    ):
        mock_config.validate.side_effect = ValueError("Configuration errors: APP_CLIENT_ID_GITHUB is required")

        with pytest.raises(ValueError, match="APP_CLIENT_ID_GITHUB"):
            async with lifespan(app):
                pass

    mock_queue.start_workers.assert_not_called()
