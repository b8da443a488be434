import logging

import pytest
import structlog
from fastapi import status
from httpx import AsyncClient
from src.api.routes import health
from src.domain.services.trainings import TrainingService
from structlog.testing import LogCapture
from tests.utils import auth_headers, register


async def test_health_endpoint_returns_service_metadata(async_client: AsyncClient) -> None:
    response = await async_client.get("/health")

    assert response.status_code == status.HTTP_200_OK
    payload = response.json()
    assert payload["service"]
    assert payload["status"] == "ok"
    assert payload["datastores"]["database"] == {"status": "ok"}


async def test_root_banner(async_client: AsyncClient) -> None:
    response = await async_client.get("/")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["message"] == "Employee Training Management System API is running."


async def test_request_id_is_echoed(async_client: AsyncClient) -> None:
    response = await async_client.get("/", headers={"X-Request-ID": "req-42"})

    assert response.headers["X-Request-ID"] == "req-42"


async def test_health_log_keeps_processor_timestamp(
    async_client: AsyncClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    capture = LogCapture()
    monkeypatch.setattr(
        health,
        "logger",
        structlog.wrap_logger(
            None,
            processors=[capture],
            wrapper_class=structlog.make_filtering_bound_logger(logging.INFO),
        ),
    )

    await async_client.get("/health")

    [entry] = [e for e in capture.entries if e["event"] == "health_checked"]
    assert entry["status"] == "ok"
    assert entry["datastores"] == {"database": {"status": "ok"}}
    assert "timestamp" not in entry


async def test_server_error_carries_cors_headers(
    async_client: AsyncClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    admin = await register(async_client, "Alice Admin", role="admin")

    async def _boom(self) -> list:
        raise RuntimeError("database on fire")

    monkeypatch.setattr(TrainingService, "list", _boom)

    response = await async_client.get(
        "/trainings",
        headers={**auth_headers(admin["token"]), "Origin": "http://frontend.example"},
    )

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"message": "Server error."}
    assert response.headers["access-control-allow-origin"] == "*"
    assert "x-request-id" in response.headers
