from __future__ import annotations

from typing import Any

from httpx import AsyncClient, Response

DEFAULT_PASSWORD = "password123"


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


async def register(
    client: AsyncClient,
    name: str,
    *,
    role: str = "employee",
    email: str | None = None,
    password: str = DEFAULT_PASSWORD,
) -> dict[str, Any]:
    """Register through the API and return the response body (token + user)."""
    response = await client.post(
        "/auth/register",
        json={
            "name": name,
            "email": email or f"{name.lower().replace(' ', '.')}@example.com",
            "password": password,
            "role": role,
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


def training_payload(**overrides: Any) -> dict[str, Any]:
    payload = {
        "title": "Workplace Safety",
        "description": "Hazard awareness and reporting",
        "category": "Compliance",
        "durationHours": 2.5,
    }
    payload.update(overrides)
    return payload


async def create_training(client: AsyncClient, token: str, **overrides: Any) -> dict[str, Any]:
    response = await client.post(
        "/trainings", json=training_payload(**overrides), headers=auth_headers(token)
    )
    assert response.status_code == 201, response.text
    return response.json()["training"]


async def assign(
    client: AsyncClient, token: str, employee_id: str, training_id: str
) -> Response:
    return await client.post(
        "/assignments",
        json={"employeeId": employee_id, "trainingId": training_id},
        headers=auth_headers(token),
    )
