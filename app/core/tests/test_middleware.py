"""Tests for request middleware."""

import pytest


@pytest.mark.asyncio
async def test_request_id_middleware_generates_id(client):
    """Middleware should generate request ID if not provided."""
    response = await client.get("/health")

    request_id = response.headers.get("X-Request-ID")
    assert request_id is not None
    assert len(request_id) == 36  # UUID format


@pytest.mark.asyncio
async def test_request_id_middleware_preserves_provided_id(client):
    """Middleware should preserve client-provided request ID."""
    custom_id = "my-custom-request-id"
    response = await client.get("/health", headers={"X-Request-ID": custom_id})

    assert response.headers["X-Request-ID"] == custom_id


@pytest.mark.asyncio
async def test_request_id_middleware_different_ids_per_request(client):
    """Each request should get a unique ID if not provided."""
    response1 = await client.get("/health")
    response2 = await client.get("/health")

    assert response1.headers["X-Request-ID"] != response2.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_problem_details_carry_request_id(client, levels_json):
    """Error documents reference the request that produced them."""
    response = await client.post(
        "/dashboard/tables/levels",
        params={"sort_key": "missing"},
        json=levels_json,
        headers={"X-Request-ID": "req-42"},
    )

    assert response.status_code == 400
    data = response.json()
    assert data["request_id"] == "req-42"
    assert data["instance"] == "/requests/req-42"
