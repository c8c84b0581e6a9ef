# tests/v1/test_revalidation_api.py
"""Tests for the stale path endpoints."""

from fastapi import status


def test_list_stale_paths(client, redis_client) -> None:
    redis_client.smembers.return_value = {b"/search", b"/"}

    response = client.get("/api/v1/revalidation/stale")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"paths": ["/", "/search"]}


def test_consume_stale_path(client, redis_client) -> None:
    redis_client.srem.return_value = 1

    response = client.post("/api/v1/revalidation/consume", params={"path": "/activity"})

    assert response.json() == {"path": "/activity", "stale": True}
    redis_client.srem.assert_called_once_with("test:stale-paths", "/activity")
