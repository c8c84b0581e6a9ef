# tests/v1/test_users.py
"""Tests for user profile and directory endpoints."""

from fastapi import status

PROFILE = {
    "profile_photo": "https://img.example.com/me.png",
    "name": "New Comer",
    "username": "NewComer",
    "bio": "Just arrived",
}


def test_onboard_profile(client, auth_headers, redis_client) -> None:
    response = client.put(
        "/api/v1/users/me",
        json=PROFILE,
        params={"path": "/onboarding"},
        headers=auth_headers("user_new"),
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["id"] == "user_new"
    assert data["username"] == "newcomer"
    assert data["onboarded"] is True
    redis_client.sadd.assert_not_called()


def test_edit_profile_revalidates(client, test_user, auth_token, redis_client) -> None:
    response = client.put("/api/v1/users/me", json=PROFILE, headers=auth_token)
    assert response.status_code == status.HTTP_200_OK
    redis_client.sadd.assert_called_once_with("test:stale-paths", "/profile/edit")


def test_invalid_profile(client, auth_token) -> None:
    response = client.put(
        "/api/v1/users/me",
        json={**PROFILE, "username": "x", "profile_photo": "nope"},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    fields = {error["field"] for error in response.json()["detail"]}
    assert fields == {"username", "profile_photo"}


def test_profile_username_taken(client, test_user, other_user, auth_token) -> None:
    response = client.put(
        "/api/v1/users/me",
        json={**PROFILE, "username": "Bob"},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_409_CONFLICT


def test_get_user(client, test_user, community) -> None:
    response = client.get(f"/api/v1/users/{test_user.external_id}")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["name"] == "Alice"
    assert [c["id"] for c in data["communities"]] == [community.external_id]


def test_get_nonexistent_user(client) -> None:
    response = client.get("/api/v1/users/user_missing")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Failed to fetch user: User not found"


def test_list_users_excludes_viewer(client, test_user, other_user, auth_token) -> None:
    response = client.get("/api/v1/users/", headers=auth_token)
    assert response.status_code == status.HTTP_200_OK
    assert [u["id"] for u in response.json()["users"]] == [other_user.external_id]


def test_user_threads_and_activity(client, test_user, other_user, make_thread) -> None:
    mine = make_thread(test_user, "mine")
    reply = make_thread(other_user, "reply", parent=mine)

    threads = client.get(f"/api/v1/users/{test_user.external_id}/threads").json()
    assert [t["id"] for t in threads] == [mine.id]

    activity = client.get(f"/api/v1/users/{test_user.external_id}/activity").json()
    assert [a["id"] for a in activity] == [reply.id]
    assert activity[0]["author"]["name"] == "Bob"
