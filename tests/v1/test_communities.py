# tests/v1/test_communities.py
"""Tests for community-related endpoints."""

from fastapi import status


def test_list_communities(client, community) -> None:
    """Test listing communities."""
    response = client.get("/api/v1/communities/")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["is_next"] is False
    assert [c["id"] for c in data["communities"]] == [community.external_id]


def test_search_communities(client, community, make_community, other_user) -> None:
    make_community(other_user, name="Gardeners", username="gardening")

    response = client.get("/api/v1/communities/", params={"q": "GARDEN"})

    assert response.status_code == status.HTTP_200_OK
    assert [c["username"] for c in response.json()["communities"]] == ["gardening"]


def test_get_community(client, community, test_user) -> None:
    """Test getting a specific community."""
    response = client.get(f"/api/v1/communities/{community.external_id}")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["username"] == "testers"
    assert data["created_by"]["id"] == test_user.external_id
    assert [m["id"] for m in data["members"]] == [test_user.external_id]


def test_get_nonexistent_community(client) -> None:
    """Test getting a non-existent community."""
    response = client.get("/api/v1/communities/org_missing")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {
        "detail": "Error while trying to fetch community data: Community not found",
        "kind": "not_found",
    }


def test_create_community(client, test_user, auth_token) -> None:
    """Test creating a new community."""
    response = client.post(
        "/api/v1/communities/",
        json={"id": "org_new", "name": "New Test Community", "username": "new-test"},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["id"] == "org_new"
    assert data["members"][0]["id"] == test_user.external_id


def test_create_duplicate_community(client, auth_token, community) -> None:
    """Test creating a community with a duplicate username."""
    response = client.post(
        "/api/v1/communities/",
        json={"id": "org_other", "name": "Different Name", "username": community.username},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["kind"] == "conflict"


def test_create_community_without_profile(client, auth_headers) -> None:
    response = client.post(
        "/api/v1/communities/",
        json={"id": "org_x", "name": "Ghost Town", "username": "ghosts"},
        headers=auth_headers("user_ghost"),
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_create_community_requires_auth(client) -> None:
    response = client.post(
        "/api/v1/communities/",
        json={"id": "org_x", "name": "Anon", "username": "anon"},
    )
    assert response.status_code in {status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN}


def test_community_posts(client, community, test_user, make_thread) -> None:
    thread = make_thread(test_user, "inside", community=community)
    make_thread(test_user, "outside")

    response = client.get(f"/api/v1/communities/{community.external_id}/posts")

    assert response.status_code == status.HTTP_200_OK
    assert [t["id"] for t in response.json()["threads"]] == [thread.id]


def test_join_and_leave_community(client, community, other_user, other_auth_token) -> None:
    url = f"/api/v1/communities/{community.external_id}/members"

    joined = client.post(url, json={"user_id": other_user.external_id}, headers=other_auth_token)
    assert joined.status_code == status.HTTP_201_CREATED
    assert other_user.external_id in [m["id"] for m in joined.json()["members"]]

    again = client.post(url, json={"user_id": other_user.external_id}, headers=other_auth_token)
    assert again.status_code == status.HTTP_409_CONFLICT
    assert again.json()["detail"] == (
        "Error while adding member to community: User is already a member of the community"
    )

    left = client.delete(f"{url}/{other_user.external_id}", headers=other_auth_token)
    assert left.status_code == status.HTTP_200_OK
    assert left.json() == {"success": True}


def test_only_creator_adds_others(client, community, make_user, other_auth_token) -> None:
    carol = make_user("user_carol")
    response = client.post(
        f"/api/v1/communities/{community.external_id}/members",
        json={"user_id": carol.external_id},
        headers=other_auth_token,
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_update_community(client, community, auth_token, other_auth_token) -> None:
    url = f"/api/v1/communities/{community.external_id}"
    body = {"name": "Renamed", "username": "renamed", "image": None}

    assert client.patch(url, json=body, headers=other_auth_token).status_code == 403

    response = client.patch(url, json=body, headers=auth_token)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["username"] == "renamed"


def test_delete_community(client, community, test_user, make_thread, auth_token, other_auth_token) -> None:
    make_thread(test_user, "doomed", community=community)
    url = f"/api/v1/communities/{community.external_id}"

    assert client.delete(url, headers=other_auth_token).status_code == 403

    response = client.delete(url, headers=auth_token)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["id"] == "org_test"

    assert client.get(url).status_code == status.HTTP_404_NOT_FOUND
    assert client.get("/api/v1/threads/").json()["posts"] == []


def test_delete_missing_community(client, auth_token) -> None:
    response = client.delete("/api/v1/communities/org_missing", headers=auth_token)
    assert response.status_code == status.HTTP_404_NOT_FOUND
