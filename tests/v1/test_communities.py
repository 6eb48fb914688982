"""Tests for community endpoints."""

from fastapi import status


def test_create_and_list(client, auth_headers) -> None:
    response = client.post(
        "/api/v1/communities/",
        json={"name": "Dawn Readers", "type": "public"},
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_201_CREATED
    created = response.json()
    assert created["invite_code"] is None

    listing = client.get("/api/v1/communities/")
    assert listing.status_code == status.HTTP_200_OK
    assert [(row["name"], row["member_count"]) for row in listing.json()] == [("Dawn Readers", 1)]

    mine = client.get("/api/v1/communities/mine", headers=auth_headers).json()
    assert mine[0]["role"] == "owner"

    active = client.get("/api/v1/communities/active", headers=auth_headers).json()
    assert active["id"] == created["id"]


def test_create_rejects_short_names(client, auth_headers) -> None:
    response = client.post(
        "/api/v1/communities/",
        json={"name": "ab", "type": "public"},
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_join_and_leave(client, other_auth_headers, community) -> None:
    joined = client.post(f"/api/v1/communities/{community.id}/join", headers=other_auth_headers)
    assert joined.status_code == status.HTTP_200_OK

    twice = client.post(f"/api/v1/communities/{community.id}/join", headers=other_auth_headers)
    assert twice.status_code == status.HTTP_409_CONFLICT

    left = client.delete(
        f"/api/v1/communities/{community.id}/members/me",
        headers=other_auth_headers,
    )
    assert left.status_code == status.HTTP_204_NO_CONTENT


def test_owner_cannot_leave(client, auth_headers, community) -> None:
    response = client.delete(
        f"/api/v1/communities/{community.id}/members/me",
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_private_join_by_code(client, auth_headers, other_auth_headers) -> None:
    created = client.post(
        "/api/v1/communities/",
        json={"name": "Family", "type": "private"},
        headers=auth_headers,
    ).json()

    blocked = client.post(f"/api/v1/communities/{created['id']}/join", headers=other_auth_headers)
    assert blocked.status_code == status.HTTP_403_FORBIDDEN

    joined = client.post(
        "/api/v1/communities/join",
        json={"invite_code": created["invite_code"]},
        headers=other_auth_headers,
    )
    assert joined.status_code == status.HTTP_200_OK
    assert joined.json()["id"] == created["id"]


def test_set_active_community(client, auth_headers, other_auth_headers, community) -> None:
    forbidden = client.put(
        "/api/v1/communities/active",
        json={"community_id": community.id},
        headers=other_auth_headers,
    )
    assert forbidden.status_code == status.HTTP_403_FORBIDDEN

    cleared = client.put(
        "/api/v1/communities/active",
        json={"community_id": None},
        headers=auth_headers,
    )
    assert cleared.status_code == status.HTTP_204_NO_CONTENT
    assert client.get("/api/v1/communities/active", headers=auth_headers).json() is None
