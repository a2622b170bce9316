# tests/v1/test_badges.py
"""Tests for badge endpoints."""

from fastapi import status


def test_list_catalog(client) -> None:
    response = client.get("/api/v1/badges/")

    assert response.status_code == status.HTTP_200_OK
    names = {badge["name"] for badge in response.json()}
    assert names == {
        "First Vote",
        "Active Voter",
        "Vote Champion",
        "Vote Legend",
        "Daily Reader",
        "Week Warrior",
    }


def test_my_badges_empty(client, auth_token) -> None:
    response = client.get("/api/v1/badges/me", headers=auth_token)

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "success": True,
        "badges": [],
        "profile": {"reputation_score": 0, "total_badges": 0, "daily_streak": 0},
    }


def test_my_badges_after_first_vote(client, auth_token, test_article) -> None:
    client.post(
        "/api/v1/votes/",
        json={"article_id": test_article.id, "vote_type": "upvote"},
        headers=auth_token,
    )

    response = client.get("/api/v1/badges/me", headers=auth_token)

    data = response.json()
    assert [award["badge"]["name"] for award in data["badges"]] == ["First Vote"]
    assert data["badges"][0]["badge"]["requirement_value"] == 1
    assert data["profile"]["reputation_score"] == 5
    assert data["profile"]["total_badges"] == 1


def test_my_badges_requires_auth(client) -> None:
    response = client.get("/api/v1/badges/me")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
