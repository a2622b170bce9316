# tests/v1/test_auth.py
"""Tests for the sign-in event endpoint and bearer token handling."""

from __future__ import annotations

from datetime import timedelta
from unittest.mock import patch

from fastapi import status

from newslens.core.errors import PersistenceError
from newslens.core.security import create_access_token
from newslens.db.time import utctoday
from newslens.models import Profile


def test_login_event_starts_streak(client, auth_token, db_session, user_id) -> None:
    response = client.post("/api/v1/auth/login-event", headers=auth_token)

    assert response.status_code == status.HTTP_202_ACCEPTED
    assert response.json() == {"success": True, "daily_streak": 1}
    profile = db_session.get(Profile, user_id)
    assert profile.last_login_date == utctoday()


def test_login_event_twice_same_day(client, auth_token) -> None:
    client.post("/api/v1/auth/login-event", headers=auth_token)
    response = client.post("/api/v1/auth/login-event", headers=auth_token)

    assert response.json() == {"success": True, "daily_streak": 1}


def test_login_event_extends_streak(client, auth_token, db_session, user_id) -> None:
    db_session.add(
        Profile(
            user_id=user_id,
            daily_streak=2,
            last_login_date=utctoday() - timedelta(days=1),
        )
    )
    db_session.commit()

    response = client.post("/api/v1/auth/login-event", headers=auth_token)

    assert response.json() == {"success": True, "daily_streak": 3}
    badges = client.get("/api/v1/badges/me", headers=auth_token).json()
    assert [award["badge"]["name"] for award in badges["badges"]] == ["Daily Reader"]


def test_login_event_failure_does_not_block(client, auth_token) -> None:
    with patch(
        "newslens.api.v1.endpoints.auth.StreakService.record_login",
        side_effect=PersistenceError("Failed to update daily streak"),
    ):
        response = client.post("/api/v1/auth/login-event", headers=auth_token)

    assert response.status_code == status.HTTP_202_ACCEPTED
    assert response.json() == {"success": False, "daily_streak": None}


def test_login_event_requires_auth(client) -> None:
    response = client.post("/api/v1/auth/login-event")

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["detail"] == "No authorization header"


def test_expired_token_rejected(client) -> None:
    token = create_access_token("user-primary", expires_delta=timedelta(minutes=-5))

    response = client.post(
        "/api/v1/auth/login-event",
        headers={"Authorization": f"Bearer {token}"},
    )

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["detail"] == "Could not validate credentials"
