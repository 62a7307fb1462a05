"""
Access log: user attribution and keeping private bodies out of the logs
"""
import logging

import pytest
from httpx import AsyncClient

from app.core.middleware import body_is_loggable
from tests.conftest import TEST_PASSWORD


@pytest.fixture
def debug_logs(caplog):
    caplog.set_level(logging.DEBUG, logger="messfeedback")
    return caplog


def access_records(caplog, path):
    return [
        r for r in caplog.records
        if getattr(r, "event_type", None) == "http_request" and getattr(r, "http_path", None) == path
    ]


def everything_logged(caplog) -> str:
    return "\n".join(f"{r.getMessage()} {vars(r)}" for r in caplog.records)


@pytest.mark.parametrize("path", [
    "/api/auth/login",
    "/api/auth/signup",
    "/api/complaints",
    "/api/complaints/my",
])
def test_private_paths_not_loggable(path):
    assert body_is_loggable(path) is False


@pytest.mark.parametrize("path", ["/api/reviews", "/api/halls/RK", "/api/complaintsx"])
def test_other_paths_loggable(path):
    assert body_is_loggable(path) is True


async def test_complaint_text_never_logged(client: AsyncClient, auth_headers, debug_logs):
    text = "Cockroach floating in the sambar bucket"

    response = await client.post("/api/complaints", json={
        "mealType": "Lunch", "category": "Hygiene", "text": text
    }, headers=auth_headers)

    assert response.status_code == 201
    assert access_records(debug_logs, "/api/complaints")
    assert text not in everything_logged(debug_logs)


async def test_password_never_logged(client: AsyncClient, test_user, debug_logs):
    response = await client.post("/api/auth/login", json={
        "email": test_user.email, "password": TEST_PASSWORD
    })

    assert response.status_code == 200
    assert TEST_PASSWORD not in everything_logged(debug_logs)


async def test_rejected_signup_password_never_logged(client: AsyncClient, debug_logs):
    await client.post("/api/auth/signup", json={
        "name": "Some Student", "email": "someone@gmail.com", "password": "hunter2-secret"
    })

    assert "hunter2-secret" not in everything_logged(debug_logs)


async def test_review_body_previewed_at_debug(client: AsyncClient, auth_headers, debug_logs):
    await client.post("/api/reviews", json={
        "hallCode": "RK", "breakfastRating": 4, "lunchComment": "Paneer was fresh"
    }, headers=auth_headers)

    previews = [
        r for r in debug_logs.records
        if getattr(r, "event_type", None) == "http_request_body"
    ]
    assert len(previews) == 1
    assert "Paneer was fresh" in previews[0].getMessage()


async def test_access_line_carries_user_id(client: AsyncClient, test_user, auth_headers, debug_logs):
    response = await client.get("/api/reviews/my", headers=auth_headers)

    assert response.status_code == 200
    [record] = access_records(debug_logs, "/api/reviews/my")
    assert record.user_id == test_user.id
    assert record.http_status == 200
    assert f"user={test_user.id}" in record.getMessage()


async def test_anonymous_access_line(client: AsyncClient, debug_logs):
    response = await client.get("/api/halls")

    assert response.status_code == 200
    [record] = access_records(debug_logs, "/api/halls")
    assert "user=anonymous" in record.getMessage()


async def test_health_check_not_logged(client: AsyncClient, debug_logs):
    await client.get("/health")

    assert access_records(debug_logs, "/health") == []
