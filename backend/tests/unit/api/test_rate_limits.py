"""
Rate limit tests: auth bucket shared by signup/login, complaint bucket
"""
from httpx import AsyncClient

from tests.conftest import institute_email


async def test_login_attempts_limited(client: AsyncClient, test_user):
    body = {"email": test_user.email, "password": "wrong-password"}

    for _ in range(10):
        response = await client.post("/api/auth/login", json=body)
        assert response.status_code == 400

    response = await client.post("/api/auth/login", json=body)

    assert response.status_code == 429
    assert response.json()["message"] == "Too many login attempts. Please try again later."
    assert "Retry-After" in response.headers


async def test_signup_and_login_share_a_bucket(client: AsyncClient, test_user):
    for _ in range(5):
        await client.post("/api/auth/signup", json={
            "name": "Some Student", "email": institute_email(), "password": "abcdef"
        })
    for _ in range(5):
        await client.post("/api/auth/login", json={"email": test_user.email, "password": "nope-nope"})

    response = await client.post("/api/auth/signup", json={
        "name": "Some Student", "email": institute_email(), "password": "abcdef"
    })

    assert response.status_code == 429


async def test_complaints_limited(client: AsyncClient, auth_headers):
    body = {
        "mealType": "Dinner",
        "category": "Taste",
        "text": "Too much salt in the sabzi",
    }

    for _ in range(10):
        response = await client.post("/api/complaints", json=body, headers=auth_headers)
        assert response.status_code == 201

    response = await client.post("/api/complaints", json=body, headers=auth_headers)

    assert response.status_code == 429
    assert response.json()["message"] == "Too many complaints. Please try again later."


async def test_reviews_not_rate_limited(client: AsyncClient, auth_headers):
    for _ in range(12):
        response = await client.get("/api/reviews/my", headers=auth_headers)
        assert response.status_code == 200


async def test_malformed_logins_count_toward_limit(client: AsyncClient, test_user):
    for _ in range(10):
        response = await client.post("/api/auth/login", json={"email": test_user.email})
        assert response.status_code == 400

    response = await client.post("/api/auth/login", json={
        "email": test_user.email, "password": "testpassword123"
    })

    assert response.status_code == 429
    assert response.json()["message"] == "Too many login attempts. Please try again later."


async def test_malformed_signups_count_toward_limit(client: AsyncClient):
    for _ in range(10):
        response = await client.post("/api/auth/signup", json={"name": "Some Student"})
        assert response.status_code == 400

    response = await client.post("/api/auth/signup", json={
        "name": "Some Student", "email": institute_email(), "password": "abcdef"
    })

    assert response.status_code == 429


async def test_malformed_complaints_count_toward_limit(client: AsyncClient, auth_headers):
    for _ in range(10):
        response = await client.post("/api/complaints", json={"mealType": "Lunch"},
                                     headers=auth_headers)
        assert response.status_code == 400

    response = await client.post("/api/complaints", json={
        "mealType": "Lunch", "category": "Hygiene", "text": "Found a hair in the rice"
    }, headers=auth_headers)

    assert response.status_code == 429
