"""
Review endpoint tests
"""
from datetime import timedelta
from httpx import AsyncClient

from app.services.review_service import review_service
from app.utils import clock


def review_body(**overrides):
    body = {
        "hallCode": "RK",
        "reviewDate": clock.today().isoformat(),
        "breakfastRating": 4,
        "lunchRating": 5,
        "lunchComment": "Great rajma",
    }
    body.update(overrides)
    return body


async def test_create_review(client: AsyncClient, test_user, auth_headers):
    response = await client.post("/api/reviews", json=review_body(), headers=auth_headers)

    assert response.status_code == 201
    data = response.json()
    assert data["id"]
    assert data["userId"] == test_user.id
    assert data["hallCode"] == "RK"
    assert data["reviewDate"] == clock.today().isoformat()
    assert data["breakfastRating"] == 4
    assert data["lunchComment"] == "Great rajma"
    assert data["dinnerRating"] is None
    assert data["createdAt"]
    assert data["updatedAt"]


async def test_create_review_defaults_date_and_hall(client: AsyncClient, auth_headers):
    response = await client.post("/api/reviews", json={"dinnerRating": 3}, headers=auth_headers)

    assert response.status_code == 201
    assert response.json()["reviewDate"] == clock.today().isoformat()
    assert response.json()["hallCode"] == "RK"


async def test_create_review_requires_auth(client: AsyncClient):
    response = await client.post("/api/reviews", json=review_body())

    assert response.status_code == 401


async def test_second_review_same_day_conflicts(client: AsyncClient, auth_headers):
    first = await client.post("/api/reviews", json=review_body(), headers=auth_headers)
    second = await client.post("/api/reviews", json=review_body(lunchRating=1), headers=auth_headers)

    assert first.status_code == 201
    assert second.status_code == 400
    assert second.json()["message"] == "You've already submitted a review for this date"


async def test_rating_out_of_range(client: AsyncClient, auth_headers):
    response = await client.post("/api/reviews", json=review_body(lunchRating=6), headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["error"]["details"]["field"] == "lunch_rating"


async def test_non_integer_rating(client: AsyncClient, auth_headers):
    response = await client.post("/api/reviews", json=review_body(lunchRating=4.5), headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["message"].startswith("Validation error:")


async def test_today_review(client: AsyncClient, auth_headers):
    missing = await client.get("/api/reviews/today", headers=auth_headers)
    assert missing.status_code == 404
    assert missing.json()["message"] == "No review found for today"

    created = await client.post("/api/reviews", json=review_body(), headers=auth_headers)
    found = await client.get("/api/reviews/today", headers=auth_headers)

    assert found.status_code == 200
    assert found.json()["id"] == created.json()["id"]


async def test_review_by_date(client: AsyncClient, db_session, test_user, auth_headers):
    day = clock.today() - timedelta(days=3)
    await review_service.create(
        db_session, test_user.id, {"review_date": day, "hall_code": "RK", "snacks_rating": 2}
    )

    response = await client.get(f"/api/reviews/date/{day.isoformat()}", headers=auth_headers)
    missing = await client.get(
        f"/api/reviews/date/{(day - timedelta(days=1)).isoformat()}", headers=auth_headers
    )
    malformed = await client.get("/api/reviews/date/yesterday", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["snacksRating"] == 2
    assert missing.status_code == 404
    assert malformed.status_code == 400


async def test_my_reviews_latest_first(client: AsyncClient, db_session, test_user, other_user, auth_headers):
    today = clock.today()
    for offset in (1, 0, 4):
        await review_service.create(
            db_session, test_user.id,
            {"review_date": today - timedelta(days=offset), "hall_code": "RK"}
        )
    await review_service.create(db_session, other_user.id, {"review_date": today, "hall_code": "RK"})

    response = await client.get("/api/reviews/my", headers=auth_headers)

    assert response.status_code == 200
    dates = [r["reviewDate"] for r in response.json()]
    assert dates == [
        today.isoformat(),
        (today - timedelta(days=1)).isoformat(),
        (today - timedelta(days=4)).isoformat(),
    ]


async def test_update_today_review(client: AsyncClient, auth_headers):
    created = (await client.post("/api/reviews", json=review_body(), headers=auth_headers)).json()

    response = await client.put(
        f"/api/reviews/{created['id']}",
        json={"dinnerRating": 2, "lunchComment": None},
        headers=auth_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["dinnerRating"] == 2
    assert data["lunchComment"] is None
    assert data["lunchRating"] == 5
    assert data["breakfastRating"] == 4


async def test_update_past_review_rejected(client: AsyncClient, db_session, test_user, auth_headers):
    review = await review_service.create(
        db_session, test_user.id,
        {"review_date": clock.today() - timedelta(days=1), "hall_code": "RK", "lunch_rating": 3}
    )

    response = await client.put(f"/api/reviews/{review.id}", json={"lunchRating": 5}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "You can only edit today's review"


async def test_update_someone_elses_review(client: AsyncClient, auth_headers, other_auth_headers):
    created = (await client.post("/api/reviews", json=review_body(), headers=other_auth_headers)).json()

    response = await client.put(f"/api/reviews/{created['id']}", json={"lunchRating": 1}, headers=auth_headers)

    assert response.status_code == 403


async def test_update_unknown_review(client: AsyncClient, auth_headers):
    response = await client.put("/api/reviews/no-such-review", json={"lunchRating": 1}, headers=auth_headers)

    assert response.status_code == 404
