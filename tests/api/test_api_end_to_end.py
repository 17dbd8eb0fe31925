# tests/api/test_api_end_to_end.py
from fastapi.testclient import TestClient

from libreria.api.main import app

def test_review_vote_roundtrip(client, fake_catalog):
    """Register and log in, review, vote from a second account and read the tally on the book page."""
    a = client.post("/api/auth/register", json={
        "name": "Reader A", "email": "a@example.com", "password": "password123",
    })
    assert a.status_code == 201

    client.cookies.clear()
    login = client.post("/api/auth/login", json={"email": "a@example.com", "password": "password123"})
    assert login.status_code == 200

    posted = client.post("/api/reviews", json={
        "googleId": "B123",
        "title": "The Left Hand of Darkness",
        "authors": ["Ursula K. Le Guin"],
        "rating": 4,
        "content": "Decent read.",
    })
    assert posted.status_code == 201
    review_id = posted.json()["review"]["id"]

    b = TestClient(app)
    assert b.post("/api/auth/register", json={
        "name": "Reader B", "email": "b@example.com", "password": "password123",
    }).status_code == 201
    assert b.post(f"/api/reviews/{review_id}/vote", json={"value": 1}).status_code == 200

    page = client.get("/api/books/B123").json()
    [review] = page["local"]["reviews"]
    assert review["id"] == review_id
    assert review["user"]["displayName"] == "Reader A"
    assert (review["score"], review["votesCount"]) == (1, 1)

    flipped = b.post(f"/api/reviews/{review_id}/vote", json={"value": -1}).json()["review"]
    assert (flipped["score"], flipped["votesCount"]) == (-1, 1)

    page = client.get("/api/books/B123").json()
    assert page["local"]["reviews"][0]["score"] == -1
