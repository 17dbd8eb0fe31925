# tests/api/test_api_books.py
from libreria.crud import create_review, ensure_book, get_book_by_id
from libreria.schemas.review import ReviewCreate

def test_search_maps_catalog_results(client, fake_catalog):
    response = client.get("/api/search", params={"q": "solaris"})

    assert response.status_code == 200
    assert response.json() == {
        "results": [{
            "id": "B456",
            "title": "Solaris",
            "authors": ["Stanisław Lem"],
            "description": "",
            "thumbnail": "http://books.example.com/b456.jpg",
        }],
        "total": 1,
    }
    assert fake_catalog["search"] == ["solaris"]

def test_search_blank_query_skips_catalog(client, fake_catalog):
    for params in ({}, {"q": ""}, {"q": "   "}):
        response = client.get("/api/search", params=params)
        assert response.json() == {"results": [], "total": 0}
    assert fake_catalog["search"] == []

def test_search_catalog_unavailable(client, monkeypatch):
    from libreria.clients import google_books

    async def _failing(query, max_results=None, client=None):
        return []

    monkeypatch.setattr(google_books, "search_volumes", _failing)
    assert client.get("/api/search", params={"q": "anything"}).json() == {"results": [], "total": 0}

def test_search_skips_catalog_items_without_id(client, monkeypatch):
    from libreria.clients import google_books

    async def _partial(query, max_results=None, client=None):
        return [{"volumeInfo": {"title": "Odd"}}, {"id": "B7", "volumeInfo": {"title": "Odd Jobs"}}]

    monkeypatch.setattr(google_books, "search_volumes", _partial)
    response = client.get("/api/search", params={"q": "odd"})

    assert response.status_code == 200
    assert [book["id"] for book in response.json()["results"]] == ["B7"]
    assert response.json()["total"] == 1

def test_book_detail_caches_book(client, fake_catalog, db_session):
    response = client.get("/api/books/B123")

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == "B123"
    assert body["title"] == "The Left Hand of Darkness"
    assert body["authors"] == ["Ursula K. Le Guin"]
    assert body["thumbnail"] == "http://books.example.com/b123-small.jpg"
    assert body["local"] == {"reviews": []}

    cached = get_book_by_id(db_session, "B123")
    assert cached.authors == "Ursula K. Le Guin"
    assert cached.thumbnail_url == "http://books.example.com/b123-small.jpg"

def test_book_detail_refreshes_cached_copy(client, fake_catalog, cached_book, db_session):
    client.get("/api/books/B123")

    db_session.expire_all()
    refreshed = get_book_by_id(db_session, "B123")
    assert refreshed.thumbnail_url == "http://books.example.com/b123-small.jpg"
    assert refreshed.description == "Genly Ai on Gethen."

def test_book_detail_keeps_description_missing_from_catalog(client, fake_catalog, db_session):
    ensure_book(db_session, "B456", "Solaris", ["Stanisław Lem"], description="Kelvin on Solaris.")

    response = client.get("/api/books/B456")
    assert response.json()["description"] == ""

    db_session.expire_all()
    assert get_book_by_id(db_session, "B456").description == "Kelvin on Solaris."

def test_book_detail_lists_local_reviews(client, fake_catalog, db_session, author_user):
    create_review(db_session, ReviewCreate(
        google_id="B456", title="Solaris", rating=5, content="Haunting ocean."
    ), user_id=author_user.id)

    reviews = client.get("/api/books/B456").json()["local"]["reviews"]

    assert len(reviews) == 1
    assert reviews[0]["rating"] == 5
    assert reviews[0]["user"] == {"id": author_user.id, "displayName": "Author"}
    assert reviews[0]["score"] == 0
    assert reviews[0]["votesCount"] == 0

def test_book_detail_unknown_book(client, fake_catalog, db_session):
    response = client.get("/api/books/NOPE")

    assert response.status_code == 404
    assert response.json() == {"message": "Book not found"}
    assert get_book_by_id(db_session, "NOPE") is None

def test_list_books(client, cached_book):
    response = client.get("/api/books")

    assert response.status_code == 200
    assert [book["id"] for book in response.json()] == ["B123"]
    assert response.json()[0]["thumbnailUrl"] == "http://books.example.com/b123.jpg"

def test_get_book_by_query_id(client, cached_book):
    assert client.get("/api/books", params={"id": "B123"}).json()["title"] == "The Left Hand of Darkness"
    assert client.get("/api/books", params={"id": "missing"}).status_code == 404

def test_create_book_requires_session(client):
    response = client.post("/api/books", json={"id": "B9", "title": "Dune"})
    assert response.status_code == 401

def test_create_book(client, voter_user, auth_headers):
    payload = {
        "id": "B9",
        "title": "Dune",
        "authors": ["Frank Herbert"],
        "pageCount": 412,
        "categories": ["Fiction", "Science Fiction"],
        "thumbnailUrl": "https://books.example.com/dune.jpg",
    }
    created = client.post("/api/books", json=payload, headers=auth_headers(voter_user))

    assert created.status_code == 201
    assert created.json()["authors"] == "Frank Herbert"
    assert created.json()["categories"] == "Fiction, Science Fiction"

    again = client.post("/api/books", json={**payload, "title": "Other"}, headers=auth_headers(voter_user))
    assert again.status_code == 200
    assert again.json()["title"] == "Dune"

def test_create_book_invalid(client, voter_user, auth_headers):
    for payload in ({"title": "No id"}, {"id": "B9", "title": "Dune", "pageCount": 0},
                    {"id": "B9", "title": "Dune", "thumbnailUrl": "ftp://x"}):
        response = client.post("/api/books", json=payload, headers=auth_headers(voter_user))
        assert response.status_code == 400, payload
