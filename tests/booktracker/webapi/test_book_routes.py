import pytest

pytestmark = pytest.mark.webapi

DUNE = {
    "title": "Dune",
    "author": "Frank Herbert",
    "genre": "Science Fiction",
    "status": "Reading",
    "pagesRead": 103,
    "totalPages": 412,
    "notes": "",
    "tags": "classic",
    "goalEndDate": "2026-05-01",
    "thumbnail": "",
    "rating": 5,
}


def test_books_require_authentication(client):
    assert client.get("/api/books").status_code == 401
    assert client.post("/api/books", json=DUNE).status_code == 401
    assert client.put("/api/books/1", json=DUNE).status_code == 401
    assert client.delete("/api/books/1").status_code == 401


def test_add_and_list_books(client, login):
    headers = login("alice")

    created = client.post("/api/books", json=DUNE, headers=headers)
    assert created.status_code == 201
    book_id = created.json()["id"]

    books = client.get("/api/books", headers=headers).json()
    assert len(books) == 1
    entry = books[0]
    assert entry["id"] == book_id
    assert entry["progressPercent"] == 25
    for key, value in DUNE.items():
        assert entry[key] == value


def test_partial_update_keeps_other_fields(client, login):
    headers = login("bob")
    book_id = client.post("/api/books", json=DUNE, headers=headers).json()["id"]

    response = client.put(
        f"/api/books/{book_id}", json={"status": "Completed", "pagesRead": 412}, headers=headers
    )
    assert response.status_code == 200
    assert response.json() == {"updated": True}

    (entry,) = client.get("/api/books", headers=headers).json()
    assert entry["status"] == "Completed"
    assert entry["pagesRead"] == 412
    assert entry["title"] == "Dune"
    assert entry["rating"] == 5


def test_users_cannot_touch_each_others_books(client, login):
    alice = login("alice")
    mallory = login("mallory")
    book_id = client.post("/api/books", json=DUNE, headers=alice).json()["id"]

    assert client.get("/api/books", headers=mallory).json() == []
    assert client.put(f"/api/books/{book_id}", json={"title": "Mine"}, headers=mallory).status_code == 404

    deleted = client.delete(f"/api/books/{book_id}", headers=mallory)
    assert deleted.status_code == 200
    assert deleted.json() == {"deleted": False, "bookId": book_id}

    (entry,) = client.get("/api/books", headers=alice).json()
    assert entry["title"] == "Dune"


def test_delete_book(client, login):
    headers = login("carol")
    book_id = client.post("/api/books", json=DUNE, headers=headers).json()["id"]

    response = client.delete(f"/api/books/{book_id}", headers=headers)

    assert response.json() == {"deleted": True, "bookId": book_id}
    assert client.get("/api/books", headers=headers).json() == []


def test_negative_page_counts_fail_validation(client, login):
    headers = login("dave")

    response = client.post("/api/books", json={**DUNE, "pagesRead": -1}, headers=headers)

    assert response.status_code == 422


@pytest.mark.parametrize("book_id", [0, 2**63, 2**70])
def test_out_of_range_book_ids_are_rejected(client, login, book_id):
    headers = login("erin")

    assert client.delete(f"/api/books/{book_id}", headers=headers).status_code == 422
    assert client.put(f"/api/books/{book_id}", json={"title": "X"}, headers=headers).status_code == 422


def test_largest_book_id_is_a_noop_delete(client, login):
    headers = login("frank")
    largest = 2**63 - 1

    response = client.delete(f"/api/books/{largest}", headers=headers)

    assert response.status_code == 200
    assert response.json() == {"deleted": False, "bookId": largest}


def test_missing_book_error_body(client, login):
    headers = login("grace")

    response = client.put("/api/books/999", json={"title": "X"}, headers=headers)

    assert response.status_code == 404
    assert response.json() == {"detail": "Book not found", "error": "Book not found"}
