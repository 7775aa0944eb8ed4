"""
Tests for the FastAPI book routes.
"""

from api.main import create_app
from shelf.store import ResourceStore


def add_book(client, payload):
    response = client.post("/books", json=payload)
    assert response.status_code == 201, response.json()
    return response.json()["data"]["bookId"]


def test_health_check(client, dune_payload):
    add_book(client, dune_payload)
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["books_count"] == 1
    assert "timestamp" in data
    assert "version" in data


def test_create_book(client, dune_payload):
    response = client.post("/books", json=dune_payload)
    assert response.status_code == 201
    assert response.headers["content-type"].startswith("application/json")
    assert response.json() == {
        "status": "success",
        "message": "Buku berhasil ditambahkan",
        "data": {"bookId": "book-1"},
    }


def test_create_without_name(client, dune_payload):
    del dune_payload["name"]
    response = client.post("/books", json=dune_payload)
    assert response.status_code == 400
    assert response.json() == {
        "status": "fail",
        "message": "Gagal menambahkan buku. Mohon isi nama buku",
    }


def test_create_read_page_too_large(client, dune_payload):
    dune_payload["readPage"] = 501
    response = client.post("/books", json=dune_payload)
    assert response.status_code == 400
    assert response.json()["message"] == (
        "Gagal menambahkan buku. readPage tidak boleh lebih besar dari pageCount"
    )


def test_create_with_wrong_type(client, dune_payload):
    dune_payload["pageCount"] = "500"
    response = client.post("/books", json=dune_payload)
    assert response.status_code == 500
    assert response.json() == {"status": "fail", "message": "Buku gagal ditambahkan"}


def test_create_without_body(client):
    response = client.post("/books")
    assert response.status_code == 400
    assert response.json()["status"] == "fail"


def test_malformed_json(client):
    response = client.post(
        "/books", content="{not json", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400
    assert response.json()["status"] == "fail"


def test_list_books(client, shelf_payloads):
    ids = [add_book(client, payload) for payload in shelf_payloads]
    response = client.get("/books")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "success"
    assert [book["id"] for book in body["data"]["books"]] == ids
    assert body["data"]["books"][0]["pageCount"] == 500


def test_filter_books(client, shelf_payloads):
    for payload in shelf_payloads:
        add_book(client, payload)

    by_name = client.get("/books", params={"name": "dun"}).json()["data"]["books"]
    assert [book["name"] for book in by_name] == ["Dune"]

    reading = client.get("/books", params={"reading": 1}).json()["data"]["books"]
    assert [book["name"] for book in reading] == ["Laskar Pelangi"]

    finished = client.get("/books", params={"finished": 0}).json()["data"]["books"]
    assert [book["name"] for book in finished] == ["Laskar Pelangi", "Bumi Manusia"]

    both = client.get("/books", params={"name": "a", "reading": 0}).json()["data"]["books"]
    assert [book["name"] for book in both] == ["Bumi Manusia"]


def test_get_book(client, dune_payload):
    book_id = add_book(client, dune_payload)
    response = client.get(f"/books/{book_id}")
    assert response.status_code == 200
    book = response.json()["data"]["book"]
    assert book["id"] == book_id
    assert book["finished"] is True
    assert book["insertedAt"] == book["updatedAt"]


def test_get_unknown_book(client):
    response = client.get("/books/nonexistent_id")
    assert response.status_code == 404
    assert response.json() == {"status": "fail", "message": "Buku tidak ditemukan"}


def test_get_book_with_query_filters_all_books(client, shelf_payloads):
    ids = [add_book(client, payload) for payload in shelf_payloads]

    response = client.get(f"/books/{ids[0]}", params={"reading": 1})
    assert response.status_code == 200
    books = response.json()["data"]["books"]
    assert [book["id"] for book in books] == [ids[1]]

    unknown = client.get("/books/nonexistent_id", params={"name": "bumi"})
    assert unknown.status_code == 200
    assert [book["name"] for book in unknown.json()["data"]["books"]] == ["Bumi Manusia"]


def test_update_book(client, dune_payload):
    book_id = add_book(client, dune_payload)
    response = client.put(f"/books/{book_id}", json={"publisher": "Chilton Books"})
    assert response.status_code == 200
    assert response.json() == {"status": "success", "message": "Buku berhasil diperbarui"}

    book = client.get(f"/books/{book_id}").json()["data"]["book"]
    assert book["publisher"] == "Chilton Books"
    assert book["author"] == "Herrick"


def test_update_failures(client, dune_payload):
    book_id = add_book(client, dune_payload)

    missing = client.put("/books/nonexistent_id", json=dune_payload)
    assert missing.status_code == 404
    assert missing.json()["message"] == "Gagal memperbarui buku. Id tidak ditemukan"

    no_id = client.put("/books", json=dune_payload)
    assert no_id.status_code == 404

    empty_name = client.put(f"/books/{book_id}", json={"name": ""})
    assert empty_name.status_code == 400
    assert empty_name.json()["message"] == "Gagal memperbarui buku. Mohon isi nama buku"

    wrong_type = client.put(f"/books/{book_id}", json={"reading": "yes"})
    assert wrong_type.status_code == 500
    assert wrong_type.json()["message"] == "Gagal memperbarui buku"


def test_delete_book(client, dune_payload):
    book_id = add_book(client, dune_payload)
    response = client.delete(f"/books/{book_id}")
    assert response.status_code == 200
    assert response.json() == {"status": "success", "message": "Buku berhasil dihapus"}

    again = client.delete(f"/books/{book_id}")
    assert again.status_code == 404
    assert again.json()["message"] == "Buku gagal dihapus. Id tidak ditemukan"

    assert client.delete("/books").status_code == 404


def test_dune_scenario(client, dune_payload):
    created = client.post("/books", json=dune_payload)
    assert created.status_code == 201
    book_id = created.json()["data"]["bookId"]
    assert client.get(f"/books/{book_id}").json()["data"]["book"]["finished"] is True

    found = client.get("/books", params={"name": "dun"}).json()["data"]["books"]
    assert [book["id"] for book in found] == [book_id]

    update = client.put(f"/books/{book_id}", json={"readPage": 600})
    assert update.status_code == 400
    assert update.json()["message"] == (
        "Gagal memperbarui buku. readPage tidak boleh lebih besar dari pageCount"
    )

    assert client.delete(f"/books/{book_id}").status_code == 200
    assert client.get(f"/books/{book_id}").status_code == 404


def test_unknown_route_uses_fail_envelope(client):
    response = client.get("/shelves")
    assert response.status_code == 404
    assert response.json()["status"] == "fail"


def test_apps_do_not_share_stores(dune_payload):
    from fastapi.testclient import TestClient

    first, second = ResourceStore(), ResourceStore()
    with TestClient(create_app(first)) as client:
        add_book(client, dune_payload)
    with TestClient(create_app(second)) as client:
        assert client.get("/books").json()["data"]["books"] == []
    assert first.count() == 1


def test_cors_headers(client):
    response = client.get("/books", headers={"Origin": "http://example.com"})
    assert response.headers["access-control-allow-origin"] == "*"
