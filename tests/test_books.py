import pytest

from pagewise.id import make_id


@pytest.mark.asyncio
async def test_create_book_with_chapters(client, book_payload):
    resp = await client.post("/api/books", json=book_payload)
    assert resp.status_code == 201
    book = resp.json()
    assert book["id"] == make_id("Cien años de soledad", "Gabriel García Márquez")
    assert [c["number"] for c in book["chapters"]] == [1, 2, 3]
    assert book["total_pages"] == 100


@pytest.mark.asyncio
async def test_chapters_are_stored_in_number_order(client):
    resp = await client.post("/api/books", json={
        "title": "Rayuela",
        "author": "Julio Cortázar",
        "chapters": [
            {"number": 2, "title": "Del lado de acá", "estimated_pages": 20},
            {"number": 1, "title": "Del lado de allá", "estimated_pages": 30},
        ],
    })
    book_id = resp.json()["id"]

    resp = await client.get(f"/api/books/{book_id}/chapters")
    assert resp.status_code == 200
    assert [c["title"] for c in resp.json()] == ["Del lado de allá", "Del lado de acá"]


@pytest.mark.asyncio
async def test_duplicate_book(client, book_payload):
    await client.post("/api/books", json=book_payload)
    resp = await client.post("/api/books", json=book_payload)
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_long_titles_with_shared_prefix_are_distinct(client, book_payload):
    prefix = "Crónica de una muerte anunciada y otros relatos del Caribe"
    first = await client.post("/api/books", json={**book_payload, "title": f"{prefix}, tomo primero"})
    second = await client.post("/api/books", json={**book_payload, "title": f"{prefix}, tomo segundo"})
    assert first.status_code == 201
    assert second.status_code == 201
    assert first.json()["id"] != second.json()["id"]


@pytest.mark.asyncio
async def test_duplicate_chapter_numbers_rejected(client):
    resp = await client.post("/api/books", json={
        "title": "Ficciones",
        "author": "Jorge Luis Borges",
        "chapters": [
            {"number": 1, "title": "Tlön", "estimated_pages": 10},
            {"number": 1, "title": "Pierre Menard", "estimated_pages": 10},
        ],
    })
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_book_without_chapters_rejected(client):
    resp = await client.post("/api/books", json={"title": "Vacío", "author": "Nadie", "chapters": []})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_get_book_not_found(client):
    resp = await client.get("/api/books/999")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Libro no encontrado"


@pytest.mark.asyncio
async def test_update_book(client, book):
    resp = await client.put(f"/api/books/{book['id']}", json={"author": "  G. García Márquez "})
    assert resp.status_code == 200
    assert resp.json()["author"] == "G. García Márquez"
    assert resp.json()["title"] == book["title"]


@pytest.mark.asyncio
async def test_delete_book_removes_plans(client, book, plan):
    resp = await client.delete(f"/api/books/{book['id']}")
    assert resp.status_code == 204

    resp = await client.get(f"/api/books/{book['id']}")
    assert resp.status_code == 404
    resp = await client.get(f"/api/plans/{plan['id']}")
    assert resp.status_code == 404
