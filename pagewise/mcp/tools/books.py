from pagewise.id import make_id
from pagewise.mcp.client import PagewiseClient


async def register_book(
    client: PagewiseClient,
    title: str,
    author: str,
    chapters: list[dict],
    ocr_source: bool = True,
) -> dict:
    body = {"title": title, "author": author, "ocr_source": ocr_source, "chapters": chapters}
    return await client.post("/api/books", json=body)


async def get_book(
    client: PagewiseClient,
    title: str,
    author: str,
) -> dict:
    book_id = make_id(title, author)
    return await client.get(f"/api/books/{book_id}")
