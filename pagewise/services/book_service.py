"""Book registration with its chapter index."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from pagewise.errors import ConflictError, NotFoundError
from pagewise.id import make_id
from pagewise.models import Book, Chapter
from pagewise.repositories.books import BookRepository
from pagewise.schemas.book import BookCreate, BookUpdate

logger = logging.getLogger(__name__)


class BookService:
    def __init__(self, session: AsyncSession, books: BookRepository) -> None:
        self.session = session
        self.books = books

    async def create_book(self, data: BookCreate) -> Book:
        book_id = make_id(data.title, data.author)
        if await self.books.get_book(book_id) is not None:
            raise ConflictError("El libro ya existe")

        chapters = [
            Chapter(number=c.number, title=c.title.strip(), estimated_pages=c.estimated_pages)
            for c in sorted(data.chapters, key=lambda c: c.number)
        ]
        book = Book(id=book_id, title=data.title, author=data.author, ocr_source=data.ocr_source, chapters=chapters)
        await self.books.add_book(book)
        await self.session.commit()
        logger.info("Book %s registered with %d chapters", book_id, len(chapters))
        return await self.get_book(book_id)

    async def get_book(self, book_id: int) -> Book:
        book = await self.books.get_book(book_id, with_chapters=True)
        if book is None:
            raise NotFoundError("Libro no encontrado")
        return book

    async def get_chapters(self, book_id: int) -> list[Chapter]:
        await self.get_book(book_id)
        return await self.books.get_chapters(book_id)

    async def update_book(self, book_id: int, data: BookUpdate) -> Book:
        book = await self.get_book(book_id)
        for key, value in data.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(book, key, value.strip())
        await self.session.commit()
        return await self.get_book(book_id)

    async def delete_book(self, book_id: int) -> None:
        book = await self.get_book(book_id)
        await self.books.delete_book(book)
        await self.session.commit()


def total_pages(chapters: list[Chapter]) -> int:
    return sum(c.estimated_pages or 0 for c in chapters)
