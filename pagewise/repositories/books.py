from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from pagewise.models import Book, Chapter


class BookRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_book(self, book_id: int, with_chapters: bool = False) -> Book | None:
        stmt = select(Book).where(Book.id == book_id)
        if with_chapters:
            stmt = stmt.options(selectinload(Book.chapters)).execution_options(populate_existing=True)
        return (await self.session.execute(stmt)).scalar_one_or_none()

    async def add_book(self, book: Book) -> Book:
        """Insert ``book`` together with the chapters attached to it."""
        self.session.add(book)
        await self.session.flush()
        return book

    async def get_chapters(self, book_id: int) -> list[Chapter]:
        """Chapters in reading order (ascending chapter number)."""
        result = await self.session.execute(
            select(Chapter).where(Chapter.book_id == book_id).order_by(Chapter.number)
        )
        return list(result.scalars().all())

    async def delete_book(self, book: Book) -> None:
        await self.session.delete(book)
        await self.session.flush()
