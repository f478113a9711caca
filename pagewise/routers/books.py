from fastapi import APIRouter, Depends

from pagewise.dependencies import get_book_service
from pagewise.models import Book
from pagewise.schemas.book import BookCreate, BookDetail, BookResponse, BookUpdate, ChapterResponse
from pagewise.services.book_service import BookService, total_pages

router = APIRouter(prefix="/api/books", tags=["books"])


def _detail(book: Book) -> BookDetail:
    book_dict = BookDetail.model_validate(book).model_dump()
    book_dict["total_pages"] = total_pages(book.chapters)
    return BookDetail(**book_dict)


@router.post("", response_model=BookDetail, status_code=201)
async def create_book(data: BookCreate, service: BookService = Depends(get_book_service)):
    return _detail(await service.create_book(data))


@router.get("/{book_id}", response_model=BookDetail)
async def get_book(book_id: int, service: BookService = Depends(get_book_service)):
    return _detail(await service.get_book(book_id))


@router.get("/{book_id}/chapters", response_model=list[ChapterResponse])
async def get_chapters(book_id: int, service: BookService = Depends(get_book_service)):
    return await service.get_chapters(book_id)


@router.put("/{book_id}", response_model=BookResponse)
async def update_book(book_id: int, data: BookUpdate, service: BookService = Depends(get_book_service)):
    return await service.update_book(book_id, data)


@router.delete("/{book_id}", status_code=204)
async def delete_book(book_id: int, service: BookService = Depends(get_book_service)):
    await service.delete_book(book_id)
