from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ChapterCreate(BaseModel):
    number: int = Field(..., ge=0)
    title: str = Field(..., min_length=1, max_length=300)
    estimated_pages: int | None = Field(None, ge=0, description="Missing or 0 means the chapter is never scheduled")


class BookCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    author: str = Field(..., min_length=1, max_length=150)
    ocr_source: bool = True
    chapters: list[ChapterCreate] = Field(..., min_length=1)

    @field_validator("title", "author")
    @classmethod
    def strip_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("chapters")
    @classmethod
    def unique_numbers(cls, chapters: list[ChapterCreate]) -> list[ChapterCreate]:
        numbers = [c.number for c in chapters]
        if len(numbers) != len(set(numbers)):
            raise ValueError("chapter numbers must be unique")
        return chapters


class BookUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=200)
    author: str | None = Field(None, min_length=1, max_length=150)


class ChapterResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    book_id: int
    number: int
    title: str
    estimated_pages: int | None


class BookResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    author: str
    ocr_source: bool
    created_at: datetime
    updated_at: datetime


class BookDetail(BookResponse):
    chapters: list[ChapterResponse] = []
    total_pages: int = 0
