from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bookshelf.models.user_book import ReadingStatus
from bookshelf.schemas._validators import optional_text, required_text


class BookBase(BaseModel):
    title: str
    author: str
    author_nationality: Optional[str] = Field(default=None, max_length=2)
    isbn: Optional[str] = None
    cover_url: Optional[str] = None
    spine_color: Optional[str] = None
    page_count: Optional[int] = Field(default=None, ge=0)
    genre: Optional[str] = None
    description: Optional[str] = None
    published_year: Optional[int] = None

    @field_validator("title", "author")
    @classmethod
    def _required(cls, value: str) -> str:
        return required_text(value)

    @field_validator("isbn", "cover_url", "spine_color", "genre", "description")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        return optional_text(value)

    @field_validator("author_nationality")
    @classmethod
    def _country_code(cls, value: Optional[str]) -> Optional[str]:
        value = optional_text(value)
        return value.upper() if value else None


class BookCreate(BookBase):
    status: ReadingStatus = ReadingStatus.WANT_TO_READ
    rating: Optional[int] = Field(default=None, ge=1, le=5)


class BookUpdate(BaseModel):
    title: Optional[str] = None
    author: Optional[str] = None
    author_nationality: Optional[str] = Field(default=None, max_length=2)
    isbn: Optional[str] = None
    cover_url: Optional[str] = None
    spine_color: Optional[str] = None
    page_count: Optional[int] = Field(default=None, ge=0)
    genre: Optional[str] = None
    description: Optional[str] = None
    published_year: Optional[int] = None

    @field_validator("title", "author")
    @classmethod
    def _not_blank(cls, value: Optional[str]) -> str:
        # Only runs for fields that were sent, so an explicit null is refused
        return required_text(value)


class BookResponse(BookBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    created_at: datetime
    updated_at: Optional[datetime] = None


class UserBookResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    book_id: str
    status: ReadingStatus
    current_page: int
    current_session_id: Optional[str] = None
    rating: Optional[int] = None
    review: Optional[str] = None
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class StatusUpdate(BaseModel):
    status: ReadingStatus


class ProgressUpdate(BaseModel):
    current_page: int = Field(ge=0)


class BookWithUserBook(BookResponse):
    user_book: Optional[UserBookResponse] = None


class BookWithDetails(BookWithUserBook):
    reading_sessions: List["ReadingSessionResponse"] = []
    collections: List["CollectionResponse"] = []
    notes: List["NoteResponse"] = []
    vocabulary: List["VocabularyResponse"] = []


def _rebuild_book_schemas():
    from bookshelf.schemas.collection import CollectionResponse
    from bookshelf.schemas.note import NoteResponse
    from bookshelf.schemas.reading_session import ReadingSessionResponse
    from bookshelf.schemas.vocabulary import VocabularyResponse

    BookWithDetails.model_rebuild(
        _types_namespace={
            "CollectionResponse": CollectionResponse,
            "NoteResponse": NoteResponse,
            "ReadingSessionResponse": ReadingSessionResponse,
            "VocabularyResponse": VocabularyResponse,
        }
    )
