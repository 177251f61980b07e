from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from bookshelf.schemas._validators import optional_text, required_text
from bookshelf.schemas.book import BookWithUserBook


class CollectionBase(BaseModel):
    name: str
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _required(cls, value: str) -> str:
        return required_text(value)

    @field_validator("description")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        return optional_text(value)


class CollectionCreate(CollectionBase):
    pass


class CollectionUpdate(CollectionBase):
    pass


class CollectionResponse(CollectionBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    cover_url: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class CollectionSummary(CollectionResponse):
    book_count: int = 0
    preview_covers: List[Optional[str]] = []


class CollectionWithBooks(CollectionResponse):
    books: List[BookWithUserBook] = []


class ReorderRequest(BaseModel):
    book_ids: List[str]

    @field_validator("book_ids")
    @classmethod
    def _unique(cls, value: List[str]) -> List[str]:
        if len(set(value)) != len(value):
            raise ValueError("book_ids must not contain duplicates")
        return value
