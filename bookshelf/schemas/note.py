from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from bookshelf.schemas._validators import optional_page_number, required_text


class NoteBase(BaseModel):
    content: str
    is_quote: bool = False
    page_number: Optional[int] = None

    @field_validator("content")
    @classmethod
    def _required(cls, value: str) -> str:
        return required_text(value)

    @field_validator("page_number")
    @classmethod
    def _page(cls, value: Optional[int]) -> Optional[int]:
        return optional_page_number(value)


class NoteCreate(NoteBase):
    pass


class NoteUpdate(NoteBase):
    pass


class NoteResponse(NoteBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    book_id: str
    created_at: datetime
    updated_at: Optional[datetime] = None


class QuoteResponse(NoteResponse):
    book_title: str
    book_author: str
