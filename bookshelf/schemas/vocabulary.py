from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from bookshelf.schemas._validators import (
    optional_page_number,
    optional_text,
    required_text,
)


class VocabularyBase(BaseModel):
    term: str
    definition: str
    part_of_speech: Optional[str] = None
    phonetic: Optional[str] = None
    example: Optional[str] = None
    page_number: Optional[int] = None

    @field_validator("term", "definition")
    @classmethod
    def _required(cls, value: str) -> str:
        return required_text(value)

    @field_validator("part_of_speech", "phonetic", "example")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        return optional_text(value)

    @field_validator("page_number")
    @classmethod
    def _page(cls, value: Optional[int]) -> Optional[int]:
        return optional_page_number(value)


class VocabularyCreate(VocabularyBase):
    pass


class VocabularyUpdate(VocabularyBase):
    pass


class VocabularyResponse(VocabularyBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    book_id: str
    created_at: datetime
    updated_at: Optional[datetime] = None


class VocabularyWithBook(VocabularyResponse):
    book_title: str = "Unknown"
    book_author: str = "Unknown"
