from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from bookshelf.schemas._validators import optional_text
from bookshelf.utils.date_utils import as_utc


class ReadingSessionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    book_id: str
    user_book_id: str
    read_number: int
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    rating: Optional[int] = None
    review: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class ReadingSessionUpdate(BaseModel):
    """Edit of a ledger row; only the fields actually sent are applied."""

    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    review: Optional[str] = None

    @field_validator("rating", mode="before")
    @classmethod
    def _zero_is_unrated(cls, value):
        return None if value == 0 else value

    @field_validator("review")
    @classmethod
    def _blank_review(cls, value: Optional[str]) -> Optional[str]:
        return optional_text(value)

    @model_validator(mode="after")
    def _dates_in_order(self):
        if (
            self.started_at
            and self.finished_at
            and as_utc(self.finished_at) < as_utc(self.started_at)
        ):
            raise ValueError("finished_at must not be before started_at")
        return self
