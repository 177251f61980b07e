import uuid

from sqlalchemy import Column, DateTime, String

from bookshelf.utils.date_utils import now


def new_id() -> str:
    return str(uuid.uuid4())


class IdMixin:
    id = Column(String(36), primary_key=True, default=new_id)


class TimestampMixin:
    created_at = Column(DateTime(timezone=True), default=now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now, onupdate=now)
