from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from bookshelf.core.database import Base
from bookshelf.models.base import IdMixin, TimestampMixin


class Note(IdMixin, TimestampMixin, Base):
    __tablename__ = "notes"

    user_id = Column(String(36), nullable=False, index=True)
    book_id = Column(
        String(36), ForeignKey("books.id", ondelete="CASCADE"), nullable=False, index=True
    )
    content = Column(Text, nullable=False)
    is_quote = Column(Boolean, nullable=False, default=False)
    page_number = Column(Integer, nullable=True)

    book = relationship("Book", back_populates="notes")

    def __repr__(self):
        return f"<Note(id={self.id}, book_id={self.book_id}, is_quote={self.is_quote})>"
