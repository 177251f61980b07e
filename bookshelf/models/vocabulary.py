from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from bookshelf.core.database import Base
from bookshelf.models.base import IdMixin, TimestampMixin


class Vocabulary(IdMixin, TimestampMixin, Base):
    __tablename__ = "vocabulary"

    user_id = Column(String(36), nullable=False, index=True)
    book_id = Column(
        String(36), ForeignKey("books.id", ondelete="CASCADE"), nullable=False, index=True
    )
    term = Column(String, nullable=False)
    definition = Column(Text, nullable=False)
    part_of_speech = Column(String, nullable=True)
    phonetic = Column(String, nullable=True)
    example = Column(Text, nullable=True)
    page_number = Column(Integer, nullable=True)

    book = relationship("Book", back_populates="vocabulary")

    def __repr__(self):
        return f"<Vocabulary(id={self.id}, term='{self.term}')>"
