from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from bookshelf.core.database import Base
from bookshelf.models.base import IdMixin, TimestampMixin


class ReadingSession(IdMixin, TimestampMixin, Base):
    """One read-through of a book; several per UserBook model re-reads."""

    __tablename__ = "reading_sessions"

    user_id = Column(String(36), nullable=False, index=True)
    book_id = Column(
        String(36), ForeignKey("books.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_book_id = Column(
        String(36),
        ForeignKey("user_books.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    read_number = Column(Integer, nullable=False)
    started_at = Column(DateTime(timezone=True), nullable=True)
    finished_at = Column(DateTime(timezone=True), nullable=True)  # null = in progress
    rating = Column(Integer, nullable=True)
    review = Column(Text, nullable=True)

    # Relationships
    book = relationship("Book", back_populates="reading_sessions")
    user_book = relationship("UserBook", back_populates="sessions")

    __table_args__ = (
        UniqueConstraint(
            "user_book_id", "read_number", name="unique_read_number_per_user_book"
        ),
        CheckConstraint(
            "rating IS NULL OR (rating >= 1 AND rating <= 5)",
            name="reading_session_rating_range",
        ),
    )

    def __repr__(self):
        return (
            f"<ReadingSession(id={self.id}, user_book_id={self.user_book_id}, "
            f"read_number={self.read_number})>"
        )
