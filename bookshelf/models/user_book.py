import enum

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from bookshelf.core.database import Base
from bookshelf.models.base import IdMixin, TimestampMixin


class ReadingStatus(str, enum.Enum):
    WANT_TO_READ = "want_to_read"
    READING = "reading"
    COMPLETED = "completed"
    WISHLIST = "wishlist"


class UserBook(IdMixin, TimestampMixin, Base):
    """Per-user reading state of one book: status, page and active session."""

    __tablename__ = "user_books"

    user_id = Column(String(36), nullable=False, index=True)
    book_id = Column(
        String(36),
        ForeignKey("books.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    status = Column(String, nullable=False, default=ReadingStatus.WANT_TO_READ.value)
    current_page = Column(Integer, nullable=False, default=0)

    # Points at the in-progress or most recently closed session. Kept without a
    # database FK to avoid a reference cycle with reading_sessions; the
    # coordinator clears it whenever the referenced session is deleted.
    current_session_id = Column(String(36), nullable=True)

    # Legacy single-read fields, superseded by reading_sessions
    rating = Column(Integer, nullable=True)
    review = Column(Text, nullable=True)
    started_at = Column(DateTime(timezone=True), nullable=True)
    finished_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    book = relationship("Book", back_populates="user_book")
    sessions = relationship(
        "ReadingSession",
        back_populates="user_book",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ReadingSession.read_number.desc()",
    )

    def __repr__(self):
        return f"<UserBook(id={self.id}, book_id={self.book_id}, status='{self.status}')>"
