from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import relationship

from bookshelf.core.database import Base
from bookshelf.models.base import IdMixin, TimestampMixin


class Book(IdMixin, TimestampMixin, Base):
    __tablename__ = "books"

    # Owner; every query filters on it
    user_id = Column(String(36), nullable=False, index=True)

    title = Column(String, nullable=False, index=True)
    author = Column(String, nullable=False, index=True)
    author_nationality = Column(String(2), nullable=True)  # ISO 3166 alpha-2
    isbn = Column(String, nullable=True)
    cover_url = Column(String, nullable=True)
    spine_color = Column(String, nullable=True)
    page_count = Column(Integer, nullable=True)
    genre = Column(String, nullable=True, index=True)
    description = Column(Text, nullable=True)
    published_year = Column(Integer, nullable=True)

    # Relationships
    user_book = relationship(
        "UserBook",
        back_populates="book",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    reading_sessions = relationship(
        "ReadingSession",
        back_populates="book",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ReadingSession.read_number.desc()",
    )
    notes = relationship(
        "Note",
        back_populates="book",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Note.created_at.desc()",
    )
    vocabulary = relationship(
        "Vocabulary",
        back_populates="book",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Vocabulary.created_at.desc()",
    )
    collection_links = relationship(
        "BookCollection",
        back_populates="book",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def collections(self):
        return [link.collection for link in self.collection_links]

    def __repr__(self):
        return f"<Book(id={self.id}, title='{self.title}')>"
