from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from bookshelf.core.database import Base
from bookshelf.models.base import IdMixin, TimestampMixin
from bookshelf.utils.date_utils import now


class Collection(IdMixin, TimestampMixin, Base):
    __tablename__ = "collections"

    user_id = Column(String(36), nullable=False, index=True)
    name = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=True)
    cover_url = Column(String, nullable=True)

    # Relationships
    links = relationship(
        "BookCollection",
        back_populates="collection",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="BookCollection.created_at",
    )

    def __repr__(self):
        return f"<Collection(id={self.id}, name='{self.name}', user_id={self.user_id})>"


class BookCollection(IdMixin, Base):
    """Membership of a book in a collection, with its display position."""

    __tablename__ = "book_collections"

    collection_id = Column(
        String(36),
        ForeignKey("collections.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    book_id = Column(
        String(36), ForeignKey("books.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Null sorts after every explicit position
    position = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), default=now, nullable=False)

    # Relationships
    collection = relationship("Collection", back_populates="links")
    book = relationship("Book", back_populates="collection_links")

    __table_args__ = (
        UniqueConstraint("collection_id", "book_id", name="unique_book_per_collection"),
    )

    def __repr__(self):
        return (
            f"<BookCollection(collection_id={self.collection_id}, "
            f"book_id={self.book_id}, position={self.position})>"
        )
