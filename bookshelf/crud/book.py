import logging
from typing import List, Optional

from sqlalchemy.orm import Session, selectinload

from bookshelf.crud.base import CRUDBase
from bookshelf.models.book import Book
from bookshelf.models.collection import BookCollection
from bookshelf.models.user_book import ReadingStatus, UserBook
from bookshelf.schemas.book import BookCreate, BookUpdate

logger = logging.getLogger(__name__)

# Fields of BookCreate that belong to the reading state, not the catalogue
READING_STATE_FIELDS = {"status", "rating"}


class CRUDBook(CRUDBase[Book, BookCreate, BookUpdate]):
    def _with_details(self, db: Session):
        return db.query(Book).options(
            selectinload(Book.user_book),
            selectinload(Book.reading_sessions),
            selectinload(Book.notes),
            selectinload(Book.vocabulary),
            selectinload(Book.collection_links).selectinload(BookCollection.collection),
        )

    def get_with_details(
        self, db: Session, *, user_id: str, id: str
    ) -> Optional[Book]:
        """Get one book with its reading state, ledger, annotations and collections"""
        return (
            self._with_details(db)
            .filter(Book.id == id, Book.user_id == user_id)
            .first()
        )

    def get_library(
        self, db: Session, *, user_id: str, skip: int = 0, limit: int = 10000
    ) -> List[Book]:
        """Get the user's books except the wishlist, newest first"""
        return (
            self._with_details(db)
            .join(UserBook, UserBook.book_id == Book.id)
            .filter(
                Book.user_id == user_id,
                UserBook.status != ReadingStatus.WISHLIST.value,
            )
            .order_by(Book.created_at.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def get_wishlist(
        self, db: Session, *, user_id: str, skip: int = 0, limit: int = 10000
    ) -> List[Book]:
        """Get books the user wants to own"""
        return (
            db.query(Book)
            .options(selectinload(Book.user_book))
            .join(UserBook, UserBook.book_id == Book.id)
            .filter(
                Book.user_id == user_id,
                UserBook.status == ReadingStatus.WISHLIST.value,
            )
            .order_by(Book.created_at.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def get_all_for_stats(self, db: Session, *, user_id: str) -> List[Book]:
        """Every book of the user with the inputs the statistics need"""
        return (
            db.query(Book)
            .options(selectinload(Book.user_book), selectinload(Book.reading_sessions))
            .filter(Book.user_id == user_id)
            .order_by(Book.created_at.desc())
            .all()
        )

    def create_book(self, db: Session, *, user_id: str, obj_in: BookCreate) -> Book:
        """Create the catalogue row only; the reading state is created separately"""
        book = Book(user_id=user_id, **obj_in.model_dump(exclude=READING_STATE_FIELDS))
        db.add(book)
        db.flush()
        return book


crud_book = CRUDBook(Book)
