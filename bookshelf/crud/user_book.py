from typing import Optional

from sqlalchemy.orm import Session

from bookshelf.crud.base import CRUDBase
from bookshelf.models.user_book import ReadingStatus, UserBook
from bookshelf.schemas.book import StatusUpdate


class CRUDUserBook(CRUDBase[UserBook, StatusUpdate, StatusUpdate]):
    def get_by_book(
        self, db: Session, *, user_id: str, book_id: str, lock: bool = False
    ) -> Optional[UserBook]:
        """
        Get the reading state of a book owned by the user.

        With lock=True the row is selected FOR UPDATE on databases that
        support it, serialising concurrent transitions of the same book.
        """
        query = db.query(UserBook).filter(
            UserBook.book_id == book_id, UserBook.user_id == user_id
        )
        if lock:
            query = query.with_for_update()
        return query.first()

    def create_for_book(
        self,
        db: Session,
        *,
        user_id: str,
        book_id: str,
        status: ReadingStatus = ReadingStatus.WANT_TO_READ,
    ) -> UserBook:
        user_book = UserBook(
            user_id=user_id, book_id=book_id, status=status.value, current_page=0
        )
        db.add(user_book)
        db.flush()
        return user_book


crud_user_book = CRUDUserBook(UserBook)
