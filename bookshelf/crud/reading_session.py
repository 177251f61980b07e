from datetime import datetime
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from bookshelf.crud.base import CRUDBase
from bookshelf.models.reading_session import ReadingSession
from bookshelf.models.user_book import UserBook
from bookshelf.schemas.reading_session import ReadingSessionUpdate


class CRUDReadingSession(
    CRUDBase[ReadingSession, ReadingSessionUpdate, ReadingSessionUpdate]
):
    def list_by_book(
        self, db: Session, *, user_id: str, book_id: str
    ) -> List[ReadingSession]:
        """Ledger of one book, most recent read first"""
        return (
            db.query(ReadingSession)
            .filter(
                ReadingSession.book_id == book_id,
                ReadingSession.user_id == user_id,
            )
            .order_by(ReadingSession.read_number.desc())
            .all()
        )

    def max_read_number(self, db: Session, *, user_book_id: str) -> int:
        """Highest read number used so far for the user book, 0 when none"""
        value = (
            db.query(func.max(ReadingSession.read_number))
            .filter(ReadingSession.user_book_id == user_book_id)
            .scalar()
        )
        return value or 0

    def create_session(
        self,
        db: Session,
        *,
        user_book: UserBook,
        read_number: int,
        started_at: Optional[datetime] = None,
        finished_at: Optional[datetime] = None,
        rating: Optional[int] = None,
    ) -> ReadingSession:
        """Append a ledger row; the caller supplies the read number"""
        session = ReadingSession(
            user_id=user_book.user_id,
            book_id=user_book.book_id,
            user_book_id=user_book.id,
            read_number=read_number,
            started_at=started_at,
            finished_at=finished_at,
            rating=rating,
        )
        db.add(session)
        db.flush()
        return session


crud_reading_session = CRUDReadingSession(ReadingSession)
