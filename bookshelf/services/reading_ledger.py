import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bookshelf.core.auth import RequestContext
from bookshelf.core.exceptions import (
    ReadNumberConflict,
    SessionNotFound,
    UserBookNotFound,
)
from bookshelf.crud.reading_session import crud_reading_session
from bookshelf.crud.user_book import crud_user_book
from bookshelf.models.reading_session import ReadingSession
from bookshelf.models.user_book import UserBook

logger = logging.getLogger(__name__)


class ReadingLedger:
    """
    CRUD over the reading sessions of one user.

    The ledger enforces nothing beyond read number uniqueness; status and
    pointer bookkeeping belongs to the reading coordinator. Methods only
    flush, so they compose into the caller's transaction.
    """

    def list_for_book(
        self, db: Session, ctx: RequestContext, book_id: str
    ) -> List[ReadingSession]:
        """Sessions of a book, most recent read first"""
        if crud_user_book.get_by_book(db, user_id=ctx.user_id, book_id=book_id) is None:
            raise UserBookNotFound(book_id)
        return crud_reading_session.list_by_book(
            db, user_id=ctx.user_id, book_id=book_id
        )

    def get(self, db: Session, ctx: RequestContext, session_id: str) -> ReadingSession:
        session = crud_reading_session.get(db, user_id=ctx.user_id, id=session_id)
        if session is None:
            raise SessionNotFound(session_id)
        return session

    def next_read_number(self, db: Session, user_book: UserBook) -> int:
        return crud_reading_session.max_read_number(db, user_book_id=user_book.id) + 1

    def append(
        self,
        db: Session,
        user_book: UserBook,
        *,
        read_number: int,
        started_at: Optional[datetime] = None,
        finished_at: Optional[datetime] = None,
        rating: Optional[int] = None,
    ) -> ReadingSession:
        """
        Insert a session with the given read number.

        A failed insert leaves the db session needing a rollback, so no
        loaded attribute may be read until the caller's transaction unwinds.

        Raises:
            ReadNumberConflict: another session already holds the read number
        """
        user_book_id = user_book.id
        try:
            session = crud_reading_session.create_session(
                db,
                user_book=user_book,
                read_number=read_number,
                started_at=started_at,
                finished_at=finished_at,
                rating=rating,
            )
        except IntegrityError as e:
            logger.warning(
                f"Read number {read_number} already taken for user book {user_book_id}"
            )
            raise ReadNumberConflict(user_book_id, read_number) from e

        logger.info(
            f"Appended read #{read_number} ({session.id}) to user book {user_book_id}"
        )
        return session

    def edit(
        self, db: Session, session: ReadingSession, changes: Dict[str, Any]
    ) -> ReadingSession:
        return crud_reading_session.update(db, db_obj=session, obj_in=changes)

    def remove(self, db: Session, session: ReadingSession) -> None:
        crud_reading_session.remove(db, db_obj=session)


reading_ledger = ReadingLedger()
