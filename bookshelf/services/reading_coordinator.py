"""
Reading state machine.

Keeps a book's UserBook row (status, current page, current session pointer,
start and finish dates) consistent with its reading-session ledger. Every
operation runs in a single transaction and publishes its invalidation
events only after the commit succeeded.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from sqlalchemy.orm import Session

from bookshelf.core.auth import RequestContext
from bookshelf.core.database import transaction
from bookshelf.core.events import ReadingEvent, book_query_keys, publish_mutation
from bookshelf.core.exceptions import (
    InvalidTransition,
    UserBookNotFound,
    ValidationFailure,
)
from bookshelf.crud.user_book import crud_user_book
from bookshelf.models.reading_session import ReadingSession
from bookshelf.models.user_book import ReadingStatus, UserBook
from bookshelf.schemas.reading_session import ReadingSessionUpdate
from bookshelf.services.reading_ledger import ReadingLedger, reading_ledger
from bookshelf.utils.date_utils import as_utc, now

logger = logging.getLogger(__name__)


class ReadingCoordinator:
    def __init__(
        self,
        ledger: ReadingLedger = reading_ledger,
        clock: Callable[[], datetime] = now,
    ):
        self.ledger = ledger
        self.clock = clock

    def _load(self, db: Session, ctx: RequestContext, book_id: str) -> UserBook:
        user_book = crud_user_book.get_by_book(
            db, user_id=ctx.user_id, book_id=book_id, lock=True
        )
        if user_book is None:
            raise UserBookNotFound(book_id)
        return user_book

    def _open_session(
        self, db: Session, user_book: UserBook, at: datetime
    ) -> ReadingSession:
        read_number = self.ledger.next_read_number(db, user_book)
        session = self.ledger.append(db, user_book, read_number=read_number, started_at=at)
        user_book.current_session_id = session.id
        user_book.started_at = at
        return session

    def _current_session(
        self, db: Session, user_book: UserBook
    ) -> Optional[ReadingSession]:
        if user_book.current_session_id is None:
            return None
        session = db.get(ReadingSession, user_book.current_session_id)
        if session is None or session.user_book_id != user_book.id:
            logger.warning(
                f"User book {user_book.id} points at missing session "
                f"{user_book.current_session_id}"
            )
            return None
        return session

    def change_status(
        self,
        db: Session,
        ctx: RequestContext,
        book_id: str,
        status: ReadingStatus,
        *,
        at: Optional[datetime] = None,
    ) -> UserBook:
        """
        Move a book to a new reading status.

        Entering `reading` opens a new session unless one is already active.
        Entering `completed` closes the current session. `want_to_read` and
        `wishlist` only change the status field. Setting the current status
        again is a no-op.
        """
        at = at or self.clock()
        try:
            status = ReadingStatus(status)
        except ValueError:
            raise ValidationFailure(
                f"Unknown reading status: {status}", params={"status": status}
            )

        with transaction(db):
            user_book = self._load(db, ctx, book_id)
            previous = ReadingStatus(user_book.status)
            if previous == status:
                return user_book

            if status == ReadingStatus.READING:
                if (
                    user_book.current_session_id is None
                    or previous == ReadingStatus.COMPLETED
                ):
                    self._open_session(db, user_book, at)
            elif status == ReadingStatus.COMPLETED:
                session = self._current_session(db, user_book)
                if session is not None:
                    session.finished_at = at
                user_book.finished_at = at

            user_book.status = status.value
            db.flush()

        logger.info(
            f"Book {book_id} of user {ctx.user_id}: {previous.value} -> {status.value}"
        )
        publish_mutation(
            ReadingEvent.STATUS_CHANGED,
            ctx.user_id,
            book_query_keys(book_id),
            book_id=book_id,
            previous=previous.value,
            status=status.value,
        )
        return user_book

    def start_new_read(
        self,
        db: Session,
        ctx: RequestContext,
        book_id: str,
        *,
        at: Optional[datetime] = None,
    ) -> UserBook:
        """
        Begin a re-read of a completed book.

        Raises:
            InvalidTransition: the book is not completed, which also refuses a
                duplicate trigger arriving after a successful start
            ReadNumberConflict: a concurrent start claimed the read number
        """
        at = at or self.clock()

        with transaction(db):
            user_book = self._load(db, ctx, book_id)
            if user_book.status != ReadingStatus.COMPLETED.value:
                raise InvalidTransition("start a new read", user_book.status)

            session = self._open_session(db, user_book, at)
            user_book.current_page = 0
            user_book.status = ReadingStatus.READING.value
            db.flush()
            session_id, read_number = session.id, session.read_number

        logger.info(f"Book {book_id} of user {ctx.user_id}: started read #{read_number}")
        publish_mutation(
            ReadingEvent.SESSION_STARTED,
            ctx.user_id,
            book_query_keys(book_id),
            book_id=book_id,
            session_id=session_id,
            read_number=read_number,
        )
        return user_book

    def update_progress(
        self, db: Session, ctx: RequestContext, book_id: str, current_page: int
    ) -> UserBook:
        """
        Record the page the user is on.

        The write has no status precondition; the page only has to fit the
        book.
        """
        if (
            isinstance(current_page, bool)
            or not isinstance(current_page, int)
            or current_page < 0
        ):
            raise ValidationFailure(
                "Current page must be a whole number, zero or greater",
                params={"current_page": current_page},
            )

        with transaction(db):
            user_book = self._load(db, ctx, book_id)
            page_count = user_book.book.page_count
            if page_count is not None and current_page > page_count:
                raise ValidationFailure(
                    f"Current page cannot exceed the book's {page_count} pages",
                    params={"current_page": current_page, "page_count": page_count},
                )
            user_book.current_page = current_page
            db.flush()

        publish_mutation(
            ReadingEvent.PROGRESSED,
            ctx.user_id,
            book_query_keys(book_id),
            book_id=book_id,
            current_page=current_page,
        )
        return user_book

    def update_session(
        self,
        db: Session,
        ctx: RequestContext,
        session_id: str,
        obj_in: ReadingSessionUpdate,
    ) -> ReadingSession:
        """Edit dates, rating or review of a session. Never touches the status."""
        changes = obj_in.model_dump(exclude_unset=True)

        with transaction(db):
            session = self.ledger.get(db, ctx, session_id)
            started_at = changes.get("started_at", session.started_at)
            finished_at = changes.get("finished_at", session.finished_at)
            if (
                started_at is not None
                and finished_at is not None
                and as_utc(finished_at) < as_utc(started_at)
            ):
                raise ValidationFailure("A read cannot finish before it started")
            session = self.ledger.edit(db, session, changes)
            book_id = session.book_id

        publish_mutation(
            ReadingEvent.SESSION_UPDATED,
            ctx.user_id,
            book_query_keys(book_id),
            book_id=book_id,
            session_id=session_id,
        )
        return session

    def delete_session(
        self, db: Session, ctx: RequestContext, session_id: str
    ) -> UserBook:
        """
        Remove a session from the ledger.

        Deleting the current session clears the pointer and sends the book
        back to want_to_read; the current page is left as it was. Deleting
        any other session leaves the user book untouched.
        """
        with transaction(db):
            session = self.ledger.get(db, ctx, session_id)
            book_id = session.book_id
            user_book = self._load(db, ctx, book_id)
            was_current = user_book.current_session_id == session.id

            self.ledger.remove(db, session)
            if was_current:
                user_book.current_session_id = None
                user_book.status = ReadingStatus.WANT_TO_READ.value
            db.flush()

        logger.info(
            f"Deleted session {session_id} of book {book_id}"
            + (" (was current, status reset)" if was_current else "")
        )
        publish_mutation(
            ReadingEvent.SESSION_DELETED,
            ctx.user_id,
            book_query_keys(book_id),
            book_id=book_id,
            session_id=session_id,
            was_current=was_current,
        )
        return user_book


reading_coordinator = ReadingCoordinator()
