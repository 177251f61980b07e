import logging
from datetime import datetime
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from bookshelf.core.auth import RequestContext
from bookshelf.core.database import transaction
from bookshelf.core.events import LibraryEvent, book_query_keys, publish_mutation
from bookshelf.core.exceptions import BookNotFound, ValidationFailure
from bookshelf.crud.book import crud_book
from bookshelf.crud.user_book import crud_user_book
from bookshelf.models.book import Book
from bookshelf.models.user_book import ReadingStatus
from bookshelf.schemas.book import BookCreate, BookUpdate
from bookshelf.services.reading_ledger import ReadingLedger, reading_ledger
from bookshelf.utils.date_utils import now

logger = logging.getLogger(__name__)


class CatalogService:
    """Adding, editing, deleting and listing the books of a user."""

    def __init__(
        self,
        ledger: ReadingLedger = reading_ledger,
        clock: Callable[[], datetime] = now,
    ):
        self.ledger = ledger
        self.clock = clock

    def get_book(self, db: Session, ctx: RequestContext, book_id: str) -> Book:
        book = crud_book.get_with_details(db, user_id=ctx.user_id, id=book_id)
        if book is None:
            raise BookNotFound(book_id)
        return book

    def list_library(
        self, db: Session, ctx: RequestContext, skip: int = 0, limit: int = 10000
    ) -> List[Book]:
        return crud_book.get_library(db, user_id=ctx.user_id, skip=skip, limit=limit)

    def list_wishlist(
        self, db: Session, ctx: RequestContext, skip: int = 0, limit: int = 10000
    ) -> List[Book]:
        return crud_book.get_wishlist(db, user_id=ctx.user_id, skip=skip, limit=limit)

    def add_book(
        self,
        db: Session,
        ctx: RequestContext,
        obj_in: BookCreate,
        *,
        at: Optional[datetime] = None,
    ) -> Book:
        """
        Catalogue a book together with its reading state.

        A book added as reading or completed gets its first session right
        away; a completed one is also finished, fully paged and rated.
        """
        at = at or self.clock()
        status = ReadingStatus(obj_in.status)

        with transaction(db):
            book = crud_book.create_book(db, user_id=ctx.user_id, obj_in=obj_in)
            user_book = crud_user_book.create_for_book(
                db, user_id=ctx.user_id, book_id=book.id, status=status
            )

            if status in (ReadingStatus.READING, ReadingStatus.COMPLETED):
                completed = status == ReadingStatus.COMPLETED
                session = self.ledger.append(
                    db,
                    user_book,
                    read_number=1,
                    started_at=at,
                    finished_at=at if completed else None,
                    rating=obj_in.rating if completed else None,
                )
                user_book.current_session_id = session.id
                user_book.started_at = at
                if completed:
                    user_book.finished_at = at
                    user_book.current_page = book.page_count or 0
                    user_book.rating = obj_in.rating
            db.flush()
            book_id = book.id

        logger.info(f"User {ctx.user_id} added book {book_id} as {status.value}")
        publish_mutation(
            LibraryEvent.BOOK_ADDED,
            ctx.user_id,
            book_query_keys(book_id),
            book_id=book_id,
            status=status.value,
        )
        return self.get_book(db, ctx, book_id)

    def edit_book(
        self, db: Session, ctx: RequestContext, book_id: str, obj_in: BookUpdate
    ) -> Book:
        """Update catalogue fields only; the reading state is left alone"""
        with transaction(db):
            book = crud_book.get(db, user_id=ctx.user_id, id=book_id)
            if book is None:
                raise BookNotFound(book_id)
            page_count = obj_in.model_dump(exclude_unset=True).get("page_count")
            user_book = book.user_book
            if (
                page_count is not None
                and user_book is not None
                and user_book.current_page > page_count
            ):
                raise ValidationFailure(
                    f"The book cannot have fewer pages than the current page "
                    f"({user_book.current_page})",
                    params={
                        "page_count": page_count,
                        "current_page": user_book.current_page,
                    },
                )
            crud_book.update(db, db_obj=book, obj_in=obj_in)

        publish_mutation(
            LibraryEvent.BOOK_UPDATED, ctx.user_id, book_query_keys(book_id), book_id=book_id
        )
        return self.get_book(db, ctx, book_id)

    def delete_book(self, db: Session, ctx: RequestContext, book_id: str) -> None:
        """Delete a book with its reading state, sessions, notes and memberships"""
        with transaction(db):
            book = crud_book.get(db, user_id=ctx.user_id, id=book_id)
            if book is None:
                raise BookNotFound(book_id)
            crud_book.remove(db, db_obj=book)

        logger.info(f"User {ctx.user_id} deleted book {book_id}")
        publish_mutation(
            LibraryEvent.BOOK_DELETED,
            ctx.user_id,
            book_query_keys(book_id) + [("collections",)],
            book_id=book_id,
        )


catalog_service = CatalogService()
