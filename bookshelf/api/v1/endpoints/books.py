from typing import Any

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from bookshelf.core.auth import RequestContext, get_request_context
from bookshelf.core.database import get_db
from bookshelf.schemas.book import (
    BookCreate,
    BookUpdate,
    BookWithDetails,
    BookWithUserBook,
    ProgressUpdate,
    StatusUpdate,
    UserBookResponse,
)
from bookshelf.schemas.reading_session import ReadingSessionResponse
from bookshelf.schemas.response import (
    APIResponse,
    CreateResponse,
    DeleteResponse,
    ListResponse,
    Messages,
    UpdateResponse,
)
from bookshelf.services.catalog import catalog_service
from bookshelf.services.reading_coordinator import reading_coordinator
from bookshelf.services.reading_ledger import reading_ledger

router = APIRouter()


@router.get("/", response_model=ListResponse[BookWithDetails])
def read_library(
    db: Session = Depends(get_db),
    skip: int = 0,
    limit: int = Query(default=10000, le=10000),
    ctx: RequestContext = Depends(get_request_context),
) -> Any:
    """
    Retrieve the caller's library (every book except the wishlist), newest first.
    """
    books = catalog_service.list_library(db, ctx, skip=skip, limit=limit)
    return ListResponse(
        message=Messages.BOOKS_RETRIEVED,
        data=[BookWithDetails.model_validate(book) for book in books],
        meta={"total": len(books), "skip": skip, "limit": limit},
    )


@router.get("/wishlist", response_model=ListResponse[BookWithUserBook])
def read_wishlist(
    db: Session = Depends(get_db),
    skip: int = 0,
    limit: int = Query(default=10000, le=10000),
    ctx: RequestContext = Depends(get_request_context),
) -> Any:
    books = catalog_service.list_wishlist(db, ctx, skip=skip, limit=limit)
    return ListResponse(
        message=Messages.WISHLIST_RETRIEVED,
        data=[BookWithUserBook.model_validate(book) for book in books],
        meta={"total": len(books), "skip": skip, "limit": limit},
    )


@router.post(
    "/",
    response_model=CreateResponse[BookWithDetails],
    status_code=status.HTTP_201_CREATED,
)
def create_book(
    *,
    db: Session = Depends(get_db),
    book_in: BookCreate,
    ctx: RequestContext = Depends(get_request_context),
) -> Any:
    """
    Add a book to the caller's library or wishlist.
    """
    book = catalog_service.add_book(db, ctx, book_in)
    return CreateResponse(
        message=Messages.BOOK_CREATED, data=BookWithDetails.model_validate(book)
    )


@router.get("/{book_id}", response_model=APIResponse[BookWithDetails])
def read_book(
    *,
    db: Session = Depends(get_db),
    book_id: str,
    ctx: RequestContext = Depends(get_request_context),
) -> Any:
    """
    Get a book with its reading state, sessions, notes, vocabulary and collections.
    """
    book = catalog_service.get_book(db, ctx, book_id)
    return APIResponse(
        message=Messages.BOOK_RETRIEVED, data=BookWithDetails.model_validate(book)
    )


@router.put("/{book_id}", response_model=UpdateResponse[BookWithDetails])
def update_book(
    *,
    db: Session = Depends(get_db),
    book_id: str,
    book_in: BookUpdate,
    ctx: RequestContext = Depends(get_request_context),
) -> Any:
    book = catalog_service.edit_book(db, ctx, book_id, book_in)
    return UpdateResponse(
        message=Messages.BOOK_UPDATED, data=BookWithDetails.model_validate(book)
    )


@router.delete("/{book_id}", response_model=DeleteResponse)
def delete_book(
    *,
    db: Session = Depends(get_db),
    book_id: str,
    ctx: RequestContext = Depends(get_request_context),
) -> Any:
    catalog_service.delete_book(db, ctx, book_id)
    return DeleteResponse(message=Messages.BOOK_DELETED)


@router.patch("/{book_id}/status", response_model=UpdateResponse[UserBookResponse])
def update_status(
    *,
    db: Session = Depends(get_db),
    book_id: str,
    status_in: StatusUpdate,
    ctx: RequestContext = Depends(get_request_context),
) -> Any:
    """
    Change the reading status, opening or closing reading sessions as needed.
    """
    user_book = reading_coordinator.change_status(db, ctx, book_id, status_in.status)
    return UpdateResponse(
        message=Messages.STATUS_UPDATED,
        data=UserBookResponse.model_validate(user_book),
    )


@router.patch("/{book_id}/progress", response_model=UpdateResponse[UserBookResponse])
def update_progress(
    *,
    db: Session = Depends(get_db),
    book_id: str,
    progress_in: ProgressUpdate,
    ctx: RequestContext = Depends(get_request_context),
) -> Any:
    user_book = reading_coordinator.update_progress(
        db, ctx, book_id, progress_in.current_page
    )
    return UpdateResponse(
        message=Messages.PROGRESS_UPDATED,
        data=UserBookResponse.model_validate(user_book),
    )


@router.post(
    "/{book_id}/sessions/new-read",
    response_model=CreateResponse[UserBookResponse],
    status_code=status.HTTP_201_CREATED,
)
def start_new_read(
    *,
    db: Session = Depends(get_db),
    book_id: str,
    ctx: RequestContext = Depends(get_request_context),
) -> Any:
    """
    Start re-reading a completed book.
    """
    user_book = reading_coordinator.start_new_read(db, ctx, book_id)
    return CreateResponse(
        message=Messages.NEW_READ_STARTED,
        data=UserBookResponse.model_validate(user_book),
    )


@router.get(
    "/{book_id}/sessions", response_model=ListResponse[ReadingSessionResponse]
)
def read_sessions(
    *,
    db: Session = Depends(get_db),
    book_id: str,
    ctx: RequestContext = Depends(get_request_context),
) -> Any:
    """
    List the reading sessions of a book, most recent read first.
    """
    sessions = reading_ledger.list_for_book(db, ctx, book_id)
    return ListResponse(
        message=Messages.SESSIONS_RETRIEVED,
        data=[ReadingSessionResponse.model_validate(s) for s in sessions],
        meta={"total": len(sessions)},
    )
