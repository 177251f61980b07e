from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bookshelf.core.auth import RequestContext, get_request_context
from bookshelf.core.database import get_db
from bookshelf.schemas.book import UserBookResponse
from bookshelf.schemas.reading_session import (
    ReadingSessionResponse,
    ReadingSessionUpdate,
)
from bookshelf.schemas.response import APIResponse, Messages, UpdateResponse
from bookshelf.services.reading_coordinator import reading_coordinator

router = APIRouter()


@router.patch("/{session_id}", response_model=UpdateResponse[ReadingSessionResponse])
def update_session(
    *,
    db: Session = Depends(get_db),
    session_id: str,
    session_in: ReadingSessionUpdate,
    ctx: RequestContext = Depends(get_request_context),
) -> Any:
    """
    Edit the dates, rating or review of a reading session.
    """
    session = reading_coordinator.update_session(db, ctx, session_id, session_in)
    return UpdateResponse(
        message=Messages.SESSION_UPDATED,
        data=ReadingSessionResponse.model_validate(session),
    )


@router.delete("/{session_id}", response_model=APIResponse[UserBookResponse])
def delete_session(
    *,
    db: Session = Depends(get_db),
    session_id: str,
    ctx: RequestContext = Depends(get_request_context),
) -> Any:
    """
    Delete a reading session. Returns the book's reading state afterwards.
    """
    user_book = reading_coordinator.delete_session(db, ctx, session_id)
    return APIResponse(
        message=Messages.SESSION_DELETED,
        data=UserBookResponse.model_validate(user_book),
    )
