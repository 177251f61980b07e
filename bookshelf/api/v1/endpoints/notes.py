from typing import Any

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from bookshelf.core.auth import RequestContext, get_request_context
from bookshelf.core.database import get_db
from bookshelf.schemas.note import NoteCreate, NoteResponse, NoteUpdate, QuoteResponse
from bookshelf.schemas.response import (
    APIResponse,
    CreateResponse,
    DeleteResponse,
    ListResponse,
    Messages,
    UpdateResponse,
)
from bookshelf.services.annotations import annotation_service

router = APIRouter()


@router.get("/books/{book_id}/notes", response_model=ListResponse[NoteResponse])
def read_notes(
    *,
    db: Session = Depends(get_db),
    book_id: str,
    ctx: RequestContext = Depends(get_request_context),
) -> Any:
    notes = annotation_service.list_notes(db, ctx, book_id)
    return ListResponse(
        message=Messages.NOTES_RETRIEVED,
        data=[NoteResponse.model_validate(note) for note in notes],
        meta={"total": len(notes)},
    )


@router.post(
    "/books/{book_id}/notes",
    response_model=CreateResponse[NoteResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_note(
    *,
    db: Session = Depends(get_db),
    book_id: str,
    note_in: NoteCreate,
    ctx: RequestContext = Depends(get_request_context),
) -> Any:
    note = annotation_service.add_note(db, ctx, book_id, note_in)
    return CreateResponse(
        message=Messages.NOTE_CREATED, data=NoteResponse.model_validate(note)
    )


@router.get("/notes/quotes/random", response_model=APIResponse[QuoteResponse])
def read_random_quote(
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
) -> Any:
    """
    A random quote from any of the caller's books; data is null when there is none.
    """
    return APIResponse(
        message=Messages.QUOTE_RETRIEVED, data=annotation_service.random_quote(db, ctx)
    )


@router.put("/notes/{note_id}", response_model=UpdateResponse[NoteResponse])
def update_note(
    *,
    db: Session = Depends(get_db),
    note_id: str,
    note_in: NoteUpdate,
    ctx: RequestContext = Depends(get_request_context),
) -> Any:
    note = annotation_service.edit_note(db, ctx, note_id, note_in)
    return UpdateResponse(
        message=Messages.NOTE_UPDATED, data=NoteResponse.model_validate(note)
    )


@router.delete("/notes/{note_id}", response_model=DeleteResponse)
def delete_note(
    *,
    db: Session = Depends(get_db),
    note_id: str,
    ctx: RequestContext = Depends(get_request_context),
) -> Any:
    annotation_service.delete_note(db, ctx, note_id)
    return DeleteResponse(message=Messages.NOTE_DELETED)
