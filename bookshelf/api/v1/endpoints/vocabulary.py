from typing import Any

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from bookshelf.core.auth import RequestContext, get_request_context
from bookshelf.core.database import get_db
from bookshelf.schemas.response import (
    CreateResponse,
    DeleteResponse,
    ListResponse,
    Messages,
    UpdateResponse,
)
from bookshelf.schemas.vocabulary import (
    VocabularyCreate,
    VocabularyResponse,
    VocabularyUpdate,
    VocabularyWithBook,
)
from bookshelf.services.annotations import annotation_service

router = APIRouter()


@router.get("/vocabulary/", response_model=ListResponse[VocabularyWithBook])
def read_all_vocabulary(
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
) -> Any:
    """
    Every word the caller saved, with the title and author of its book.
    """
    words = annotation_service.list_all_words(db, ctx)
    return ListResponse(
        message=Messages.VOCABULARY_RETRIEVED, data=words, meta={"total": len(words)}
    )


@router.get(
    "/books/{book_id}/vocabulary", response_model=ListResponse[VocabularyResponse]
)
def read_book_vocabulary(
    *,
    db: Session = Depends(get_db),
    book_id: str,
    ctx: RequestContext = Depends(get_request_context),
) -> Any:
    words = annotation_service.list_words(db, ctx, book_id)
    return ListResponse(
        message=Messages.VOCABULARY_RETRIEVED,
        data=[VocabularyResponse.model_validate(word) for word in words],
        meta={"total": len(words)},
    )


@router.post(
    "/books/{book_id}/vocabulary",
    response_model=CreateResponse[VocabularyResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_vocabulary(
    *,
    db: Session = Depends(get_db),
    book_id: str,
    vocabulary_in: VocabularyCreate,
    ctx: RequestContext = Depends(get_request_context),
) -> Any:
    word = annotation_service.add_word(db, ctx, book_id, vocabulary_in)
    return CreateResponse(
        message=Messages.VOCABULARY_CREATED,
        data=VocabularyResponse.model_validate(word),
    )


@router.put(
    "/vocabulary/{vocabulary_id}", response_model=UpdateResponse[VocabularyResponse]
)
def update_vocabulary(
    *,
    db: Session = Depends(get_db),
    vocabulary_id: str,
    vocabulary_in: VocabularyUpdate,
    ctx: RequestContext = Depends(get_request_context),
) -> Any:
    word = annotation_service.edit_word(db, ctx, vocabulary_id, vocabulary_in)
    return UpdateResponse(
        message=Messages.VOCABULARY_UPDATED,
        data=VocabularyResponse.model_validate(word),
    )


@router.delete("/vocabulary/{vocabulary_id}", response_model=DeleteResponse)
def delete_vocabulary(
    *,
    db: Session = Depends(get_db),
    vocabulary_id: str,
    ctx: RequestContext = Depends(get_request_context),
) -> Any:
    annotation_service.delete_word(db, ctx, vocabulary_id)
    return DeleteResponse(message=Messages.VOCABULARY_DELETED)
