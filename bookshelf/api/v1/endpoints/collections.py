from typing import Any, List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from bookshelf.core.auth import RequestContext, get_request_context
from bookshelf.core.database import get_db
from bookshelf.schemas.collection import (
    CollectionCreate,
    CollectionResponse,
    CollectionSummary,
    CollectionUpdate,
    CollectionWithBooks,
    ReorderRequest,
)
from bookshelf.schemas.response import (
    APIResponse,
    CreateResponse,
    DeleteResponse,
    ListResponse,
    Messages,
    SuccessResponse,
    UpdateResponse,
)
from bookshelf.services.collection_ordering import collection_ordering
from bookshelf.services.collections import collection_service

router = APIRouter()


@router.get("/", response_model=ListResponse[CollectionSummary])
def read_collections(
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
) -> Any:
    """
    List the caller's collections with book counts and preview covers.
    """
    collections = collection_service.list_collections(db, ctx)
    return ListResponse(
        message=Messages.COLLECTIONS_RETRIEVED,
        data=collections,
        meta={"total": len(collections)},
    )


@router.post(
    "/",
    response_model=CreateResponse[CollectionResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_collection(
    *,
    db: Session = Depends(get_db),
    collection_in: CollectionCreate,
    ctx: RequestContext = Depends(get_request_context),
) -> Any:
    collection = collection_service.create_collection(db, ctx, collection_in)
    return CreateResponse(
        message=Messages.COLLECTION_CREATED,
        data=CollectionResponse.model_validate(collection),
    )


@router.get("/{collection_id}", response_model=APIResponse[CollectionWithBooks])
def read_collection(
    *,
    db: Session = Depends(get_db),
    collection_id: str,
    ctx: RequestContext = Depends(get_request_context),
) -> Any:
    """
    Get a collection with its books in display order.
    """
    return APIResponse(
        message=Messages.COLLECTION_RETRIEVED,
        data=collection_service.get_collection(db, ctx, collection_id),
    )


@router.put("/{collection_id}", response_model=UpdateResponse[CollectionResponse])
def update_collection(
    *,
    db: Session = Depends(get_db),
    collection_id: str,
    collection_in: CollectionUpdate,
    ctx: RequestContext = Depends(get_request_context),
) -> Any:
    collection = collection_service.update_collection(
        db, ctx, collection_id, collection_in
    )
    return UpdateResponse(
        message=Messages.COLLECTION_UPDATED,
        data=CollectionResponse.model_validate(collection),
    )


@router.delete("/{collection_id}", response_model=DeleteResponse)
def delete_collection(
    *,
    db: Session = Depends(get_db),
    collection_id: str,
    ctx: RequestContext = Depends(get_request_context),
) -> Any:
    collection_service.delete_collection(db, ctx, collection_id)
    return DeleteResponse(message=Messages.COLLECTION_DELETED)


@router.post(
    "/{collection_id}/books/{book_id}",
    response_model=SuccessResponse[None],
    status_code=status.HTTP_201_CREATED,
)
def add_book_to_collection(
    *,
    db: Session = Depends(get_db),
    collection_id: str,
    book_id: str,
    ctx: RequestContext = Depends(get_request_context),
) -> Any:
    collection_service.add_book(db, ctx, collection_id, book_id)
    return SuccessResponse(message=Messages.COLLECTION_BOOK_ADDED)


@router.delete("/{collection_id}/books/{book_id}", response_model=DeleteResponse)
def remove_book_from_collection(
    *,
    db: Session = Depends(get_db),
    collection_id: str,
    book_id: str,
    ctx: RequestContext = Depends(get_request_context),
) -> Any:
    collection_service.remove_book(db, ctx, collection_id, book_id)
    return DeleteResponse(message=Messages.COLLECTION_BOOK_REMOVED)


@router.put("/{collection_id}/order", response_model=UpdateResponse[List[str]])
def reorder_collection(
    *,
    db: Session = Depends(get_db),
    collection_id: str,
    order_in: ReorderRequest,
    ctx: RequestContext = Depends(get_request_context),
) -> Any:
    """
    Save a new display order. The body must list every book of the collection once.
    """
    order = collection_ordering.reorder(db, ctx, collection_id, order_in.book_ids)
    return UpdateResponse(message=Messages.COLLECTION_REORDERED, data=order)
