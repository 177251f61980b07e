import logging
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bookshelf.core.auth import RequestContext
from bookshelf.core.database import transaction
from bookshelf.core.events import CollectionEvent, collection_query_keys, publish_mutation
from bookshelf.core.exceptions import (
    BookNotFound,
    CollectionNotFound,
    NotFound,
    ValidationFailure,
)
from bookshelf.crud.book import crud_book
from bookshelf.crud.collection import crud_book_collection, crud_collection
from bookshelf.models.collection import Collection
from bookshelf.schemas.book import BookWithUserBook
from bookshelf.schemas.collection import (
    CollectionCreate,
    CollectionSummary,
    CollectionUpdate,
    CollectionWithBooks,
    CollectionResponse,
)
from bookshelf.services.collection_ordering import sort_for_display

logger = logging.getLogger(__name__)

PREVIEW_COVERS = 4


class CollectionService:
    """User-defined groupings of books and their membership."""

    def _get(self, db: Session, ctx: RequestContext, collection_id: str) -> Collection:
        collection = crud_collection.get(db, user_id=ctx.user_id, id=collection_id)
        if collection is None:
            raise CollectionNotFound(collection_id)
        return collection

    def _changed(self, ctx: RequestContext, collection_id: str, **kwargs) -> None:
        publish_mutation(
            CollectionEvent.CHANGED,
            ctx.user_id,
            collection_query_keys(collection_id),
            collection_id=collection_id,
            **kwargs,
        )

    def list_collections(
        self, db: Session, ctx: RequestContext
    ) -> List[CollectionSummary]:
        summaries = []
        for collection in crud_collection.get_by_user(db, user_id=ctx.user_id):
            links = sort_for_display(collection.links)
            summaries.append(
                CollectionSummary(
                    **CollectionResponse.model_validate(collection).model_dump(),
                    book_count=len(links),
                    preview_covers=[
                        link.book.cover_url for link in links[:PREVIEW_COVERS]
                    ],
                )
            )
        return summaries

    def get_collection(
        self, db: Session, ctx: RequestContext, collection_id: str
    ) -> CollectionWithBooks:
        """A collection with its books in display order"""
        collection = crud_collection.get_with_books(
            db, user_id=ctx.user_id, id=collection_id
        )
        if collection is None:
            raise CollectionNotFound(collection_id)
        return CollectionWithBooks(
            **CollectionResponse.model_validate(collection).model_dump(),
            books=[
                BookWithUserBook.model_validate(link.book)
                for link in sort_for_display(collection.links)
            ],
        )

    def create_collection(
        self, db: Session, ctx: RequestContext, obj_in: CollectionCreate
    ) -> Collection:
        with transaction(db):
            collection = crud_collection.create(db, user_id=ctx.user_id, obj_in=obj_in)
        logger.info(f"User {ctx.user_id} created collection {collection.id}")
        self._changed(ctx, collection.id)
        return collection

    def update_collection(
        self,
        db: Session,
        ctx: RequestContext,
        collection_id: str,
        obj_in: CollectionUpdate,
    ) -> Collection:
        with transaction(db):
            collection = self._get(db, ctx, collection_id)
            collection = crud_collection.update(db, db_obj=collection, obj_in=obj_in)
        self._changed(ctx, collection_id)
        return collection

    def delete_collection(
        self, db: Session, ctx: RequestContext, collection_id: str
    ) -> None:
        """Delete a collection and its memberships; the books stay"""
        with transaction(db):
            collection = self._get(db, ctx, collection_id)
            crud_collection.remove(db, db_obj=collection)
        logger.info(f"User {ctx.user_id} deleted collection {collection_id}")
        self._changed(ctx, collection_id)

    def add_book(
        self, db: Session, ctx: RequestContext, collection_id: str, book_id: str
    ) -> None:
        """Append a book after every ordered book of the collection"""
        try:
            with transaction(db):
                self._get(db, ctx, collection_id)
                if crud_book.get(db, user_id=ctx.user_id, id=book_id) is None:
                    raise BookNotFound(book_id)
                if crud_book_collection.get_link(
                    db, collection_id=collection_id, book_id=book_id
                ):
                    raise ValidationFailure(
                        "Book is already in this collection",
                        params={"collection_id": collection_id, "book_id": book_id},
                    )
                crud_book_collection.add_book(
                    db, collection_id=collection_id, book_id=book_id
                )
        except IntegrityError as e:
            # Lost a race with an identical add
            raise ValidationFailure(
                "Book is already in this collection",
                params={"collection_id": collection_id, "book_id": book_id},
            ) from e
        self._changed(ctx, collection_id, book_id=book_id)

    def remove_book(
        self, db: Session, ctx: RequestContext, collection_id: str, book_id: str
    ) -> None:
        with transaction(db):
            self._get(db, ctx, collection_id)
            link = crud_book_collection.get_link(
                db, collection_id=collection_id, book_id=book_id
            )
            if link is None:
                raise NotFound(
                    "Book is not in this collection",
                    params={"collection_id": collection_id, "book_id": book_id},
                )
            crud_book_collection.remove_book(db, link=link)
        self._changed(ctx, collection_id, book_id=book_id)


collection_service = CollectionService()
