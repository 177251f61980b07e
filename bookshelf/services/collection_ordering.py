"""
Display order of books inside a collection.

Rows carry a nullable integer position. Display sorts ascending by
position with unpositioned rows after every positioned one, keeping the
order they were read in. A reorder rewrites every position at once.
"""

import logging
from typing import Callable, List, Optional, Sequence

from sqlalchemy.orm import Session

from bookshelf.core.auth import RequestContext
from bookshelf.core.database import transaction
from bookshelf.core.events import CollectionEvent, collection_query_keys, publish_mutation
from bookshelf.core.exceptions import CollectionNotFound, ValidationFailure
from bookshelf.crud.collection import crud_book_collection, crud_collection
from bookshelf.models.collection import BookCollection

logger = logging.getLogger(__name__)


def sort_for_display(links: Sequence[BookCollection]) -> List[BookCollection]:
    # sorted() is stable, so nulls keep their incoming relative order
    return sorted(
        links,
        key=lambda link: (link.position is None, link.position or 0),
    )


def display_book_ids(links: Sequence[BookCollection]) -> List[str]:
    return [link.book_id for link in sort_for_display(links)]


class CollectionOrderingService:
    def reorder(
        self,
        db: Session,
        ctx: RequestContext,
        collection_id: str,
        book_ids: Sequence[str],
    ) -> List[str]:
        """
        Persist a new display order.

        `book_ids` must list every book of the collection exactly once;
        position i is written for the i-th id. All rows are written in one
        transaction, so a failure leaves the stored order unchanged.

        Returns:
            List[str]: the stored display order
        """
        book_ids = list(book_ids)
        if len(set(book_ids)) != len(book_ids):
            raise ValidationFailure("The new order lists a book more than once")

        with transaction(db):
            collection = crud_collection.get(db, user_id=ctx.user_id, id=collection_id)
            if collection is None:
                raise CollectionNotFound(collection_id)

            links = {
                link.book_id: link
                for link in crud_book_collection.get_links(db, collection_id=collection_id)
            }
            unknown = [book_id for book_id in book_ids if book_id not in links]
            missing = [book_id for book_id in links if book_id not in set(book_ids)]
            if unknown or missing:
                raise ValidationFailure(
                    "The new order must list exactly the books of the collection",
                    params={"unknown": unknown, "missing": missing},
                )

            for index, book_id in enumerate(book_ids):
                links[book_id].position = index
            db.flush()

        logger.info(f"Reordered {len(book_ids)} books in collection {collection_id}")
        publish_mutation(
            CollectionEvent.REORDERED,
            ctx.user_id,
            collection_query_keys(collection_id),
            collection_id=collection_id,
            book_ids=book_ids,
        )
        return book_ids


class ReorderCommand:
    """
    Optimistic reorder of a locally displayed collection.

    `execute` shows the new order before persisting it and puts the
    previous order back if persisting fails, re-raising the failure.
    """

    def __init__(self, view: List[str], new_order: Sequence[str]):
        self.view = view
        self.new_order = list(new_order)
        self.snapshot: Optional[List[str]] = None

    def execute(self, persist: Callable[[List[str]], object]) -> List[str]:
        self.snapshot = list(self.view)
        self.view[:] = self.new_order
        try:
            persist(list(self.new_order))
        except Exception:
            self.rollback()
            raise
        return self.view

    def rollback(self) -> None:
        if self.snapshot is not None:
            logger.warning("Reorder failed, restoring the previous order")
            self.view[:] = self.snapshot
            self.snapshot = None


collection_ordering = CollectionOrderingService()
