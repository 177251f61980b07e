from typing import List, Optional

from sqlalchemy.orm import Session, selectinload

from bookshelf.crud.base import CRUDBase
from bookshelf.models.book import Book
from bookshelf.models.collection import BookCollection, Collection
from bookshelf.schemas.collection import CollectionCreate, CollectionUpdate


class CRUDCollection(CRUDBase[Collection, CollectionCreate, CollectionUpdate]):
    def get_with_books(
        self, db: Session, *, user_id: str, id: str
    ) -> Optional[Collection]:
        """Get a collection with its membership rows and their books"""
        return (
            db.query(Collection)
            .options(
                selectinload(Collection.links)
                .selectinload(BookCollection.book)
                .selectinload(Book.user_book)
            )
            .filter(Collection.id == id, Collection.user_id == user_id)
            .first()
        )

    def get_by_user(self, db: Session, *, user_id: str) -> List[Collection]:
        """Get the user's collections with membership rows, newest first"""
        return (
            db.query(Collection)
            .options(selectinload(Collection.links).selectinload(BookCollection.book))
            .filter(Collection.user_id == user_id)
            .order_by(Collection.created_at.desc())
            .all()
        )


class CRUDBookCollection:
    def get_link(
        self, db: Session, *, collection_id: str, book_id: str
    ) -> Optional[BookCollection]:
        return (
            db.query(BookCollection)
            .filter(
                BookCollection.collection_id == collection_id,
                BookCollection.book_id == book_id,
            )
            .first()
        )

    def get_links(self, db: Session, *, collection_id: str) -> List[BookCollection]:
        """Membership rows in insertion order"""
        return (
            db.query(BookCollection)
            .filter(BookCollection.collection_id == collection_id)
            .order_by(BookCollection.created_at.asc(), BookCollection.id.asc())
            .all()
        )

    def add_book(
        self, db: Session, *, collection_id: str, book_id: str
    ) -> BookCollection:
        link = BookCollection(collection_id=collection_id, book_id=book_id, position=None)
        db.add(link)
        db.flush()
        return link

    def remove_book(self, db: Session, *, link: BookCollection) -> None:
        db.delete(link)
        db.flush()


crud_collection = CRUDCollection(Collection)
crud_book_collection = CRUDBookCollection()
