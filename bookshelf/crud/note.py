from typing import List

from sqlalchemy.orm import Session, joinedload

from bookshelf.crud.base import CRUDBase
from bookshelf.models.note import Note
from bookshelf.schemas.note import NoteCreate, NoteUpdate


class CRUDNote(CRUDBase[Note, NoteCreate, NoteUpdate]):
    def get_by_book(self, db: Session, *, user_id: str, book_id: str) -> List[Note]:
        """Notes of one book, newest first"""
        return (
            db.query(Note)
            .filter(Note.book_id == book_id, Note.user_id == user_id)
            .order_by(Note.created_at.desc())
            .all()
        )

    def get_quotes(self, db: Session, *, user_id: str) -> List[Note]:
        return (
            db.query(Note)
            .options(joinedload(Note.book))
            .filter(Note.user_id == user_id, Note.is_quote == True)
            .all()
        )


crud_note = CRUDNote(Note)
