from typing import List

from sqlalchemy.orm import Session, joinedload

from bookshelf.crud.base import CRUDBase
from bookshelf.models.vocabulary import Vocabulary
from bookshelf.schemas.vocabulary import VocabularyCreate, VocabularyUpdate


class CRUDVocabulary(CRUDBase[Vocabulary, VocabularyCreate, VocabularyUpdate]):
    def get_by_book(
        self, db: Session, *, user_id: str, book_id: str
    ) -> List[Vocabulary]:
        """Vocabulary of one book, newest first"""
        return (
            db.query(Vocabulary)
            .filter(Vocabulary.book_id == book_id, Vocabulary.user_id == user_id)
            .order_by(Vocabulary.created_at.desc())
            .all()
        )

    def get_all_with_book(self, db: Session, *, user_id: str) -> List[Vocabulary]:
        """Every word the user saved, with the book it came from"""
        return (
            db.query(Vocabulary)
            .options(joinedload(Vocabulary.book))
            .filter(Vocabulary.user_id == user_id)
            .order_by(Vocabulary.created_at.desc())
            .all()
        )


crud_vocabulary = CRUDVocabulary(Vocabulary)
