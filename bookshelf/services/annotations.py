import logging
import random
from typing import List, Optional

from sqlalchemy.orm import Session

from bookshelf.core.auth import RequestContext
from bookshelf.core.database import transaction
from bookshelf.core.events import LibraryEvent, publish_mutation
from bookshelf.core.exceptions import BookNotFound, NoteNotFound, VocabularyNotFound
from bookshelf.crud.book import crud_book
from bookshelf.crud.note import crud_note
from bookshelf.crud.vocabulary import crud_vocabulary
from bookshelf.models.note import Note
from bookshelf.models.vocabulary import Vocabulary
from bookshelf.schemas.note import NoteCreate, NoteResponse, NoteUpdate, QuoteResponse
from bookshelf.schemas.vocabulary import (
    VocabularyCreate,
    VocabularyUpdate,
    VocabularyWithBook,
)

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"


def _annotation_keys(book_id: str):
    return [("books",), ("book", book_id)]


class AnnotationService:
    """Notes, quotes and vocabulary attached to a user's books."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def _require_book(self, db: Session, ctx: RequestContext, book_id: str) -> None:
        if crud_book.get(db, user_id=ctx.user_id, id=book_id) is None:
            raise BookNotFound(book_id)

    def _changed(self, ctx: RequestContext, book_id: str, kind: str) -> None:
        publish_mutation(
            LibraryEvent.ANNOTATION_CHANGED,
            ctx.user_id,
            _annotation_keys(book_id),
            book_id=book_id,
            kind=kind,
        )

    # Notes

    def list_notes(self, db: Session, ctx: RequestContext, book_id: str) -> List[Note]:
        self._require_book(db, ctx, book_id)
        return crud_note.get_by_book(db, user_id=ctx.user_id, book_id=book_id)

    def add_note(
        self, db: Session, ctx: RequestContext, book_id: str, obj_in: NoteCreate
    ) -> Note:
        with transaction(db):
            self._require_book(db, ctx, book_id)
            note = crud_note.create(db, user_id=ctx.user_id, obj_in=obj_in, book_id=book_id)
        self._changed(ctx, book_id, "note")
        return note

    def edit_note(
        self, db: Session, ctx: RequestContext, note_id: str, obj_in: NoteUpdate
    ) -> Note:
        with transaction(db):
            note = crud_note.get(db, user_id=ctx.user_id, id=note_id)
            if note is None:
                raise NoteNotFound(note_id)
            note = crud_note.update(db, db_obj=note, obj_in=obj_in)
            book_id = note.book_id
        self._changed(ctx, book_id, "note")
        return note

    def delete_note(self, db: Session, ctx: RequestContext, note_id: str) -> None:
        with transaction(db):
            note = crud_note.get(db, user_id=ctx.user_id, id=note_id)
            if note is None:
                raise NoteNotFound(note_id)
            book_id = note.book_id
            crud_note.remove(db, db_obj=note)
        self._changed(ctx, book_id, "note")

    def random_quote(
        self, db: Session, ctx: RequestContext
    ) -> Optional[QuoteResponse]:
        """Pick one of the user's quotes uniformly, None when there are none"""
        quotes = crud_note.get_quotes(db, user_id=ctx.user_id)
        if not quotes:
            return None
        quote = self.rng.choice(quotes)
        book = quote.book
        return QuoteResponse(
            **NoteResponse.model_validate(quote).model_dump(),
            book_title=book.title if book else UNKNOWN,
            book_author=book.author if book else UNKNOWN,
        )

    # Vocabulary

    def list_words(
        self, db: Session, ctx: RequestContext, book_id: str
    ) -> List[Vocabulary]:
        self._require_book(db, ctx, book_id)
        return crud_vocabulary.get_by_book(db, user_id=ctx.user_id, book_id=book_id)

    def list_all_words(
        self, db: Session, ctx: RequestContext
    ) -> List[VocabularyWithBook]:
        words = crud_vocabulary.get_all_with_book(db, user_id=ctx.user_id)
        return [
            VocabularyWithBook.model_validate(word).model_copy(
                update={
                    "book_title": (word.book.title if word.book else None) or UNKNOWN,
                    "book_author": (word.book.author if word.book else None) or UNKNOWN,
                }
            )
            for word in words
        ]

    def add_word(
        self, db: Session, ctx: RequestContext, book_id: str, obj_in: VocabularyCreate
    ) -> Vocabulary:
        with transaction(db):
            self._require_book(db, ctx, book_id)
            word = crud_vocabulary.create(
                db, user_id=ctx.user_id, obj_in=obj_in, book_id=book_id
            )
        self._changed(ctx, book_id, "vocabulary")
        return word

    def edit_word(
        self,
        db: Session,
        ctx: RequestContext,
        vocabulary_id: str,
        obj_in: VocabularyUpdate,
    ) -> Vocabulary:
        with transaction(db):
            word = crud_vocabulary.get(db, user_id=ctx.user_id, id=vocabulary_id)
            if word is None:
                raise VocabularyNotFound(vocabulary_id)
            word = crud_vocabulary.update(db, db_obj=word, obj_in=obj_in)
            book_id = word.book_id
        self._changed(ctx, book_id, "vocabulary")
        return word

    def delete_word(self, db: Session, ctx: RequestContext, vocabulary_id: str) -> None:
        with transaction(db):
            word = crud_vocabulary.get(db, user_id=ctx.user_id, id=vocabulary_id)
            if word is None:
                raise VocabularyNotFound(vocabulary_id)
            book_id = word.book_id
            crud_vocabulary.remove(db, db_obj=word)
        self._changed(ctx, book_id, "vocabulary")


annotation_service = AnnotationService()
