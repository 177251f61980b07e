from .book import Book
from .collection import BookCollection, Collection
from .note import Note
from .reading_session import ReadingSession
from .user_book import ReadingStatus, UserBook
from .vocabulary import Vocabulary

__all__ = [
    "Book",
    "UserBook",
    "ReadingStatus",
    "ReadingSession",
    "Collection",
    "BookCollection",
    "Note",
    "Vocabulary",
]
