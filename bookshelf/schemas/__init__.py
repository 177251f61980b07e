from bookshelf.schemas.book import *
from bookshelf.schemas.collection import *
from bookshelf.schemas.note import *
from bookshelf.schemas.reading_session import *
from bookshelf.schemas.response import *
from bookshelf.schemas.stats import *
from bookshelf.schemas.vocabulary import *
from bookshelf.schemas.book import _rebuild_book_schemas


def rebuild_schemas():
    """Resolve forward references between book and detail schemas."""
    _rebuild_book_schemas()


rebuild_schemas()
