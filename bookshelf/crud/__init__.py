from bookshelf.crud.book import crud_book
from bookshelf.crud.collection import crud_book_collection, crud_collection
from bookshelf.crud.note import crud_note
from bookshelf.crud.reading_session import crud_reading_session
from bookshelf.crud.user_book import crud_user_book
from bookshelf.crud.vocabulary import crud_vocabulary
