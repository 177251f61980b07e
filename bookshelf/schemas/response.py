from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel

# Generic type for data payload
T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response schema with message support"""

    success: bool = True
    message: str
    data: Optional[T] = None
    errors: Optional[List[str]] = None
    meta: Optional[Dict[str, Any]] = None


class SuccessResponse(APIResponse[T]):
    success: bool = True
    message: str = "Operation completed successfully"


class CreateResponse(APIResponse[T]):
    success: bool = True
    message: str = "Created successfully"


class UpdateResponse(APIResponse[T]):
    success: bool = True
    message: str = "Updated successfully"


class DeleteResponse(APIResponse[None]):
    success: bool = True
    message: str = "Deleted successfully"
    data: None = None


class ListResponse(APIResponse[List[T]]):
    success: bool = True
    message: str = "Data retrieved successfully"
    data: Optional[List[T]] = None


class Messages:
    # Book messages
    BOOK_CREATED = "Book added to your library"
    BOOK_UPDATED = "Book updated successfully"
    BOOK_DELETED = "Book deleted successfully"
    BOOK_RETRIEVED = "Book retrieved successfully"
    BOOKS_RETRIEVED = "Books retrieved successfully"
    WISHLIST_RETRIEVED = "Wishlist retrieved successfully"

    # Reading state messages
    STATUS_UPDATED = "Status updated"
    PROGRESS_UPDATED = "Progress updated"
    NEW_READ_STARTED = "New read started"

    # Reading session messages
    SESSIONS_RETRIEVED = "Reading sessions retrieved successfully"
    SESSION_UPDATED = "Session updated"
    SESSION_DELETED = "Reading session deleted"

    # Note messages
    NOTE_CREATED = "Note added"
    NOTE_UPDATED = "Note updated"
    NOTE_DELETED = "Note deleted"
    NOTES_RETRIEVED = "Notes retrieved successfully"
    QUOTE_RETRIEVED = "Quote retrieved successfully"

    # Vocabulary messages
    VOCABULARY_CREATED = "Word added"
    VOCABULARY_UPDATED = "Word updated"
    VOCABULARY_DELETED = "Word deleted"
    VOCABULARY_RETRIEVED = "Vocabulary retrieved successfully"

    # Collection messages
    COLLECTION_CREATED = "Collection created successfully"
    COLLECTION_UPDATED = "Collection updated successfully"
    COLLECTION_DELETED = "Collection deleted successfully"
    COLLECTION_RETRIEVED = "Collection retrieved successfully"
    COLLECTIONS_RETRIEVED = "Collections retrieved successfully"
    COLLECTION_BOOK_ADDED = "Book added to collection"
    COLLECTION_BOOK_REMOVED = "Book removed from collection"
    COLLECTION_REORDERED = "Collection order saved"

    # Statistics messages
    STATS_RETRIEVED = "Statistics retrieved successfully"
