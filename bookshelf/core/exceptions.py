from typing import Any, Dict, Optional

from fastapi import HTTPException, status


class BookshelfError(HTTPException):
    """
    Base class for every failure the core reports to its caller.

    Extends HTTPException so the API layer can return it unchanged, while
    in-process callers can catch it by kind.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    code = "error"

    def __init__(
        self,
        detail: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(status_code=self.status_code, detail=detail, headers=headers)
        self.params = params

    def to_response(self) -> Dict[str, Any]:
        response = {"success": False, "message": self.detail, "code": self.code}
        if self.params:
            response["params"] = self.params
        return response


class NotFound(BookshelfError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class Unauthorized(BookshelfError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthorized"

    def __init__(self, detail: str = "Could not validate credentials"):
        super().__init__(detail, headers={"WWW-Authenticate": "Bearer"})


class ValidationFailure(BookshelfError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "validation_failed"


class TransientFailure(BookshelfError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "transient_failure"


class BookNotFound(NotFound):
    def __init__(self, book_id: str):
        super().__init__(f"Book with id {book_id} not found", params={"book_id": book_id})


class UserBookNotFound(NotFound):
    def __init__(self, book_id: str):
        super().__init__(
            f"No library entry for book {book_id}", params={"book_id": book_id}
        )


class SessionNotFound(NotFound):
    def __init__(self, session_id: str):
        super().__init__(
            f"Reading session with id {session_id} not found",
            params={"session_id": session_id},
        )


class CollectionNotFound(NotFound):
    def __init__(self, collection_id: str):
        super().__init__(
            f"Collection with id {collection_id} not found",
            params={"collection_id": collection_id},
        )


class NoteNotFound(NotFound):
    def __init__(self, note_id: str):
        super().__init__(f"Note with id {note_id} not found", params={"note_id": note_id})


class VocabularyNotFound(NotFound):
    def __init__(self, vocabulary_id: str):
        super().__init__(
            f"Vocabulary entry with id {vocabulary_id} not found",
            params={"vocabulary_id": vocabulary_id},
        )


class InvalidTransition(ValidationFailure):
    def __init__(self, action: str, current_status: str):
        super().__init__(
            f"Cannot {action} while status is '{current_status}'",
            params={"action": action, "status": current_status},
        )


class ReadNumberConflict(TransientFailure):
    """Another request claimed the same read number first; retrying is safe."""

    status_code = status.HTTP_409_CONFLICT
    code = "read_number_conflict"

    def __init__(self, user_book_id: str, read_number: int):
        super().__init__(
            f"Read #{read_number} was already started for this book",
            params={"user_book_id": user_book_id, "read_number": read_number},
        )
