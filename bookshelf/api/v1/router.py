from fastapi import APIRouter

from bookshelf.api.v1.endpoints import (
    books,
    collections,
    notes,
    sessions,
    stats,
    vocabulary,
)

api_router = APIRouter()

api_router.include_router(books.router, prefix="/books", tags=["books"])
api_router.include_router(sessions.router, prefix="/sessions", tags=["reading-sessions"])
api_router.include_router(notes.router, tags=["notes"])
api_router.include_router(vocabulary.router, tags=["vocabulary"])
api_router.include_router(
    collections.router, prefix="/collections", tags=["collections"]
)
api_router.include_router(stats.router, prefix="/stats", tags=["stats"])
