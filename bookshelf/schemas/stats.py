from typing import Dict, List, Optional

from pydantic import BaseModel


class MonthlyReads(BaseModel):
    month: str  # YYYY-MM
    label: str  # short month name
    count: int


class TopAuthor(BaseModel):
    name: str
    count: int


class ReadingStats(BaseModel):
    total_books: int
    wishlist_count: int
    books_completed: int
    books_reading: int
    books_want_to_read: int
    total_pages_read: int
    average_rating: Optional[float] = None
    total_reads: int
    this_year_completed: int
    unique_authors: int
    top_author: Optional[TopAuthor] = None
    genres: Dict[str, int] = {}
    authors: Dict[str, int] = {}
    monthly_reads: List[MonthlyReads] = []
    book_covers: List[str] = []
