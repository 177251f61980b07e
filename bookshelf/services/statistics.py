"""
Reading statistics.

Everything is derived from scratch from the user's books, their reading
state and the session ledger on each call; nothing here writes.
"""

import calendar
import logging
from collections import Counter
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from bookshelf.core.auth import RequestContext
from bookshelf.core.settings import settings
from bookshelf.crud.book import crud_book
from bookshelf.models.book import Book
from bookshelf.models.reading_session import ReadingSession
from bookshelf.models.user_book import ReadingStatus
from bookshelf.schemas.stats import MonthlyReads, ReadingStats, TopAuthor
from bookshelf.utils.date_utils import as_utc, in_range, last_months, month_end, month_start, now

logger = logging.getLogger(__name__)


def status_of(book: Book) -> ReadingStatus:
    if book.user_book is None:
        return ReadingStatus.WANT_TO_READ
    return ReadingStatus(book.user_book.status)


def primary_rating(book: Book) -> Optional[int]:
    """
    The rating a book counts with in the average.

    The legacy per-book rating wins when set; otherwise the most recent
    session carrying a rating.
    """
    if book.user_book is not None and book.user_book.rating is not None:
        return book.user_book.rating
    for session in sorted(book.reading_sessions, key=lambda s: s.read_number, reverse=True):
        if session.rating is not None:
            return session.rating
    return None


def monthly_timeline(
    sessions: Iterable[ReadingSession], reference: datetime, months: int = 12
) -> List[MonthlyReads]:
    """Finished sessions per calendar month, oldest month first. Re-reads count."""
    finished = [as_utc(s.finished_at) for s in sessions if s.finished_at is not None]
    timeline = []
    for year, month in last_months(reference, months):
        start, end = month_start(year, month), month_end(year, month)
        timeline.append(
            MonthlyReads(
                month=f"{year:04d}-{month:02d}",
                label=calendar.month_abbr[month],
                count=sum(1 for value in finished if in_range(value, start, end)),
            )
        )
    return timeline


def author_counts(books: Iterable[Book]) -> Dict[str, int]:
    """Books per trimmed author name, in first-seen order"""
    counts: Dict[str, int] = {}
    for book in books:
        author = (book.author or "").strip()
        if author:
            counts[author] = counts.get(author, 0) + 1
    return counts


def top_author(counts: Dict[str, int]) -> Optional[TopAuthor]:
    best = None
    # Strictly greater keeps the first-seen author on ties
    for name, count in counts.items():
        if best is None or count > best.count:
            best = TopAuthor(name=name, count=count)
    return best


def compute_stats(
    books: List[Book],
    reference: datetime,
    *,
    timeline_months: int = 12,
    cover_sample: int = 20,
) -> ReadingStats:
    """
    Aggregate a user's books into the statistics page figures.

    `books` is every book of the user in library order. Wishlist books only
    feed `wishlist_count`.
    """
    reference = as_utc(reference)
    library = [b for b in books if status_of(b) != ReadingStatus.WISHLIST]
    by_status = Counter(status_of(b) for b in books)
    completed = [b for b in library if status_of(b) == ReadingStatus.COMPLETED]

    # Book level, so a re-read book counts its pages once
    total_pages = sum(b.page_count or 0 for b in completed)

    ratings = [r for r in (primary_rating(b) for b in completed) if r is not None]
    average = round(sum(ratings) / len(ratings), 2) if ratings else None

    # Session counts follow the whole ledger, wishlist included
    sessions = [s for b in books for s in b.reading_sessions]
    finished = [s for s in sessions if s.finished_at is not None]

    genres: Dict[str, int] = {}
    for book in library:
        if book.genre:
            genres[book.genre] = genres.get(book.genre, 0) + 1

    authors = author_counts(library)

    return ReadingStats(
        total_books=len(library),
        wishlist_count=by_status[ReadingStatus.WISHLIST],
        books_completed=by_status[ReadingStatus.COMPLETED],
        books_reading=by_status[ReadingStatus.READING],
        books_want_to_read=by_status[ReadingStatus.WANT_TO_READ],
        total_pages_read=total_pages,
        average_rating=average,
        total_reads=len(finished),
        this_year_completed=sum(
            1 for s in finished if as_utc(s.finished_at).year == reference.year
        ),
        unique_authors=len(authors),
        top_author=top_author(authors),
        genres=genres,
        authors=authors,
        monthly_reads=monthly_timeline(finished, reference, timeline_months),
        book_covers=[b.cover_url for b in library if b.cover_url][:cover_sample],
    )


class StatisticsAggregator:
    def __init__(self, clock: Callable[[], datetime] = now):
        self.clock = clock

    def get_stats(
        self, db: Session, ctx: RequestContext, *, at: Optional[datetime] = None
    ) -> ReadingStats:
        books = crud_book.get_all_for_stats(db, user_id=ctx.user_id)
        logger.debug(f"Computing statistics over {len(books)} books for {ctx.user_id}")
        return compute_stats(
            books,
            at or self.clock(),
            timeline_months=settings.STATS_TIMELINE_MONTHS,
            cover_sample=settings.STATS_COVER_SAMPLE,
        )


statistics_aggregator = StatisticsAggregator()
