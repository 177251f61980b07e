import logging
from typing import Callable, Dict, Iterable, List, Tuple

logger = logging.getLogger(__name__)

QueryKey = Tuple[str, ...]


class EventSystem:
    """
    A simple event system to support publish-subscribe pattern.

    Mutations publish after a successful commit; read-side consumers
    (list views, detail views, statistics) subscribe to learn which of
    their cached inputs went stale.
    """

    _subscribers: Dict[str, List[Callable]] = {}

    @classmethod
    def subscribe(cls, event_name: str, callback: Callable) -> None:
        cls._subscribers.setdefault(event_name, []).append(callback)
        logger.debug(f"Subscribed to event '{event_name}'")

    @classmethod
    def unsubscribe(cls, event_name: str, callback: Callable) -> bool:
        if event_name not in cls._subscribers:
            return False

        try:
            cls._subscribers[event_name].remove(callback)
            logger.debug(f"Unsubscribed from event '{event_name}'")
            return True
        except ValueError:
            return False

    @classmethod
    def clear(cls) -> None:
        cls._subscribers = {}

    @classmethod
    def publish(cls, event_name: str, **kwargs) -> int:
        """
        Publish an event to all subscribers.

        A failing subscriber is logged and skipped; it never fails the
        mutation that published the event.

        Returns:
            int: Number of subscribers notified
        """
        if event_name not in cls._subscribers:
            return 0

        count = 0
        for callback in list(cls._subscribers[event_name]):
            try:
                callback(**kwargs)
                count += 1
            except Exception as e:
                logger.error(f"Error in event subscriber for '{event_name}': {str(e)}")

        logger.debug(f"Published event '{event_name}' to {count} subscribers")
        return count


class ReadingEvent:
    STATUS_CHANGED = "reading.status_changed"
    PROGRESSED = "reading.progressed"
    SESSION_STARTED = "reading.session_started"
    SESSION_UPDATED = "reading.session_updated"
    SESSION_DELETED = "reading.session_deleted"


class LibraryEvent:
    BOOK_ADDED = "library.book_added"
    BOOK_UPDATED = "library.book_updated"
    BOOK_DELETED = "library.book_deleted"
    ANNOTATION_CHANGED = "library.annotation_changed"


class CollectionEvent:
    CHANGED = "collection.changed"
    REORDERED = "collection.reordered"


# Fired alongside every domain event with the query keys to re-fetch
QUERIES_INVALIDATED = "queries.invalidated"


def book_query_keys(book_id: str) -> List[QueryKey]:
    """Everything derived from one book's reading state."""
    return [("books",), ("book", book_id), ("reading-sessions", book_id), ("stats",)]


def collection_query_keys(collection_id: str) -> List[QueryKey]:
    return [("collections",), ("collection", collection_id), ("books",)]


def publish_mutation(
    event_name: str, user_id: str, keys: Iterable[QueryKey], **kwargs
) -> int:
    """
    Publish a domain event followed by the invalidation of its query keys.

    Returns:
        int: Number of subscribers notified across both events
    """
    keys = list(keys)
    count = EventSystem.publish(event_name, user_id=user_id, **kwargs)
    count += EventSystem.publish(QUERIES_INVALIDATED, user_id=user_id, keys=keys)
    return count
