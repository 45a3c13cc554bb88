"""
Transaction-granular event pagination.

An event source pages at an arbitrary record granularity, so one
transaction's events may span several source pages. EventPaginator
re-assembles source pages so that callers receive whole transactions and a
transaction digest cursor to resume from.
"""

from collections.abc import Hashable, Iterator
from itertools import takewhile

from ._logging import logger, redact_key
from .config import MAX_EVENT_SEQ
from .exceptions import MalformedResponseError
from .models import Event, EventId
from .pagination import PageResult
from .source import EventSource


class EventPaginator:
    """
    Fetches events from an EventSource in transaction granularity.

    The paginator keeps no state between calls, so one instance can be
    shared by concurrent callers as long as the source allows it.
    """

    def __init__(self, source: EventSource, max_event_seq: int = MAX_EVENT_SEQ) -> None:
        if max_event_seq < 0:
            raise ValueError(f"max_event_seq must not be negative, got {max_event_seq}")
        self.source = source
        self.max_event_seq = max_event_seq

    def fetch_events_since(self, event_filter: Hashable, start_cursor: str) -> PageResult[Event]:
        """
        Returns the events after transaction ``start_cursor``.

        The start cursor is exclusive and can be any transaction preceding
        the first one wanted; none of its own events are returned.

        Args:
            event_filter: Passed unchanged to every source query
            start_cursor: Transaction digest to start after

        Returns:
            PageResult whose next_cursor is a transaction digest. With
            has_more=True, every transaction in items up to next_cursor is
            complete and resuming from next_cursor skips all of them.

        Raises:
            ValueError: If start_cursor is empty
            SourceError: Propagated from the source; no partial result is kept
        """
        if not start_cursor:
            raise ValueError("start_cursor must be a non-empty transaction digest")

        # Pin the cursor past the last possible event of the start transaction
        cursor = EventId(tx_digest=start_cursor, event_seq=self.max_event_seq)
        is_first_page = True
        all_events: list[Event] = []
        calls = 0

        while True:
            page = self.source.query_events(event_filter, cursor)
            calls += 1
            logger.debug(
                "Fetched source page",
                extra={
                    "operation": "fetch_events_since",
                    "cursor_tx": cursor.tx_digest,
                    "count": len(page.data),
                    "has_more": page.has_next_page,
                },
            )

            if not page.data:
                return self._done(event_filter, all_events, cursor.tx_digest, False, calls)

            new_cursor = page.data[-1].id

            if not page.has_next_page:
                # A transaction's events are all available at once on the last page
                all_events.extend(page.data)
                return self._done(event_filter, all_events, new_cursor.tx_digest, False, calls)

            # Within one transaction the tail must move strictly forward
            if (
                new_cursor.tx_digest == cursor.tx_digest
                and new_cursor.event_seq <= cursor.event_seq
            ):
                raise MalformedResponseError(
                    f"Event source returned no progress past cursor {cursor.as_tuple()}"
                )

            if is_first_page:
                # No reference transaction yet: take the whole page
                all_events.extend(page.data)
                cursor = new_cursor
                is_first_page = False
                continue

            if new_cursor.tx_digest != cursor.tx_digest:
                # A later transaction showed up, so the cursor transaction is complete
                done_tx = cursor.tx_digest
                all_events.extend(takewhile(lambda event: event.id.tx_digest == done_tx, page.data))
                return self._done(event_filter, all_events, done_tx, True, calls)

            # Whole page still belongs to the cursor transaction, more may follow
            all_events.extend(page.data)
            cursor = new_cursor

    def iter_pages(self, event_filter: Hashable, start_cursor: str) -> Iterator[PageResult[Event]]:
        """
        Lazily yields consecutive pages until the source is exhausted.

        Each page resumes from the previous page's next_cursor. The last
        page yielded has has_more=False; its next_cursor is where a later
        poll should start.
        """
        cursor = start_cursor
        while True:
            page = self.fetch_events_since(event_filter, cursor)
            yield page
            if not page.has_more or page.next_cursor is None:
                return
            cursor = page.next_cursor

    def _done(
        self,
        event_filter: Hashable,
        events: list[Event],
        next_cursor: str,
        has_more: bool,
        calls: int,
    ) -> PageResult[Event]:
        logger.info(
            "Fetched events",
            extra={
                "operation": "fetch_events_since",
                "filter_hash": redact_key(event_filter),
                "count": len(events),
                "next_cursor": next_cursor,
                "has_more": has_more,
                "source_calls": calls,
            },
        )
        return PageResult(items=events, next_cursor=next_cursor, has_more=has_more)

