"""
In-memory event source for tests.

Responses are preset per ``(filter, cursor)`` pair; every query received is
recorded so tests can assert on the exact cursor sequence a caller used.
"""

import threading
from collections import deque
from collections.abc import Hashable

from .models import EventId, EventPage


class MockEventSource:
    def __init__(self, chain_identifier: str = "", latest_checkpoint_sequence_number: int = 0):
        # The chain fields do not change during tests, so they need no lock
        self.chain_identifier = chain_identifier
        self.latest_checkpoint_sequence_number = latest_checkpoint_sequence_number
        self._lock = threading.Lock()
        self._responses: dict[tuple[Hashable, EventId], EventPage | Exception] = {}
        self._past_queries: deque[tuple[Hashable, EventId]] = deque()

    def add_event_response(self, event_filter: Hashable, cursor: EventId, page: EventPage) -> None:
        with self._lock:
            self._responses[(event_filter, cursor)] = page

    def add_error_response(
        self, event_filter: Hashable, cursor: EventId, error: Exception
    ) -> None:
        """Makes the query for ``(event_filter, cursor)`` raise ``error``."""
        with self._lock:
            self._responses[(event_filter, cursor)] = error

    def pop_front_past_query_params(self) -> tuple[Hashable, EventId] | None:
        with self._lock:
            return self._past_queries.popleft() if self._past_queries else None

    def query_events(self, event_filter: Hashable, cursor: EventId) -> EventPage:
        with self._lock:
            self._past_queries.append((event_filter, cursor))
            response = self._responses.get((event_filter, cursor))

        if response is None:
            raise LookupError(
                f"No preset events found for filter: {event_filter!r}, cursor: {cursor!r}"
            )
        if isinstance(response, Exception):
            raise response
        return response

    def get_chain_identifier(self) -> str:
        return self.chain_identifier

    def get_latest_checkpoint_sequence_number(self) -> int:
        return self.latest_checkpoint_sequence_number
