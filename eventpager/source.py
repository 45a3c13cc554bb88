from collections.abc import Hashable
from typing import Protocol, runtime_checkable

from .models import EventId, EventPage


@runtime_checkable
class EventSource(Protocol):
    """
    Capability for querying a cursor-paginated event stream.

    Implementations must return events ordered by ``(tx_digest, event_seq)``
    ascending and strictly after ``cursor``. ``has_next_page=False`` means no
    matching event exists past the last returned one at query time.
    Failures are raised as ``SourceError``.
    """

    def query_events(self, event_filter: Hashable, cursor: EventId) -> EventPage: ...


@runtime_checkable
class ChainInfoSource(Protocol):
    """Describe/health-check capability used when a client connects."""

    def get_chain_identifier(self) -> str: ...

    def get_latest_checkpoint_sequence_number(self) -> int: ...
