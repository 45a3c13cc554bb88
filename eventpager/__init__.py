from .client import EventClient
from .config import MAX_EVENT_SEQ, SourceOptions
from .dynamo_source import DynamoEventSource
from .exceptions import (
    EventPagerError,
    InvalidQueryError,
    MalformedResponseError,
    SourceError,
    SourceNotFoundError,
    SourceThrottledError,
    SourceTimeoutError,
)
from .filters import EventFilter, MoveEventModule
from .mock_source import MockEventSource
from .models import ChainInfo, Event, EventId, EventPage
from .pagination import PageResult
from .paginator import EventPaginator
from .source import ChainInfoSource, EventSource

__all__ = [
    "EventPaginator",
    "EventClient",
    "PageResult",
    # Models
    "Event",
    "EventId",
    "EventPage",
    "ChainInfo",
    # Filters
    "EventFilter",
    "MoveEventModule",
    # Sources
    "EventSource",
    "ChainInfoSource",
    "DynamoEventSource",
    "MockEventSource",
    # Config
    "SourceOptions",
    "MAX_EVENT_SEQ",
    # Exceptions
    "EventPagerError",
    "SourceError",
    "SourceNotFoundError",
    "SourceThrottledError",
    "SourceTimeoutError",
    "InvalidQueryError",
    "MalformedResponseError",
]
