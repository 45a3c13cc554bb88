from collections.abc import Hashable
from typing import Any

from ._logging import logger
from .config import SourceOptions
from .dynamo_source import DynamoEventSource
from .filters import MoveEventModule
from .models import ChainInfo, Event
from .pagination import PageResult
from .paginator import EventPaginator


class EventClient:
    """
    Entry point for reading events from a chain's event store.

    Wraps a source that provides both the event query and the describe
    capabilities, and pages its events in transaction granularity.
    """

    def __init__(self, source: Any) -> None:
        self.source = source
        self.paginator = EventPaginator(source)

    @classmethod
    def connect(cls, options: SourceOptions, client: Any | None = None) -> "EventClient":
        """
        Creates a client over a DynamoDB events table and checks the connection.

        Args:
            options: Table and connection settings
            client: Optional pre-built boto3 DynamoDB client

        Raises:
            SourceError: If the table or its chain metadata cannot be read
        """
        self_ = cls(DynamoEventSource(options, client=client))
        self_.describe()
        return self_

    def describe(self) -> ChainInfo:
        """Fetches and logs the chain identifier and the latest checkpoint."""
        info = ChainInfo(
            chain_identifier=self.source.get_chain_identifier(),
            latest_checkpoint=self.source.get_latest_checkpoint_sequence_number(),
        )
        logger.info(
            "Connected to chain %s, current checkpoint: %s",
            info.chain_identifier,
            info.latest_checkpoint,
            extra={
                "operation": "describe",
                "chain_identifier": info.chain_identifier,
                "latest_checkpoint": info.latest_checkpoint,
            },
        )
        return info

    def query_events_by_module(self, package: str, module: str, cursor: str) -> PageResult[Event]:
        """
        Queries events emitted by a module, in transaction granularity.

        Unlike the underlying event query, whose cursor is an event id, the
        cursor here is a transaction digest, so that all events of one
        transaction are collected together for downstream processing.

        Args:
            package: Package id
            module: Module name within the package
            cursor: Exclusive transaction digest. Any transaction from the
                checkpoint before the one to start at works.
        """
        return self.fetch_events_since(MoveEventModule(package=package, module=module), cursor)

    def fetch_events_since(self, event_filter: Hashable, cursor: str) -> PageResult[Event]:
        return self.paginator.fetch_events_since(event_filter, cursor)
