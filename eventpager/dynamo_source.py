from typing import Any

import boto3

from ._logging import logger, redact_key
from .config import SourceOptions
from .exceptions import SourceError, handle_source_errors
from .filters import EventFilter
from .models import EventId, EventPage
from .serializer import EventSerializer

CHAIN_META_PK = "__chain__"
CHAIN_META_SK = "__meta__"


class DynamoEventSource:
    """
    Event source backed by a DynamoDB events table.

    A thin translation layer: one ``query_events`` call is one DynamoDB
    Query. Events of one filter live in one partition, ordered by the
    encoded ``(tx_digest, event_seq)`` sort key.
    """

    def __init__(self, options: SourceOptions, client: Any | None = None) -> None:
        self.options = options
        self.serializer = EventSerializer(pk_name=options.pk_name, sk_name=options.sk_name)
        self.client = client if client is not None else self._build_client(options)

    @staticmethod
    def _build_client(options: SourceOptions) -> Any:
        return boto3.client(
            "dynamodb",
            endpoint_url=options.endpoint_url,
            config=options.to_botocore_config(),
        )

    def query_events(self, event_filter: EventFilter, cursor: EventId) -> EventPage:
        """
        Fetches one page of events strictly after ``cursor``.

        Args:
            event_filter: Filter providing the partition to read
            cursor: Exclusive start position

        Returns:
            EventPage; has_next_page mirrors the presence of LastEvaluatedKey

        Raises:
            TypeError: If the filter cannot be mapped to a partition
            SourceError: On any DynamoDB or decoding failure
        """
        if not isinstance(event_filter, EventFilter):
            raise TypeError(
                f"DynamoEventSource requires an EventFilter, got {type(event_filter).__name__}"
            )

        kwargs = {
            "TableName": self.options.table_name,
            "KeyConditionExpression": "#pk = :pk AND #sk > :sk",
            "ExpressionAttributeNames": {"#pk": self.options.pk_name, "#sk": self.options.sk_name},
            "ExpressionAttributeValues": {
                ":pk": self.serializer.to_dynamo_value(event_filter.partition_key),
                ":sk": self.serializer.to_dynamo_value(self.serializer.encode_sort_key(cursor)),
            },
            "ScanIndexForward": True,
            "Limit": self.options.page_limit,
        }

        logger.debug(
            "Querying events",
            extra={
                "table": self.options.table_name,
                "operation": "query_events",
                "filter_hash": redact_key(event_filter),
                "cursor_tx": cursor.tx_digest,
                "limit": self.options.page_limit,
            },
        )

        with handle_source_errors(table_name=self.options.table_name):
            response = self.client.query(**kwargs)

        events = [self.serializer.from_item(item) for item in response.get("Items", [])]

        return EventPage(
            data=events,
            next_cursor=events[-1].id if events else None,
            has_next_page="LastEvaluatedKey" in response,
        )

    def get_chain_identifier(self) -> str:
        return str(self._get_chain_meta()["chain_identifier"])

    def get_latest_checkpoint_sequence_number(self) -> int:
        return int(self._get_chain_meta()["latest_checkpoint"])

    def _get_chain_meta(self) -> dict[str, Any]:
        key = {
            self.options.pk_name: self.serializer.to_dynamo_value(CHAIN_META_PK),
            self.options.sk_name: self.serializer.to_dynamo_value(CHAIN_META_SK),
        }
        with handle_source_errors(table_name=self.options.table_name):
            response = self.client.get_item(TableName=self.options.table_name, Key=key)

        if "Item" not in response:
            raise SourceError(f"Chain metadata missing from table '{self.options.table_name}'")

        meta = self.serializer.from_dynamo(response["Item"])
        for attr in ("chain_identifier", "latest_checkpoint"):
            if attr not in meta:
                raise SourceError(f"Chain metadata has no '{attr}' attribute")
        return meta
