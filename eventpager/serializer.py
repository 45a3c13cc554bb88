from decimal import Decimal
from typing import Any, cast

from boto3.dynamodb.types import TypeDeserializer, TypeSerializer
from pydantic import ValidationError

from .config import MAX_EVENT_SEQ
from .exceptions import InvalidQueryError, MalformedResponseError
from .models import Event, EventId

SORT_KEY_SEPARATOR = "#"
_SEQ_WIDTH = len(str(MAX_EVENT_SEQ))


class EventSerializer:
    """
    Handles the conversion between Event models and DynamoDB Low-Level format.

    Architectural Note:
    -------------------
    Events are stored one item per event. The sort key is
    ``<tx_digest>#<event_seq>`` with the sequence zero-padded, so that
    lexicographic order on the sort key matches tuple order on
    ``(tx_digest, event_seq)``: ``#`` sorts below every digest character,
    which keeps a shorter digest ahead of any digest it prefixes.
    """

    def __init__(self, pk_name: str = "pk", sk_name: str = "sk") -> None:
        self.pk_name = pk_name
        self.sk_name = sk_name
        self._serializer = TypeSerializer()
        self._deserializer = TypeDeserializer()

    def encode_sort_key(self, event_id: EventId) -> str:
        """
        Encodes an event id as a sortable string.
        E.g.: EventId("Abc", 3) -> "Abc#00003"

        Raises:
            InvalidQueryError: If the id cannot be represented as a sort key
        """
        if event_id.event_seq > MAX_EVENT_SEQ:
            raise InvalidQueryError(
                f"event_seq {event_id.event_seq} exceeds the maximum of {MAX_EVENT_SEQ}"
            )
        if SORT_KEY_SEPARATOR in event_id.tx_digest:
            raise InvalidQueryError(f"tx_digest must not contain '{SORT_KEY_SEPARATOR}'")
        return f"{event_id.tx_digest}{SORT_KEY_SEPARATOR}{event_id.event_seq:0{_SEQ_WIDTH}d}"

    def decode_sort_key(self, sort_key: str) -> EventId:
        """Inverse of encode_sort_key."""
        tx_digest, sep, seq = sort_key.rpartition(SORT_KEY_SEPARATOR)
        if not sep or not tx_digest or not seq.isdigit():
            raise MalformedResponseError(f"Invalid event sort key {sort_key!r}", field=self.sk_name)
        return EventId(tx_digest=tx_digest, event_seq=int(seq))

    def to_dynamo_value(self, value: Any) -> dict[str, Any]:
        """
        Serializes a single scalar value to DynamoDB format.
        Useful for building ExpressionAttributeValues in queries.
        """
        return cast(dict[str, Any], self._serializer.serialize(self._prepare_for_dynamo(value)))

    def to_item(self, event: Event, partition_key: str) -> dict[str, dict[str, Any]]:
        """Converts an event to a DynamoDB item stored under ``partition_key``."""
        data = {
            self.pk_name: partition_key,
            self.sk_name: self.encode_sort_key(event.id),
            "tx_digest": event.id.tx_digest,
            "event_seq": event.id.event_seq,
            "package_id": event.package_id,
            "transaction_module": event.transaction_module,
            "sender": event.sender,
            "type": event.event_type,
            "parsed_json": event.parsed_json,
        }
        if event.bcs is not None:
            data["bcs"] = event.bcs
        if event.timestamp_ms is not None:
            data["timestamp_ms"] = event.timestamp_ms

        return {k: self.to_dynamo_value(v) for k, v in data.items()}

    def from_item(self, item: dict[str, Any]) -> Event:
        """
        Converts a DynamoDB item back to an Event.

        Raises:
            MalformedResponseError: If the item is missing fields or has wrong types
        """
        data = self.from_dynamo(item)
        if self.sk_name not in data:
            raise MalformedResponseError("Event item has no sort key", field=self.sk_name)
        event_id = self.decode_sort_key(str(data[self.sk_name]))

        try:
            return Event(
                id=event_id,
                package_id=data.get("package_id"),
                transaction_module=data.get("transaction_module"),
                sender=data.get("sender"),
                event_type=data.get("type"),
                parsed_json=data.get("parsed_json") or {},
                bcs=data.get("bcs"),
                timestamp_ms=data.get("timestamp_ms"),
            )
        except ValidationError as e:
            raise MalformedResponseError(
                f"Failed to decode event {event_id.as_tuple()}: {e}", original_error=e
            ) from e

    def from_dynamo(self, item: dict[str, Any]) -> dict[str, Any]:
        """Converts DynamoDB JSON format back to standard Python dict."""
        python_data = {k: self._deserializer.deserialize(v) for k, v in item.items()}
        result = self._restore_to_python(python_data)
        assert isinstance(result, dict)
        return result

    def _prepare_for_dynamo(self, value: Any) -> Any:
        """
        Recursively prepares Python values for Boto3 TypeSerializer.

        Converts float -> Decimal (boto3 requirement).
        """
        if isinstance(value, float):
            # Convert to string first to avoid float precision artifacts during Decimal creation
            return Decimal(str(value))
        if isinstance(value, list):
            return [self._prepare_for_dynamo(v) for v in value]
        if isinstance(value, dict):
            return {k: self._prepare_for_dynamo(v) for k, v in value.items()}
        return value

    def _restore_to_python(self, value: Any) -> Any:
        """
        Recursively restores DynamoDB values to Python-friendly types.

        Converts Decimal -> int (if whole number) or float.
        """
        if isinstance(value, Decimal):
            if value % 1 == 0:
                return int(value)
            return float(value)
        if isinstance(value, list):
            return [self._restore_to_python(v) for v in value]
        if isinstance(value, dict):
            return {k: self._restore_to_python(v) for k, v in value.items()}
        return value
