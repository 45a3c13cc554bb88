"""
Event data models.

These mirror the wire format of a cursor-paginated "list events" API:
camelCase aliases on the wire, snake_case attributes in Python.
"""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class EventId(BaseModel):
    """
    Position of one event in the global event ordering.

    Used as the exclusive cursor for event queries: a query with
    cursor ``c`` returns events strictly after ``c``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    tx_digest: str = Field(alias="txDigest", min_length=1)
    event_seq: int = Field(alias="eventSeq", ge=0)

    def as_tuple(self) -> tuple[str, int]:
        """Returns the ordering key ``(tx_digest, event_seq)``."""
        return (self.tx_digest, self.event_seq)


class Event(BaseModel):
    """A single emitted event. The payload is opaque to the paginator."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: EventId
    package_id: str = Field(alias="packageId")
    transaction_module: str = Field(alias="transactionModule")
    sender: str
    event_type: str = Field(alias="type")
    parsed_json: dict[str, Any] = Field(default_factory=dict, alias="parsedJson")
    bcs: str | None = None
    timestamp_ms: int | None = Field(default=None, alias="timestampMs")

    @property
    def tx_digest(self) -> str:
        return self.id.tx_digest


class EventPage(BaseModel):
    """One raw response from an event source."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    data: list[Event] = Field(default_factory=list)
    next_cursor: EventId | None = Field(default=None, alias="nextCursor")
    has_next_page: bool = Field(default=False, alias="hasNextPage")


@dataclass(frozen=True)
class ChainInfo:
    """Identity and head of the chain an event source is connected to."""

    chain_identifier: str
    latest_checkpoint: int
