import os
from dataclasses import dataclass

from botocore.config import Config

# Cursors are exclusive, so a cursor pinned at the largest possible event
# sequence skips its whole transaction. A transaction emits at most 1024 events.
MAX_EVENT_SEQ = 65535


@dataclass
class SourceOptions:
    """
    Connection and paging settings for the DynamoDB event source.

    The events table is keyed by a partition key derived from the event
    filter and a sort key encoding ``(tx_digest, event_seq)``.
    """

    table_name: str
    region: str = "us-east-1"
    endpoint_url: str | None = None
    page_limit: int = 50
    connect_timeout: float = 5.0
    read_timeout: float = 30.0
    max_attempts: int = 3
    pk_name: str = "pk"
    sk_name: str = "sk"

    def __post_init__(self) -> None:
        if not self.table_name:
            raise ValueError("table_name must not be empty")
        if self.page_limit < 1:
            raise ValueError(f"page_limit must be positive, got {self.page_limit}")
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be positive, got {self.max_attempts}")

    def to_botocore_config(self) -> Config:
        """
        Build the botocore client configuration.

        Returns:
            Config carrying region, timeouts and the retry budget
        """
        return Config(
            region_name=self.region,
            connect_timeout=self.connect_timeout,
            read_timeout=self.read_timeout,
            retries={"max_attempts": self.max_attempts, "mode": "standard"},
        )

    @classmethod
    def from_env(cls, prefix: str = "EVENTPAGER_") -> "SourceOptions":
        """
        Read options from environment variables.

        Recognised variables (with the default prefix): EVENTPAGER_TABLE,
        EVENTPAGER_REGION, EVENTPAGER_ENDPOINT_URL, EVENTPAGER_PAGE_LIMIT.

        Raises:
            ValueError: If the table variable is missing or a value is invalid
        """
        table_name = os.getenv(f"{prefix}TABLE", "")
        if not table_name:
            raise ValueError(f"{prefix}TABLE is not set")

        return cls(
            table_name=table_name,
            region=os.getenv(f"{prefix}REGION", "us-east-1"),
            endpoint_url=os.getenv(f"{prefix}ENDPOINT_URL") or None,
            page_limit=int(os.getenv(f"{prefix}PAGE_LIMIT", "50")),
        )
