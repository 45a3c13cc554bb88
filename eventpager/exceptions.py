from collections.abc import Generator
from contextlib import contextmanager

from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    ConnectTimeoutError,
    ReadTimeoutError,
)


class EventPagerError(Exception):
    """Base exception for all eventpager errors."""

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class SourceError(EventPagerError):
    """Raised when the event source fails to answer a query."""


class SourceNotFoundError(SourceError):
    """Raised when the backing events table does not exist."""

    def __init__(self, table_name: str, original_error: Exception | None = None) -> None:
        super().__init__(f"Event table '{table_name}' not found", original_error)
        self.table_name = table_name


class SourceThrottledError(SourceError):
    """Raised when the event source throttles requests."""

    def __init__(
        self, message: str = "Request rate exceeded", original_error: Exception | None = None
    ) -> None:
        super().__init__(message, original_error)


class SourceTimeoutError(SourceError):
    """Raised when a request to the event source times out."""

    def __init__(
        self, message: str = "Request timed out", original_error: Exception | None = None
    ) -> None:
        super().__init__(message, original_error)


class InvalidQueryError(SourceError):
    """Raised when the event source rejects the query parameters."""


class MalformedResponseError(SourceError):
    """Raised when a source response cannot be decoded or breaks the ordering contract."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, original_error)
        self.field = field


@contextmanager
def handle_source_errors(table_name: str | None = None) -> Generator[None, None, None]:
    """
    Context manager that catches botocore errors
    and raises the appropriate SourceError subclass.

    Args:
        table_name: Optional table name for better error messages

    Usage:
        with handle_source_errors(table_name="events"):
            client.query(...)
    """
    try:
        yield
    except ClientError as e:
        error_code = e.response.get("Error", {}).get("Code", "Unknown")
        error_message = e.response.get("Error", {}).get("Message", str(e))

        if error_code == "ResourceNotFoundException":
            raise SourceNotFoundError(table_name=table_name or "unknown", original_error=e) from e

        if error_code in (
            "ProvisionedThroughputExceededException",
            "ThrottlingException",
            "RequestLimitExceeded",
        ):
            raise SourceThrottledError(message=error_message, original_error=e) from e

        if error_code in ("ValidationException", "SerializationException"):
            raise InvalidQueryError(message=error_message, original_error=e) from e

        if error_code in ("RequestTimeout", "RequestTimeoutException"):
            raise SourceTimeoutError(message=error_message, original_error=e) from e

        # Unknown error: wrap in generic SourceError
        raise SourceError(
            message=f"Event source error ({error_code}): {error_message}", original_error=e
        ) from e
    except (ConnectTimeoutError, ReadTimeoutError) as e:
        raise SourceTimeoutError(message=str(e), original_error=e) from e
    except BotoCoreError as e:
        raise SourceError(message=f"Event source transport error: {e}", original_error=e) from e
