from abc import ABC, abstractmethod

from pydantic import BaseModel, ConfigDict, Field


class EventFilter(BaseModel, ABC):
    """
    Base class for event selection criteria.

    Filters are hashable and passed unchanged to the event source.
    Subclasses must implement ``partition_key``, which sources that store
    events in partitions use to locate them.
    """

    model_config = ConfigDict(frozen=True)

    @property
    @abstractmethod
    def partition_key(self) -> str: ...


class MoveEventModule(EventFilter):
    """Selects events emitted by module ``module`` of package ``package``."""

    package: str = Field(min_length=1)
    module: str = Field(min_length=1)

    @property
    def partition_key(self) -> str:
        return f"{self.package}::{self.module}"
