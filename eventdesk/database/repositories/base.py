"""Base repository class defining the event store contract."""

from abc import ABC, abstractmethod
from typing import Any, Generic, List, Mapping, TypeVar

import structlog


logger = structlog.get_logger(__name__)

T = TypeVar('T')


class BaseRepository(ABC, Generic[T]):
    """Base repository class shared by every storage backend.

    Implementations own their collection; callers only ever receive
    copies of stored records.
    """

    def __init__(self, table_name: str):
        """
        Initialize base repository.

        Args:
            table_name: Name of the collection the repository manages
        """
        self.table_name = table_name
        self.logger = logger.bind(component=f"{table_name}_repository")

    @abstractmethod
    async def create(self, fields: Mapping[str, Any]) -> T:
        """
        Create a new record.

        Args:
            fields: Raw client-supplied fields

        Returns:
            Created record with its assigned ID and timestamps

        Raises:
            ValidationError: If required fields are missing or malformed
        """

    @abstractmethod
    async def get(self, record_id: int) -> T:
        """
        Find a record by its ID.

        Raises:
            NotFoundError: If no record has the given ID
        """

    @abstractmethod
    async def list(self) -> List[T]:
        """Return every stored record, in no particular order."""

    @abstractmethod
    async def count(self) -> int:
        """Return the number of stored records."""

    @abstractmethod
    async def update(self, record_id: int, fields: Mapping[str, Any]) -> T:
        """
        Merge the provided fields over an existing record.

        Args:
            record_id: ID of the record to update
            fields: Partial set of fields; omitted fields keep their value

        Returns:
            The updated record

        Raises:
            NotFoundError: If no record has the given ID
            ValidationError: If the merged record would be invalid
        """

    @abstractmethod
    async def delete(self, record_id: int) -> T:
        """
        Remove a record.

        Returns:
            The removed record

        Raises:
            NotFoundError: If no record has the given ID
        """
