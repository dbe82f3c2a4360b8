"""
Record Store Interface
Abstract base class for the remote store holding calls and analyses
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from app.domain.models.query import QuerySpec


class QueryFailure(Exception):
    """Raised when the remote store reports an error. Never retried."""
    def __init__(self, message: str = "The record store failed to execute the query."):
        self.message = message
        super().__init__(self.message)


class RecordStore(ABC):
    """Abstract base class for queryable record stores"""

    @abstractmethod
    async def fetch(self, query: QuerySpec) -> List[Dict[str, Any]]:
        """
        Execute a query and return its rows

        Raises:
            QueryFailure: If the store reports an error
        """
        pass

    @abstractmethod
    async def count(self, query: QuerySpec) -> int:
        """
        Execute a query and return only the number of matching rows

        Raises:
            QueryFailure: If the store reports an error
        """
        pass
