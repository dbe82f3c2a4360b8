"""
Query Models
Store-agnostic predicates and query specification for the record store
"""
from dataclasses import dataclass, field
from typing import Any, Optional, Tuple, Union


@dataclass(frozen=True)
class Eq:
    """Exact equality against a categorical or integer column."""
    column: str
    value: Any


@dataclass(frozen=True)
class Gte:
    """Inclusive lower bound."""
    column: str
    value: str


@dataclass(frozen=True)
class Lte:
    """Inclusive upper bound."""
    column: str
    value: str


@dataclass(frozen=True)
class ILike:
    """Case-insensitive substring match."""
    column: str
    term: str


@dataclass(frozen=True)
class AnyOf:
    """Disjunction of substring matches (one search box, several columns)."""
    clauses: Tuple[ILike, ...]


@dataclass(frozen=True)
class NotNull:
    """Column must be set."""
    column: str


Predicate = Union[Eq, Gte, Lte, ILike, AnyOf, NotNull]


@dataclass(frozen=True)
class QuerySpec:
    """
    A complete query against one table.

    Predicates are combined conjunctively, in order.
    """
    table: str
    columns: str = "*"
    predicates: Tuple[Predicate, ...] = field(default_factory=tuple)
    order_by: Optional[str] = None
    descending: bool = False
    limit: Optional[int] = None
