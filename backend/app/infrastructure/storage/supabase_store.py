"""
Supabase Record Store
Executes QuerySpecs through the Supabase (PostgREST) query builder
"""
import asyncio
import logging
import re
from typing import Any, Dict, List

from supabase import Client

from app.domain.interfaces.record_store import QueryFailure, RecordStore
from app.domain.models.query import AnyOf, Eq, Gte, ILike, Lte, NotNull, Predicate, QuerySpec

logger = logging.getLogger(__name__)

# Characters with meaning inside a PostgREST or=(...) filter
_OR_RESERVED = re.compile(r"[,()]")


def _pattern(term: str) -> str:
    return f"%{term}%"


def _or_clause(predicate: AnyOf) -> str:
    """Render AnyOf as PostgREST filter syntax: 'name.ilike.%x%,phone.ilike.%x%'."""
    return ",".join(
        f"{clause.column}.ilike.{_pattern(_OR_RESERVED.sub('', clause.term))}"
        for clause in predicate.clauses
    )


def apply_predicate(query: Any, predicate: Predicate) -> Any:
    """
    Apply one predicate to a Supabase query builder.

    Args:
        query: Builder from supabase.table(...).select(...)
        predicate: Predicate to add (AND-ed with the existing ones)

    Returns:
        The extended builder
    """
    if isinstance(predicate, Eq):
        return query.eq(predicate.column, predicate.value)
    if isinstance(predicate, Gte):
        return query.gte(predicate.column, predicate.value)
    if isinstance(predicate, Lte):
        return query.lte(predicate.column, predicate.value)
    if isinstance(predicate, ILike):
        return query.ilike(predicate.column, _pattern(predicate.term))
    if isinstance(predicate, AnyOf):
        return query.or_(_or_clause(predicate))
    if isinstance(predicate, NotNull):
        return query.not_.is_(predicate.column, "null")
    raise TypeError(f"Unsupported predicate: {predicate!r}")


def build_request(supabase: Client, spec: QuerySpec, count: bool = False) -> Any:
    """Translate a QuerySpec into an executable Supabase request."""
    if count:
        # head: only the count comes back, no rows
        query = supabase.table(spec.table).select(spec.columns, count="exact", head=True)
    else:
        query = supabase.table(spec.table).select(spec.columns)

    for predicate in spec.predicates:
        query = apply_predicate(query, predicate)

    if spec.order_by:
        query = query.order(spec.order_by, desc=spec.descending)
    if spec.limit is not None:
        query = query.limit(spec.limit)
    return query


class SupabaseRecordStore(RecordStore):
    """
    RecordStore backed by a Supabase client.

    The client is synchronous; every execute() runs in a worker thread so
    the event loop keeps serving other views while a query is in flight.
    """

    def __init__(self, supabase: Client):
        self.supabase = supabase

    async def fetch(self, query: QuerySpec) -> List[Dict[str, Any]]:
        response = await self._execute(query, count=False)
        return list(response.data or [])

    async def count(self, query: QuerySpec) -> int:
        response = await self._execute(query, count=True)
        return response.count or 0

    async def _execute(self, query: QuerySpec, count: bool) -> Any:
        try:
            request = build_request(self.supabase, query, count=count)
            return await asyncio.to_thread(request.execute)
        except Exception as e:
            logger.error(f"Query on {query.table} failed: {e}")
            raise QueryFailure(f"Query on {query.table} failed: {e}") from e
