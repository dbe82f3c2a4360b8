"""
Detail Expansion Tracker
Single-selection state for "one row expanded at a time" tables
"""
from typing import Iterable, Optional


class ExpansionTracker:
    """At most one expanded row id; None means nothing is expanded."""

    def __init__(self):
        self._expanded: Optional[int] = None

    @property
    def expanded(self) -> Optional[int]:
        return self._expanded

    def is_expanded(self, row_id: int) -> bool:
        return self._expanded == row_id

    def toggle(self, row_id: int) -> Optional[int]:
        """Collapse the row if it is expanded, otherwise expand it (only it)."""
        self._expanded = None if self._expanded == row_id else row_id
        return self._expanded

    def reconcile(self, row_ids: Iterable[int]) -> Optional[int]:
        """Reset when the expanded row is no longer in the result set."""
        if self._expanded is not None and self._expanded not in set(row_ids):
            self._expanded = None
        return self._expanded

    def reset(self) -> None:
        self._expanded = None
