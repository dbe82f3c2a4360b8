"""
View Controllers
Per-view state owner: filter input, debounce timers, in-flight guard and expansion.

One controller instance per open dashboard view; controllers share nothing.
"""
import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Generic, Optional, Set, Tuple, Type, TypeVar

from app.domain.interfaces.record_store import QueryFailure, RecordStore
from app.domain.models.filters import (
    AnalysisFilters,
    AnalyticsFilters,
    ConversationFilters,
    DashboardFilters,
    FilterState,
    MeetingFilters,
)
from app.domain.models.view_model import ViewModel
from app.domain.services.debouncer import DebouncedFields
from app.domain.services.expansion_tracker import ExpansionTracker
from app.services.dashboard_views import (
    VIEW_ERRORS,
    AnalysesView,
    AnalyticsView,
    ConversationsView,
    DashboardView,
    MeetingsView,
    ViewOptions,
    load_analyses,
    load_analytics,
    load_conversations,
    load_dashboard,
    load_meetings,
)

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=FilterState)


class ViewController(ABC, Generic[F]):
    """
    Drives one dashboard view.

    Lifecycle:
        controller = ConversationsController(store)
        await controller.refresh()                 # initial load
        controller.edit("recipient", "555")        # debounced, one query later
        controller.edit("date", "2024-05-01")      # immediate query
        controller.view_model                      # latest snapshot
        controller.close()                         # teardown

    Every refresh takes a new generation number; a result is published only
    if no newer refresh started meanwhile, so a slow stale reply can never
    overwrite a newer one.
    """

    view_name: str = ""
    filters_type: Type[FilterState] = FilterState
    view_type: Type[ViewModel] = ViewModel
    debounced_fields: Tuple[str, ...] = ()

    def __init__(
        self,
        store: RecordStore,
        filters: Optional[F] = None,
        options: Optional[ViewOptions] = None,
        quiet_period: Optional[float] = None
    ):
        self.store = store
        self.options = options or ViewOptions()
        if quiet_period is None:
            quiet_period = self.options.debounce_ms / 1000

        self._filters: F = filters or self.filters_type()
        self._stable: F = self._filters
        self._quiet_period = quiet_period
        self._debounce = DebouncedFields(self.debounced_fields, self._on_stable_value, quiet_period)
        self._tracker = ExpansionTracker()
        self._view: ViewModel = self.view_type()
        self._generation = 0
        self._tasks: Set[asyncio.Task] = set()
        self._closed = False

    # ========== State ==========

    @property
    def filters(self) -> F:
        """Raw filter input as the user typed it."""
        return self._filters

    @property
    def stable_filters(self) -> F:
        """Criteria the last query was (or will be) built from."""
        return self._stable

    @property
    def view_model(self) -> ViewModel:
        return self._view

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def expanded_id(self) -> Optional[int]:
        return self._tracker.expanded

    @property
    def closed(self) -> bool:
        return self._closed

    # ========== Input ==========

    def edit(self, field: str, value: Any) -> None:
        """
        Apply one filter edit.

        Debounced fields wait for the quiet period; all other fields
        trigger a refresh right away.
        """
        if self._closed:
            return
        self._filters = self._filters.update(field, value)
        if field in self._debounce:
            self._debounce.push(field, value)
        else:
            self._stable = self._stable.update(field, value)
            self._schedule_refresh()

    def clear_filters(self) -> None:
        """Reset every field to "no constraint" and reload."""
        if self._closed:
            return
        self._debounce.cancel_all()
        self._filters = self._stable = self.filters_type()
        self._schedule_refresh()

    def toggle_row(self, row_id: int) -> Optional[int]:
        """Expand a row (collapsing any other) or collapse it if already expanded."""
        expanded = self._tracker.toggle(row_id)
        self._view = self._view.model_copy(update={"expanded_id": expanded})
        return expanded

    def _on_stable_value(self, field: str, value: Any) -> None:
        self._stable = self._stable.update(field, value)
        self._schedule_refresh()

    # ========== Loading ==========

    @abstractmethod
    async def load(self, filters: F) -> ViewModel:
        """Run one load for the given criteria (raises QueryFailure)."""
        pass

    def row_id(self, row: Any) -> Optional[int]:
        return getattr(row, "id", None)

    async def refresh(self) -> ViewModel:
        """Load with the current stable criteria and publish if still current."""
        if self._closed:
            return self._view

        self._generation += 1
        generation = self._generation
        self._publish(self.view_type(loading=True))

        try:
            view = await self.load(self._stable)
        except QueryFailure as e:
            if generation != self._generation:
                logger.debug(f"Discarding stale {self.view_name} failure (generation {generation})")
                return self._view
            logger.error(f"Failed to refresh {self.view_name}: {e.message}")
            self._publish(self.view_type(error=VIEW_ERRORS[self.view_name]))
            return self._view

        if generation != self._generation:
            logger.debug(
                f"Discarding stale {self.view_name} result "
                f"(generation {generation}, latest {self._generation})"
            )
            return self._view

        self._publish(view)
        return self._view

    def _publish(self, view: ViewModel) -> None:
        if not view.loading:
            self._tracker.reconcile(self.row_id(row) for row in view.records)
        self._view = view.model_copy(update={"expanded_id": self._tracker.expanded})

    def _schedule_refresh(self) -> None:
        task = asyncio.ensure_future(self.refresh())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def wait_idle(self) -> None:
        """Wait until pending debounced edits have fired and every refresh has finished."""
        while self._debounce.pending or self._tasks:
            if self._tasks:
                await asyncio.gather(*list(self._tasks), return_exceptions=True)
            else:
                await asyncio.sleep(self._quiet_period / 4)

    def close(self) -> None:
        """Teardown: no more emissions, in-flight results are dropped."""
        self._debounce.close()
        self._generation += 1
        self._closed = True
        logger.debug(f"{self.view_name} controller closed")


class DashboardController(ViewController[DashboardFilters]):
    view_name = "dashboard"
    filters_type = DashboardFilters
    view_type = DashboardView

    async def load(self, filters: DashboardFilters) -> ViewModel:
        return await load_dashboard(self.store, filters, self.options)


class ConversationsController(ViewController[ConversationFilters]):
    view_name = "conversations"
    filters_type = ConversationFilters
    view_type = ConversationsView
    debounced_fields = ("recipient",)

    async def load(self, filters: ConversationFilters) -> ViewModel:
        return await load_conversations(self.store, filters, self.options)

    def row_id(self, row: Any) -> Optional[int]:
        return row.call.id


class MeetingsController(ViewController[MeetingFilters]):
    view_name = "meetings"
    filters_type = MeetingFilters
    view_type = MeetingsView
    debounced_fields = ("search",)

    async def load(self, filters: MeetingFilters) -> ViewModel:
        return await load_meetings(self.store, filters, self.options)


class AnalysesController(ViewController[AnalysisFilters]):
    view_name = "analyses"
    filters_type = AnalysisFilters
    view_type = AnalysesView
    debounced_fields = ("call_id",)

    async def load(self, filters: AnalysisFilters) -> ViewModel:
        return await load_analyses(self.store, filters, self.options)

    def row_id(self, row: Any) -> Optional[int]:
        return row.analysis.id


class AnalyticsController(ViewController[AnalyticsFilters]):
    view_name = "analytics"
    filters_type = AnalyticsFilters
    view_type = AnalyticsView

    async def load(self, filters: AnalyticsFilters) -> ViewModel:
        return await load_analytics(self.store, filters, self.options)
