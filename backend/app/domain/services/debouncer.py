"""
Debounced Input Stabilizer
Turns a stream of raw filter edits into a stable value emitted after a quiet period
"""
import asyncio
import inspect
import logging
from typing import Any, Callable, Dict, Optional, Set

logger = logging.getLogger(__name__)

DEFAULT_QUIET_PERIOD = 0.5  # seconds


class Debouncer:
    """
    Emits the most recent pushed value once no push arrived for ``delay`` seconds.

    Each push cancels the pending emission and restarts the timer. After
    close() nothing is ever emitted again.

    Usage:
        debouncer = Debouncer(0.5, on_stable_value)
        debouncer.push("5")
        debouncer.push("55")   # only "55" reaches on_stable_value
        debouncer.close()
    """

    def __init__(
        self,
        delay: float,
        callback: Callable[[Any], Any],
        name: str = "field"
    ):
        if delay < 0:
            raise ValueError("delay must be non-negative")
        self.delay = delay
        self.name = name
        self._callback = callback
        self._handle: Optional[asyncio.TimerHandle] = None
        self._tasks: Set[asyncio.Task] = set()
        self._closed = False

    @property
    def pending(self) -> bool:
        """Whether an emission is scheduled."""
        return self._handle is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def push(self, value: Any) -> None:
        """Record a raw edit and restart the quiet period."""
        if self._closed:
            logger.debug(f"Debouncer '{self.name}' closed, ignoring edit")
            return
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire, value)

    def cancel(self) -> None:
        """Drop the pending emission, if any."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def close(self) -> None:
        """Teardown: cancel the timer and refuse further edits."""
        self.cancel()
        self._closed = True

    def _fire(self, value: Any) -> None:
        self._handle = None
        if self._closed:
            return
        logger.debug(f"Debouncer '{self.name}' emitting stable value")
        result = self._callback(value)
        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)


class DebouncedFields:
    """
    Independent debouncers keyed by filter field name.

    An edit to one field never touches another field's timer.
    """

    def __init__(
        self,
        fields,
        callback: Callable[[str, Any], Any],
        delay: float = DEFAULT_QUIET_PERIOD
    ):
        self._debouncers: Dict[str, Debouncer] = {
            name: Debouncer(delay, self._bind(callback, name), name=name)
            for name in fields
        }

    @staticmethod
    def _bind(callback: Callable[[str, Any], Any], name: str) -> Callable[[Any], Any]:
        return lambda value: callback(name, value)

    def __contains__(self, field: str) -> bool:
        return field in self._debouncers

    def __getitem__(self, field: str) -> Debouncer:
        return self._debouncers[field]

    def push(self, field: str, value: Any) -> None:
        self._debouncers[field].push(value)

    @property
    def pending(self) -> bool:
        """Whether any field has an emission scheduled."""
        return any(d.pending for d in self._debouncers.values())

    def cancel_all(self) -> None:
        for debouncer in self._debouncers.values():
            debouncer.cancel()

    def close(self) -> None:
        for debouncer in self._debouncers.values():
            debouncer.close()
