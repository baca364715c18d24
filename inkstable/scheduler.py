"""Frame scheduling and per-frame batching of pointer samples."""

import asyncio
import itertools
import logging
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional

from .types import PointerSample

logger = logging.getLogger("inkstable.scheduler")


class FrameScheduler(ABC):
    """Runs callbacks at the next frame boundary."""

    @abstractmethod
    def schedule(self, callback: Callable[[], None]):
        """Queue ``callback`` for the next frame and return a handle for ``cancel``."""

    @abstractmethod
    def cancel(self, handle) -> None:
        """Cancel a scheduled callback. Unknown or already-run handles are ignored."""


class ManualFrameScheduler(FrameScheduler):
    """Scheduler driven explicitly by the owner's render loop.

    Call ``pump()`` once per frame. Callbacks scheduled while pumping run
    on the following frame.
    """

    def __init__(self):
        self._counter = itertools.count(1)
        self._pending: Dict[int, Callable[[], None]] = {}

    def schedule(self, callback):
        handle = next(self._counter)
        self._pending[handle] = callback
        return handle

    def cancel(self, handle) -> None:
        self._pending.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def pump(self) -> int:
        """Run every callback queued before this frame. Returns how many ran."""
        due = self._pending
        self._pending = {}
        for callback in due.values():
            callback()
        return len(due)


class AsyncioFrameScheduler(FrameScheduler):
    """Fixed-rate frame ticks on an asyncio event loop."""

    def __init__(self, fps: float = 60.0, loop: Optional[asyncio.AbstractEventLoop] = None):
        if fps <= 0:
            raise ValueError(f"fps must be > 0, got {fps}")
        self.interval = 1.0 / fps
        self._loop = loop

    def schedule(self, callback):
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(self.interval, callback)

    def cancel(self, handle) -> None:
        handle.cancel()


class FrameBatcher:
    """Collects samples submitted during a frame and drains them in one go.

    When disabled, ``submit`` hands samples straight to the drain callback.
    At most one frame callback is outstanding at any time.
    """

    def __init__(self, scheduler: FrameScheduler,
                 drain: Callable[[List[PointerSample]], None],
                 enabled: bool = False):
        self.scheduler = scheduler
        self._drain = drain
        self.enabled = enabled
        self.pending: List[PointerSample] = []
        self._handle = None

    @property
    def scheduled(self) -> bool:
        return self._handle is not None

    def submit(self, samples: List[PointerSample]) -> None:
        if not self.enabled:
            self.flush_now()
            self._drain(list(samples))
            return

        self.pending.extend(samples)
        if self._handle is None:
            self._handle = self.scheduler.schedule(self._on_frame)

    def set_enabled(self, enabled: bool) -> None:
        if self.enabled and not enabled:
            self.flush_now()
        self.enabled = enabled

    def flush_now(self) -> None:
        """Drain the pending queue immediately, cancelling the frame callback."""
        self._cancel_handle()
        self._drain_pending()

    def take_pending(self) -> List[PointerSample]:
        """Cancel the frame callback and return the queue without draining it."""
        self._cancel_handle()
        pending = self.pending
        self.pending = []
        return pending

    def cancel(self) -> None:
        """Drop pending samples and any scheduled callback."""
        self.take_pending()

    def _cancel_handle(self) -> None:
        if self._handle is not None:
            self.scheduler.cancel(self._handle)
            self._handle = None

    def _on_frame(self) -> None:
        self._handle = None
        self._drain_pending()

    def _drain_pending(self) -> None:
        if not self.pending:
            return
        pending = self.pending
        self.pending = []
        logger.debug("Draining %d batched samples", len(pending))
        self._drain(pending)
