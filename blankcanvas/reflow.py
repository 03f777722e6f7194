"""Trailing-edge debounce for the fill + rescan pass."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from .constants import EditorConstants

logger = logging.getLogger(__name__)


@dataclass
class PendingReflow:
    deadline: float
    generation: int


class ReflowController:
    """Coalesces bursts of edits into one reflow pass.

    There is never more than one pending pass: ``schedule`` replaces the
    previous deadline. Nothing runs on its own; the event loop calls
    ``poll`` (using ``remaining`` as its wait timeout) and the callback runs
    on that same thread.
    """

    def __init__(self, callback: Callable[[], None],
                 delay: float = EditorConstants.REFLOW_DELAY,
                 clock: Callable[[], float] = time.monotonic):
        self._callback = callback
        self.delay = delay
        self._clock = clock
        self._pending: Optional[PendingReflow] = None
        self._generation = 0

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def schedule(self) -> None:
        """Cancel any pending pass and arm a new one ``delay`` from now."""
        self._generation += 1
        self._pending = PendingReflow(
            deadline=self._clock() + self.delay,
            generation=self._generation,
        )

    def cancel(self) -> None:
        self._pending = None

    def remaining(self) -> Optional[float]:
        """Seconds until the pending pass is due, None when idle."""
        if self._pending is None:
            return None
        return max(0.0, self._pending.deadline - self._clock())

    def poll(self) -> bool:
        """Run the pass if its deadline has passed.

        Returns:
            True if the callback ran
        """
        pending = self._pending
        if pending is None or pending.deadline > self._clock():
            return False
        return self._fire(pending.generation)

    def flush(self) -> bool:
        """Run the pass now, dropping any pending deadline."""
        self._generation += 1
        self._pending = PendingReflow(deadline=self._clock(), generation=self._generation)
        return self._fire(self._generation)

    def _fire(self, generation: int) -> bool:
        if self._pending is None or self._pending.generation != generation:
            return False
        self._pending = None
        logger.debug("Reflow pass (generation %d)", generation)
        self._callback()
        return True
