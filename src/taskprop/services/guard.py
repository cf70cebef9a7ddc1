"""Re-entrancy guard and debouncing for document processing.

``ProcessingGuard`` allows at most one in-flight pass per document and keeps
the document locked for a short cooldown afterwards, so the change event
caused by our own frontmatter write is not processed again.
``Debouncer`` collapses bursts of change events into one call per key.
"""

from __future__ import annotations

import threading
import time
from contextlib import contextmanager
from typing import Callable, Hashable, Iterator

from loguru import logger


class ProcessingGuard:
    """Per-document in-flight set with a cooldown window.

    Example:
        guard = ProcessingGuard(cooldown=0.2)
        with guard.hold("plan.md") as acquired:
            if acquired:
                processor.process_document("plan.md")
    """

    def __init__(
        self,
        cooldown: float = 0.2,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize guard.

        Args:
            cooldown: Seconds a document stays locked after release.
            clock: Monotonic time source.
        """
        self._cooldown = cooldown
        self._clock = clock
        self._lock = threading.Lock()
        self._in_flight: set[str] = set()
        self._released_at: dict[str, float] = {}

    def is_busy(self, doc_id: str) -> bool:
        """Whether the document is in flight or still cooling down."""
        with self._lock:
            return self._is_busy(doc_id)

    def acquire(self, doc_id: str) -> bool:
        """Mark a document in flight.

        Returns:
            False if the document is already in flight or cooling down.
        """
        with self._lock:
            if self._is_busy(doc_id):
                return False
            self._in_flight.add(doc_id)
            return True

    def release(self, doc_id: str) -> None:
        """End a pass and start the document's cooldown."""
        with self._lock:
            self._in_flight.discard(doc_id)
            self._released_at[doc_id] = self._clock()

    @contextmanager
    def hold(self, doc_id: str) -> Iterator[bool]:
        """Acquire for the duration of a block; yields whether it succeeded."""
        acquired = self.acquire(doc_id)
        try:
            yield acquired
        finally:
            if acquired:
                self.release(doc_id)

    def _is_busy(self, doc_id: str) -> bool:
        if doc_id in self._in_flight:
            return True
        released_at = self._released_at.get(doc_id)
        if released_at is None:
            return False
        if self._clock() - released_at < self._cooldown:
            return True
        del self._released_at[doc_id]
        return False


class Debouncer:
    """Trailing-edge debounce keyed by document.

    Each ``trigger`` restarts the key's timer; the callback runs once the
    key has been quiet for ``delay`` seconds.
    """

    def __init__(self, callback: Callable[[Hashable], None], delay: float = 1.0) -> None:
        """Initialize debouncer.

        Args:
            callback: Called with the key once its events settle.
            delay: Quiet period in seconds.
        """
        self._callback = callback
        self._delay = delay
        self._lock = threading.Lock()
        self._timers: dict[Hashable, threading.Timer] = {}

    @property
    def pending(self) -> int:
        """Number of keys waiting to fire."""
        with self._lock:
            return len(self._timers)

    def trigger(self, key: Hashable) -> None:
        """Schedule (or reschedule) the callback for a key."""
        with self._lock:
            existing = self._timers.pop(key, None)
            if existing is not None:
                existing.cancel()
            timer = threading.Timer(self._delay, self._fire, args=(key,))
            timer.daemon = True
            self._timers[key] = timer
            timer.start()

    def cancel_all(self) -> None:
        """Cancel every pending callback."""
        with self._lock:
            for timer in self._timers.values():
                timer.cancel()
            self._timers.clear()

    def _fire(self, key: Hashable) -> None:
        with self._lock:
            timer = self._timers.get(key)
            if timer is None or timer is not threading.current_thread():
                # Superseded by a later trigger or cancelled
                return
            del self._timers[key]
        try:
            self._callback(key)
        except Exception as e:
            logger.warning(f"Debounced callback failed for {key}: {e}")
