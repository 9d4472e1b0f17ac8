"""Thread-safe byte buffer written by the capture callback.

The stream callback is the only writer. The foreground thread calls
``take()`` once, after the stream has been stopped and closed, so reads
and writes are separated in time; the lock only protects the append
bookkeeping from a late callback racing the close.
"""

import threading
import time
from typing import Callable, Optional

from whispr.utils.logger import setup_logger

logger = setup_logger(__name__)


class SampleBuffer:
    """Growable buffer of encoded samples bounded by a recording window.

    Args:
        duration: Length of the recording window in seconds. Blocks that
            arrive once this much time has elapsed since ``start()`` are
            ignored.
        max_bytes: Size limit in bytes, 0 disables it.
        lock_timeout: Longest time the audio thread waits for the lock
            before dropping a block.
        clock: Monotonic time source.
    """

    def __init__(
        self,
        duration: float,
        max_bytes: int = 0,
        lock_timeout: float = 0.05,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.duration = duration
        self.max_bytes = max_bytes
        self.lock_timeout = lock_timeout
        self._clock = clock

        self._data = bytearray()
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._start_time: Optional[float] = None
        self._closed = False
        self._limit_logged = False

        self._blocks = 0
        self._bytes = 0
        self._late_blocks = 0
        self._dropped_blocks = 0

    def start(self) -> None:
        """Mark the beginning of the recording window."""
        self._start_time = self._clock()

    def stop(self) -> None:
        """Signal the writer that no further blocks should be stored."""
        self._stop_event.set()

    @property
    def elapsed(self) -> float:
        if self._start_time is None:
            return 0.0
        return self._clock() - self._start_time

    def append(self, data: bytes) -> bool:
        """Append one encoded block.

        Args:
            data: Encoded samples.

        Returns:
            True if the block was stored.
        """
        if self._start_time is None or self._stop_event.is_set():
            return False

        if self.elapsed >= self.duration:
            self._late_blocks += 1
            return False

        if not self._lock.acquire(timeout=self.lock_timeout):
            self._dropped_blocks += 1
            return False

        try:
            if self._closed:
                return False

            if self.max_bytes and len(self._data) + len(data) > self.max_bytes:
                self._dropped_blocks += 1
                if not self._limit_logged:
                    logger.warning(
                        f"🟡 Capture buffer limit reached: {self.max_bytes / (1024 * 1024):.1f}MB"  # noqa: E501
                    )
                    self._limit_logged = True
                return False

            self._data.extend(data)
            self._blocks += 1
            self._bytes += len(data)
            return True
        finally:
            self._lock.release()

    def take(self) -> bytes:
        """Close the buffer and return everything captured.

        Returns:
            Immutable snapshot of the captured bytes.

        Raises:
            RuntimeError: If the buffer was already taken.
        """
        with self._lock:
            if self._closed:
                raise RuntimeError("SampleBuffer.take() called twice")
            self._closed = True
            self._stop_event.set()
            snapshot = bytes(self._data)
            self._data = bytearray()

        if self._dropped_blocks:
            logger.warning(f"🟡 Dropped {self._dropped_blocks} audio blocks")
        logger.debug(
            f"Buffer closed: {self._blocks} blocks, {len(snapshot)} bytes, "
            f"{self._late_blocks} late blocks ignored"
        )
        return snapshot

    def stats(self) -> dict:
        """Return buffer counters."""
        return {
            "blocks": self._blocks,
            "bytes": self._bytes,
            "late_blocks": self._late_blocks,
            "dropped_blocks": self._dropped_blocks,
        }
