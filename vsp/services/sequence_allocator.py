"""
In-process sequence allocation for identifier generation.
"""

import logging
import threading
from collections.abc import Mapping
from typing import Dict, Optional

from ..core.exceptions import ValidationError
from ..core.interfaces import SequenceAllocator, SeedEntries


logger = logging.getLogger(__name__)


class InMemorySequenceAllocator(SequenceAllocator):
    """Thread-safe per-key counters held in memory.

    Counters live as long as the allocator. Uniqueness across processes is
    the job of whatever stores the identifiers (e.g. a unique index).
    """

    def __init__(self, initial: Optional[SeedEntries] = None):
        self._counters: Dict[str, int] = {}
        self._lock = threading.RLock()
        if initial:
            self.seed(initial)

    def next_sequence(self, key: str) -> int:
        """Issue the next sequence for a key."""
        return self.reserve(key, 1)

    def reserve(self, key: str, count: int) -> int:
        """Reserve ``count`` consecutive sequences and return the first."""
        if isinstance(count, bool) or not isinstance(count, int) or count < 1:
            raise ValidationError(f"Count must be a positive integer, got {count!r}",
                                  error_code="invalid_count")
        with self._lock:
            first = self._counters.get(key, 0) + 1
            self._counters[key] = first + count - 1
            return first

    def current(self, key: str) -> int:
        """Get the last issued sequence for a key."""
        with self._lock:
            return self._counters.get(key, 0)

    def seed(self, entries: SeedEntries) -> None:
        """Set counters, e.g. to continue numbering after migrated records."""
        items = entries.items() if isinstance(entries, Mapping) else entries
        with self._lock:
            for key, sequence in items:
                if isinstance(sequence, bool) or not isinstance(sequence, int) or sequence < 0:
                    raise ValidationError(f"Seed for {key!r} must be a non-negative integer, got {sequence!r}",
                                          error_code="invalid_seed")
                self._counters[key] = sequence
                logger.info("Seeded sequence %s at %d", key, sequence)

    def reset(self, key: Optional[str] = None) -> None:
        """Forget one counter, or all of them."""
        with self._lock:
            if key is None:
                self._counters.clear()
                logger.info("Reset all sequences")
            else:
                self._counters.pop(key, None)
                logger.info("Reset sequence %s", key)

    def snapshot(self) -> Dict[str, int]:
        """Get a copy of all counters."""
        with self._lock:
            return dict(self._counters)
