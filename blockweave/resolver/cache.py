"""
Resolution cache for the reference resolver.

The cache is an unbounded mapping with no TTL. Callers must clear it whenever
variable values, file names or the file list change. Alternatively, the
resolver can pass the project's ``updated_at`` as a generation token: a new
generation empties the cache before the next lookup.
"""

import logging
from typing import Any, Dict, NamedTuple, Optional, Tuple

CacheKey = Tuple[str, str, str, str]


class CachedResolution(NamedTuple):
    """A successful resolution: the value and the file it came from."""

    value: str
    file_id: str


class ResolutionCache:
    """
    Memoizes successful reference resolutions.
    """

    def __init__(self, enabled: bool = True):
        """
        Initialize an empty cache.

        Args:
            enabled: When False, get() always misses and set() is a no-op
        """
        self.enabled = enabled
        self.generation: Optional[Any] = None
        self.hits = 0
        self.misses = 0
        self._entries: Dict[CacheKey, CachedResolution] = {}

    @staticmethod
    def make_key(current_file_id: str, syntax: str, file_path: str, variable_name: str) -> CacheKey:
        return (current_file_id, syntax, file_path, variable_name)

    def get(self, key: CacheKey) -> Optional[CachedResolution]:
        if not self.enabled:
            return None
        entry = self._entries.get(key)
        if entry is None:
            self.misses += 1
        else:
            self.hits += 1
        return entry

    def set(self, key: CacheKey, value: CachedResolution) -> None:
        if self.enabled:
            self._entries[key] = value

    def clear(self) -> None:
        """Drop every entry; counters and generation are kept."""
        if self._entries:
            logging.debug(f"Clearing {len(self._entries)} cached resolutions")
        self._entries.clear()

    def sync_generation(self, generation: Any) -> bool:
        """
        Clear the cache if ``generation`` differs from the last one seen.

        Returns:
            True if the cache was cleared
        """
        if generation == self.generation:
            return False
        stale = self.generation is not None
        self.generation = generation
        if stale:
            self.clear()
        return stale

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries
