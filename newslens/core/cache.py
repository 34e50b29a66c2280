"""
Cache management for newslens.
"""
import logging
import threading
from typing import Dict, Optional, Tuple

logger = logging.getLogger(__name__)

# Cache configuration
MAX_CACHE_ENTRIES = 2000


class KeywordCache:
    """
    In-memory memo of text -> keyword tokens.

    When the cache grows past ``max_entries`` it is emptied completely before
    the next entry goes in. No LRU bookkeeping: titles repeat heavily within a
    single clustering run and rarely across runs.
    """
    def __init__(self, max_entries: int = MAX_CACHE_ENTRIES):
        self.max_entries = max_entries
        self._entries: Dict[str, Tuple[str, ...]] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, text: str) -> Optional[Tuple[str, ...]]:
        """
        Get cached keywords for an exact text.

        Args:
            text: The text that was tokenized

        Returns:
            The cached token tuple, or None on a miss
        """
        with self._lock:
            keywords = self._entries.get(text)
            if keywords is None:
                self.misses += 1
            else:
                self.hits += 1
            return keywords

    def set(self, text: str, keywords: Tuple[str, ...]):
        """
        Cache keywords for a text, resetting the cache if it is over capacity.

        Args:
            text: The text that was tokenized
            keywords: Its keyword tokens
        """
        with self._lock:
            if len(self._entries) > self.max_entries:
                logger.debug(f"Keyword cache over {self.max_entries} entries, clearing")
                self._entries.clear()
            self._entries[text] = keywords

    def clear(self):
        """Drop every cached entry."""
        with self._lock:
            self._entries.clear()
