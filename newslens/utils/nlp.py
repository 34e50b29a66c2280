"""
Text analysis utilities for newslens.
"""
import re
from typing import Optional, Tuple

from newslens.core.cache import KeywordCache, MAX_CACHE_ENTRIES

# Words that carry no event information in a headline
STOP_WORDS = frozenset({
    'a', 'an', 'the', 'is', 'are', 'was', 'were', 'be', 'been', 'being',
    'have', 'has', 'had', 'do', 'does', 'did', 'will', 'would', 'could',
    'should', 'may', 'might', 'can', 'to', 'of', 'in', 'for', 'on', 'with',
    'at', 'by', 'from', 'as', 'into', 'like', 'through', 'after', 'over',
    'between', 'out', 'against', 'during', 'without', 'before', 'under',
    'around', 'among',
})

MIN_KEYWORD_LENGTH = 3

_PUNCTUATION_RE = re.compile(r'[^\w\s]')


class KeywordExtractor:
    """
    Rule-based keyword extraction used for headline comparison.
    """
    def __init__(self, cache: Optional[KeywordCache] = None, max_cache_entries: int = MAX_CACHE_ENTRIES):
        """
        Initialize the extractor.

        Args:
            cache: Cache to memoize results in; a private one is created if omitted
            max_cache_entries: Capacity of the private cache
        """
        self.cache = cache if cache is not None else KeywordCache(max_cache_entries)

    def extract(self, text: Optional[str]) -> Tuple[str, ...]:
        """
        Extract normalized keywords from text.

        Lowercases, turns punctuation into spaces, splits on whitespace and
        drops short tokens and stop words. Token order follows the text.

        Args:
            text: Text to tokenize

        Returns:
            Tuple of keywords, empty for empty input
        """
        if not text:
            return ()

        cached = self.cache.get(text)
        if cached is not None:
            return cached

        words = _PUNCTUATION_RE.sub(' ', text.lower()).split()
        keywords = tuple(
            w for w in words
            if len(w) >= MIN_KEYWORD_LENGTH and w not in STOP_WORDS
        )

        self.cache.set(text, keywords)
        return keywords

    def keyword_set(self, text: Optional[str]) -> frozenset:
        """Distinct keywords of a text."""
        return frozenset(self.extract(text))
