"""
In-batch de-duplication for newslens.

Drops repeated URLs and near-identical headlines from a freshly crawled
batch before it is enriched. Checking against already stored articles is the
storage layer's job.
"""
import logging
from dataclasses import dataclass
from typing import List, Tuple
from urllib.parse import parse_qsl, urlencode, urlparse, urlunparse

from newslens.core.article import Article

logger = logging.getLogger(__name__)

TRACKING_PARAMS = frozenset({
    'utm_source', 'utm_medium', 'utm_campaign', 'utm_term', 'utm_content',
    'ref', 'source', 'fbclid', 'gclid', 'mc_cid', 'mc_eid',
})

# Titles more similar than this are treated as the same story
TITLE_SIMILARITY_THRESHOLD = 0.75

JACCARD_WEIGHT = 0.6
LEVENSHTEIN_WEIGHT = 0.4


@dataclass
class DedupeStats:
    input: int = 0
    after_url_filter: int = 0
    after_title_filter: int = 0

    @property
    def url_duplicates(self) -> int:
        return self.input - self.after_url_filter

    @property
    def title_duplicates(self) -> int:
        return self.after_url_filter - self.after_title_filter

    def to_dict(self) -> dict:
        return {
            'input': self.input,
            'afterUrlFilter': self.after_url_filter,
            'afterTitleFilter': self.after_title_filter,
            'urlDuplicates': self.url_duplicates,
            'titleDuplicates': self.title_duplicates,
        }


def normalize_url(url: str) -> str:
    """
    Normalize a URL by lowercasing the scheme and host, and removing tracking
    parameters, the fragment and a trailing slash. An empty path becomes "/".

    Args:
        url: URL to normalize

    Returns:
        Normalized URL, or the input unchanged if it is not an absolute URL
    """
    try:
        parsed = urlparse(url)
    except (TypeError, ValueError):
        return url
    if not parsed.scheme or not parsed.netloc:
        return url

    query = [(k, v) for k, v in parse_qsl(parsed.query, keep_blank_values=True) if k not in TRACKING_PARAMS]

    path = parsed.path or '/'
    if len(path) > 1 and path.endswith('/'):
        path = path[:-1]

    return urlunparse((parsed.scheme.lower(), parsed.netloc.lower(), path, parsed.params, urlencode(query), ''))


def jaccard_similarity(a: str, b: str) -> float:
    """Word-set Jaccard similarity, ignoring words of two characters or less."""
    a_words = {w for w in a.lower().split() if len(w) > 2}
    b_words = {w for w in b.lower().split() if len(w) > 2}
    if not a_words or not b_words:
        return 0.0
    return len(a_words & b_words) / len(a_words | b_words)


def levenshtein_similarity(a: str, b: str) -> float:
    """Edit distance turned into a 0-1 similarity, case-insensitive."""
    a = a.lower()
    b = b.lower()
    if a == b:
        return 1.0

    max_len = max(len(a), len(b))
    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, 1):
        current = [i]
        for j, char_b in enumerate(b, 1):
            cost = 0 if char_a == char_b else 1
            current.append(min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + cost,
            ))
        previous = current

    return 1 - previous[-1] / max_len


def title_similarity(a: str, b: str) -> float:
    """Blend of word overlap and character edit similarity."""
    return JACCARD_WEIGHT * jaccard_similarity(a, b) + LEVENSHTEIN_WEIGHT * levenshtein_similarity(a, b)


def filter_duplicate_urls(articles: List[Article]) -> List[Article]:
    """Keep the first article for each normalized source URL."""
    seen = set()
    unique = []
    for article in articles:
        if article.source_url:
            key = normalize_url(article.source_url)
            if key in seen:
                continue
            seen.add(key)
        unique.append(article)

    logger.debug(f"URL filter: {len(articles) - len(unique)} duplicates found ({len(unique)} remaining)")
    return unique


def filter_similar_titles(articles: List[Article], threshold: float = TITLE_SIMILARITY_THRESHOLD) -> List[Article]:
    """Keep an article only if no earlier kept article has a near-identical title."""
    unique = []
    for article in articles:
        if any(title_similarity(kept.title, article.title) > threshold for kept in unique):
            continue
        unique.append(article)

    logger.debug(f"Title filter: {len(articles) - len(unique)} similar titles found ({len(unique)} remaining)")
    return unique


def deduplicate_articles(
    articles: List[Article],
    title_threshold: float = TITLE_SIMILARITY_THRESHOLD,
) -> Tuple[List[Article], DedupeStats]:
    """
    Remove duplicate URLs, then near-duplicate titles, from a batch.

    Args:
        articles: Batch of articles in crawl order
        title_threshold: Title similarity above which an article is dropped

    Returns:
        Tuple of (unique articles, stats)
    """
    stats = DedupeStats(input=len(articles))
    if not articles:
        return [], stats

    after_urls = filter_duplicate_urls(articles)
    stats.after_url_filter = len(after_urls)

    after_titles = filter_similar_titles(after_urls, title_threshold)
    stats.after_title_filter = len(after_titles)

    logger.info(
        f"Dedupe: {stats.input} in, {stats.url_duplicates} URL duplicates, "
        f"{stats.title_duplicates} title duplicates, {stats.after_title_filter} unique"
    )
    return after_titles, stats
