"""
Importance scoring for newslens.

Ranks articles (0-100) against a reader's interests. Stories covered by
several sources, i.e. large clusters, get a boost.
"""
import math
from dataclasses import dataclass, field
from typing import Any, Iterable, List

from newslens.core.article import Article

# Leading AI companies; any mention raises importance
TIER_1_COMPANIES = frozenset({
    'openai', 'anthropic', 'google', 'microsoft', 'meta', 'nvidia', 'xai', 'mistral',
})

FUNDING_KEYWORDS = (
    'funding', 'raised', 'series a', 'series b', 'series c', 'seed round',
    'acquisition', 'acquired', 'merger', 'bought', 'investment', 'valuation',
    'unicorn', 'billion', 'million',
)

LAUNCH_KEYWORDS = (
    'launch', 'launches', 'launched', 'release', 'releases', 'released',
    'announce', 'announces', 'announced', 'unveil', 'unveils', 'unveiled',
    'introduce', 'introduces', 'introduced',
)

DEFAULT_IMPORTANCE_THRESHOLD = 40
MULTI_SOURCE_CLUSTER_SIZE = 3
MULTI_SOURCE_BOOST = 1.2


@dataclass
class UserInterests:
    """
    What a reader follows: categories, free-text keywords and company slugs.
    """
    categories: List[str] = field(default_factory=list)
    keywords: List[str] = field(default_factory=list)
    companies: List[str] = field(default_factory=list)

    @property
    def has_specific_interests(self) -> bool:
        return bool(self.companies or self.keywords)


def _content(article: Article) -> str:
    return f"{article.title} {article.summary}".lower()


def calculate_importance_score(article: Article, interests: UserInterests, cluster_size: int = 1) -> int:
    """
    Calculate the importance of an article for a reader.

    Args:
        article: The article to score
        interests: The reader's interest settings
        cluster_size: Number of articles in the article's cluster

    Returns:
        Importance score between 0 and 100
    """
    content = _content(article)
    companies = article.company_set

    score = 0

    if article.category in interests.categories:
        score += 30

    if interests.keywords:
        matching = [k for k in interests.keywords if k.lower() in content]
        score += min(len(matching) * 10, 25)

    if companies & set(interests.companies):
        score += 20

    if companies & TIER_1_COMPANIES:
        score += 15

    if any(keyword in content for keyword in FUNDING_KEYWORDS):
        score += 10

    if any(keyword in content for keyword in LAUNCH_KEYWORDS):
        score += 10

    if cluster_size >= MULTI_SOURCE_CLUSTER_SIZE:
        score = min(score * MULTI_SOURCE_BOOST, 100)

    # Round half up, matching how the scores are shown in the feed
    return int(math.floor(min(score, 100) + 0.5))


def filter_by_importance(items: Iterable[Any], threshold: int = DEFAULT_IMPORTANCE_THRESHOLD) -> List[Any]:
    """
    Keep items whose ``score`` reaches the threshold.

    Items may be objects with a ``score`` attribute or dicts with a
    ``score`` key.
    """
    def _score(item):
        if isinstance(item, dict):
            return item.get('score', 0)
        return getattr(item, 'score', 0)

    return [item for item in items if _score(item) >= threshold]


def matches_user_interests(article: Article, interests: UserInterests) -> bool:
    """
    Basic pre-filter before importance scoring.

    The article must be in one of the reader's categories. If the reader also
    follows companies or keywords, at least one of those has to match too.
    """
    if article.category not in interests.categories:
        return False

    if not interests.has_specific_interests:
        return True

    if article.company_set & set(interests.companies):
        return True

    content = _content(article)
    return any(keyword.lower() in content for keyword in interests.keywords)
