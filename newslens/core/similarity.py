"""
Article similarity scoring for newslens.
"""
from typing import Optional

from newslens.core.article import Article
from newslens.utils.nlp import KeywordExtractor

# Points awarded per signal; they add up to 100
CATEGORY_WEIGHT = 20
COMPANY_WEIGHT = 30
TITLE_WEIGHT = 40
TIME_WEIGHT = 10

TIME_WINDOW_HOURS = 48


class SimilarityScorer:
    """
    Scores how likely two articles describe the same event.

    The score is a weighted sum of four signals (category, shared companies,
    headline keyword overlap and publication-time proximity) normalized to
    the range 0-1.
    """
    def __init__(self, extractor: Optional[KeywordExtractor] = None):
        self.extractor = extractor if extractor is not None else KeywordExtractor()

    def category_score(self, a: Article, b: Article) -> float:
        return CATEGORY_WEIGHT if a.category == b.category else 0

    def company_score(self, a: Article, b: Article) -> float:
        # Presence bonus, not proportional to the size of the overlap
        return COMPANY_WEIGHT if a.company_set & b.company_set else 0

    def title_score(self, a: Article, b: Article) -> float:
        words_a = self.extractor.keyword_set(a.title)
        words_b = self.extractor.keyword_set(b.title)
        if not words_a or not words_b:
            return 0.0
        common = len(words_a & words_b)
        return TITLE_WEIGHT * common / max(len(words_a), len(words_b))

    def time_score(self, a: Article, b: Article) -> float:
        published_a = a.published
        published_b = b.published
        if published_a is None or published_b is None:
            return 0.0
        hours_diff = abs((published_a - published_b).total_seconds()) / 3600
        if hours_diff > TIME_WINDOW_HOURS:
            return 0.0
        return TIME_WEIGHT * (1 - hours_diff / TIME_WINDOW_HOURS)

    def score(self, a: Article, b: Article) -> float:
        """
        Calculate similarity between two articles.

        Args:
            a: First article
            b: Second article

        Returns:
            Similarity in [0, 1]
        """
        total = (
            self.category_score(a, b)
            + self.company_score(a, b)
            + self.title_score(a, b)
            + self.time_score(a, b)
        )
        return min(1.0, max(0.0, total / 100))
