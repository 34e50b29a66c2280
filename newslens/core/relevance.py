"""
Company relevance scoring for newslens.

Decides whether an article is actually about a company or only mentions it
in passing. Used to filter the per-company feeds.

Scoring:
    - Title mentions the company: +50
    - First sentence of the summary mentions it: +30
    - Mentions across title and summary, x10, capped at +30
    - An action keyword right next to the company name: +20

Max possible: 130
"""
import re
from typing import Any, Dict, Iterable, List, Optional, Tuple

from newslens.utils.patterns import CompanyPatternMatcher

RELEVANCE_THRESHOLD = 50

TITLE_POINTS = 50
FIRST_SENTENCE_POINTS = 30
MENTION_POINTS = 10
MAX_MENTION_POINTS = 30
ACTION_POINTS = 20

ACTION_KEYWORDS = (
    'announces', 'announced', 'launches', 'launched', 'unveils', 'unveiled',
    'releases', 'released', 'introduces', 'introduced', 'acquires', 'acquired',
    'raises', 'raised', 'secures', 'secured', 'partners', 'partnered',
    'expands', 'expanded', 'opens', 'opened', 'hires', 'hired',
)

_SENTENCE_END_RE = re.compile(r'[.!?]')
_ACTIONS = '|'.join(ACTION_KEYWORDS)


def _text_fields(article: Any) -> Tuple[str, str]:
    if isinstance(article, dict):
        return article.get('title') or '', article.get('summary') or ''
    return getattr(article, 'title', '') or '', getattr(article, 'summary', '') or ''


def first_sentence(text: str) -> str:
    """Text up to the first sentence terminator."""
    return _SENTENCE_END_RE.split(text, 1)[0]


class RelevanceScorer:
    """
    Additive point scoring of how central a company is to an article.
    """
    def __init__(self, matcher: Optional[CompanyPatternMatcher] = None):
        self.matcher = matcher if matcher is not None else CompanyPatternMatcher()

    @staticmethod
    def action_pattern(slug: str) -> re.Pattern:
        """Company slug and an action keyword separated only by whitespace, either order."""
        company = re.escape(slug)
        return re.compile(
            rf'\b{company}\s+(?:{_ACTIONS})\b|\b(?:{_ACTIONS})\s+{company}\b',
            re.IGNORECASE,
        )

    def score(self, article: Any, slug: str) -> int:
        """
        Calculate the relevance score of an article for a company.

        Args:
            article: Article, or anything with title and summary
            slug: Company identifier

        Returns:
            Non-negative integer score
        """
        company = (slug or '').strip().lower()
        if not company:
            return 0

        title, summary = _text_fields(article)
        title = title.lower()
        summary = summary.lower()
        pattern = self.matcher.pattern_for(company)

        score = 0

        if pattern.search(title):
            score += TITLE_POINTS

        if pattern.search(first_sentence(summary)):
            score += FIRST_SENTENCE_POINTS

        full_text = f"{title} {summary}"
        mentions = sum(1 for _ in pattern.finditer(full_text))
        score += min(mentions * MENTION_POINTS, MAX_MENTION_POINTS)

        if self.action_pattern(company).search(full_text):
            score += ACTION_POINTS

        return score

    def is_relevant(self, article: Any, slug: str) -> bool:
        """Check if an article is relevant enough to show in a company feed."""
        return self.score(article, slug) >= RELEVANCE_THRESHOLD


_default_scorer = RelevanceScorer()


def relevance_score(article: Any, slug: str) -> int:
    """Relevance score of an article for a company."""
    return _default_scorer.score(article, slug)


def is_relevant(article: Any, slug: str) -> bool:
    """Check if an article reaches the relevance threshold for a company."""
    return _default_scorer.is_relevant(article, slug)


def filter_by_relevance(articles: Iterable[Any], slug: str) -> List[Any]:
    """Keep only the articles relevant to a company, in their original order."""
    return [article for article in articles if is_relevant(article, slug)]


def get_article_company_scores(article: Any) -> Dict[str, int]:
    """
    Score an article against every company it is tagged with.

    Args:
        article: Article with a ``companies`` list

    Returns:
        Dict of company slug to relevance score
    """
    if isinstance(article, dict):
        companies = article.get('companies') or []
    else:
        companies = getattr(article, 'companies', None) or []

    scores = {}
    for company in companies:
        if company not in scores:
            scores[company] = relevance_score(article, company)
    return scores
