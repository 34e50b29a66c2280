"""
newslens - News Event Clustering and Company Relevance

Groups near-duplicate news articles into event clusters and scores how
central a company is to an article, so per-company feeds only show stories
that are actually about that company.
"""

__version__ = "0.1.0"

from newslens.core.article import Article, Category
from newslens.core.clustering import (
    Cluster,
    ClusteringEngine,
    DEFAULT_THRESHOLD,
    cluster_news,
    find_cluster_by_item_id,
    flatten_clusters,
)
from newslens.core.relevance import (
    RELEVANCE_THRESHOLD,
    RelevanceScorer,
    filter_by_relevance,
    get_article_company_scores,
    is_relevant,
    relevance_score,
)
from newslens.core.similarity import SimilarityScorer
from newslens.utils.nlp import KeywordExtractor
from newslens.utils.patterns import CompanyPatternMatcher

__all__ = [
    "Article",
    "Category",
    "Cluster",
    "ClusteringEngine",
    "CompanyPatternMatcher",
    "DEFAULT_THRESHOLD",
    "KeywordExtractor",
    "RELEVANCE_THRESHOLD",
    "RelevanceScorer",
    "SimilarityScorer",
    "cluster_news",
    "filter_by_relevance",
    "find_cluster_by_item_id",
    "flatten_clusters",
    "get_article_company_scores",
    "is_relevant",
    "relevance_score",
]
