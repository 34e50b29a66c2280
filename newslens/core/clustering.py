"""
News clustering for newslens.

Groups articles about the same event so the feed can show one card per
story with the other sources folded underneath it.
"""
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from newslens.core.article import Article
from newslens.core.similarity import SimilarityScorer
from newslens.utils.nlp import KeywordExtractor

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.4


@dataclass
class Cluster:
    """
    One story: the article shown on the card plus the ones folded under it.
    """
    representative: Article
    related: List[Article] = field(default_factory=list)

    @property
    def id(self) -> str:
        return self.representative.id

    @property
    def size(self) -> int:
        return 1 + len(self.related)

    @property
    def articles(self) -> List[Article]:
        return [self.representative] + self.related

    def contains(self, item_id: str) -> bool:
        return any(article.id == item_id for article in self.articles)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "representative": self.representative.to_dict(),
            "related": [article.to_dict() for article in self.related],
            "clusterSize": self.size,
        }


def _sort_key(article: Article) -> float:
    published = article.published
    # Unusable timestamps sort after everything else
    return published.timestamp() if published is not None else float("-inf")


class ClusteringEngine:
    """
    Greedy single-pass clustering around a representative article.

    Each unassigned article (newest first) opens a cluster and pulls in every
    other unassigned article whose similarity to it reaches the threshold.
    Members are compared with the representative only, so clusters are
    star-shaped rather than transitive.
    """
    def __init__(self, scorer: Optional[SimilarityScorer] = None):
        self.scorer = scorer if scorer is not None else SimilarityScorer()

    def cluster(self, articles: Iterable[Article], threshold: float = DEFAULT_THRESHOLD) -> List[Cluster]:
        """
        Partition articles into clusters.

        Args:
            articles: Batch of articles to cluster
            threshold: Minimum similarity to join a representative's cluster

        Returns:
            Clusters in the order their representatives were picked
        """
        # sorted() stays stable with reverse=True, so ties keep input order
        ordered = sorted(articles, key=_sort_key, reverse=True)
        if not ordered:
            return []

        clusters = []
        # Track positions rather than ids so every input lands in exactly one cluster
        assigned = set()

        for i, representative in enumerate(ordered):
            if i in assigned:
                continue

            cluster = Cluster(representative=representative)
            assigned.add(i)

            for j, candidate in enumerate(ordered):
                if j in assigned:
                    continue
                if self.scorer.score(representative, candidate) >= threshold:
                    cluster.related.append(candidate)
                    assigned.add(j)

            clusters.append(cluster)

        logger.debug(f"Clustered {len(ordered)} articles into {len(clusters)} clusters (threshold {threshold})")
        return clusters


def cluster_news(articles: Iterable[Article], threshold: float = DEFAULT_THRESHOLD) -> List[Cluster]:
    """
    Cluster a batch with a fresh engine and keyword cache.

    Args:
        articles: Batch of articles to cluster
        threshold: Minimum similarity to group articles together

    Returns:
        List of clusters
    """
    engine = ClusteringEngine(SimilarityScorer(KeywordExtractor()))
    return engine.cluster(articles, threshold)


def flatten_clusters(clusters: Iterable[Cluster]) -> List[Article]:
    """Get all articles from clusters, representatives first."""
    return [article for cluster in clusters for article in cluster.articles]


def find_cluster_by_item_id(clusters: Iterable[Cluster], item_id: str) -> Optional[Cluster]:
    """Find the cluster containing an article, as representative or member."""
    for cluster in clusters:
        if cluster.contains(item_id):
            return cluster
    return None
