"""
Command-line interface for newslens.
"""
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from tqdm import tqdm

from newslens.config import get_config
from newslens.core.article import Article
from newslens.core.clustering import ClusteringEngine
from newslens.core.dedupe import deduplicate_articles
from newslens.core.relevance import RELEVANCE_THRESHOLD, RelevanceScorer
from newslens.core.similarity import SimilarityScorer
from newslens.utils.nlp import KeywordExtractor

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(verbose: bool = False, log_file: Optional[str] = None):
    """
    Configure logging for the command-line tool.

    Args:
        verbose: Log at DEBUG instead of INFO
        log_file: Optional file to log to as well as stderr
    """
    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )


def parse_args(argv: Optional[List[str]] = None):
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(description="newslens - news event clustering and company relevance")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-file", help="Also write logs to this file")
    subparsers = parser.add_subparsers(dest="command", required=True)

    cluster_parser = subparsers.add_parser("cluster", help="Group articles about the same event")
    cluster_parser.add_argument("input", help="JSON or JSON Lines file of articles")
    cluster_parser.add_argument(
        "--threshold", type=float, default=None,
        help="Minimum similarity to group articles (default from config, 0.4)",
    )

    relevance_parser = subparsers.add_parser("relevance", help="Score articles for a company")
    relevance_parser.add_argument("input", help="JSON or JSON Lines file of articles")
    relevance_parser.add_argument("--company", required=True, help="Company slug, e.g. openai")
    relevance_parser.add_argument("--only-relevant", action="store_true", help="Only output relevant articles")

    dedupe_parser = subparsers.add_parser("dedupe", help="Drop duplicate URLs and near-identical titles")
    dedupe_parser.add_argument("input", help="JSON or JSON Lines file of articles")
    dedupe_parser.add_argument(
        "--title-threshold", type=float, default=None,
        help="Title similarity above which an article is dropped (default from config, 0.75)",
    )

    return parser.parse_args(argv)


def load_articles(path: str) -> List[Article]:
    """
    Load articles from a JSON array or a JSON Lines file.

    Args:
        path: Path to the input file

    Returns:
        List of Article objects

    Raises:
        OSError: If the file cannot be read
        ValueError: If the file is not valid JSON or a record has no id
    """
    text = Path(path).read_text(encoding='utf-8')
    stripped = text.lstrip()

    if stripped.startswith('['):
        records = json.loads(text)
    else:
        records = [json.loads(line) for line in text.splitlines() if line.strip()]

    if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
        raise ValueError("Expected a list of article objects")

    articles = [Article.from_dict(record) for record in records]
    logger.info(f"Loaded {len(articles)} articles from {path}")
    return articles


def run_cluster(articles: List[Article], threshold: Optional[float]) -> dict:
    if threshold is None:
        threshold = float(get_config('clustering.threshold', 0.4))

    extractor = KeywordExtractor(max_cache_entries=int(get_config('keywords.cache_size', 2000)))
    engine = ClusteringEngine(SimilarityScorer(extractor))
    clusters = engine.cluster(articles, threshold)

    logger.info(f"Grouped {len(articles)} articles into {len(clusters)} clusters")
    return {
        "threshold": threshold,
        "clusters": [cluster.to_dict() for cluster in clusters],
    }


def run_relevance(articles: List[Article], company: str, only_relevant: bool = False) -> dict:
    scorer = RelevanceScorer()

    results = []
    for article in tqdm(articles, desc=f"Scoring for {company}", disable=len(articles) < 100):
        score = scorer.score(article, company)
        relevant = score >= RELEVANCE_THRESHOLD
        if only_relevant and not relevant:
            continue
        results.append({"id": article.id, "title": article.title, "score": score, "relevant": relevant})

    logger.info(f"{sum(1 for r in results if r['relevant'])} of {len(articles)} articles relevant to {company}")
    return {"company": company, "threshold": RELEVANCE_THRESHOLD, "articles": results}


def run_dedupe(articles: List[Article], title_threshold: Optional[float]) -> dict:
    if title_threshold is None:
        title_threshold = float(get_config('dedupe.title_threshold', 0.75))

    unique, stats = deduplicate_articles(articles, title_threshold)
    return {
        "stats": stats.to_dict(),
        "articles": [article.to_dict() for article in unique],
    }


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point for the command-line script.
    """
    load_dotenv()
    args = parse_args(argv)
    setup_logging(args.verbose, args.log_file)

    try:
        articles = load_articles(args.input)
    except (OSError, ValueError) as e:
        logger.error(f"Could not load articles from {args.input}: {e}")
        return 1

    try:
        if args.command == "cluster":
            output = run_cluster(articles, args.threshold)
        elif args.command == "relevance":
            output = run_relevance(articles, args.company, args.only_relevant)
        else:
            output = run_dedupe(articles, args.title_threshold)
    except KeyboardInterrupt:
        logger.info("Process interrupted by user")
        return 1
    except Exception as e:
        logger.exception(f"An error occurred: {e}")
        return 1

    json.dump(output, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
