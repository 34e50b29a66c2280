"""Shared fixtures for newslens tests."""
from datetime import datetime, timedelta, timezone

import pytest

from newslens.core.article import Article

BASE_TIME = datetime(2025, 1, 10, 12, 0, tzinfo=timezone.utc)


def make_article(
    id,
    title,
    category="ai",
    companies=None,
    hours_ago=0,
    summary="",
    published_at=None,
    source_url=None,
):
    """Build an article published ``hours_ago`` before BASE_TIME."""
    if published_at is None:
        published_at = BASE_TIME - timedelta(hours=hours_ago)
    return Article(
        id=id,
        title=title,
        summary=summary,
        category=category,
        companies=list(companies or []),
        published_at=published_at,
        source_url=source_url,
    )


@pytest.fixture
def article_factory():
    return make_article
