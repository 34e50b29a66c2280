"""
Article data model for newslens.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Union

logger = logging.getLogger(__name__)


class Category(str, Enum):
    """
    Fixed set of feed categories an article can belong to.
    """
    AI = "ai"
    STARTUP = "startup"
    SCIENCE = "science"
    DESIGN = "design"
    SPACE = "space"
    DEV = "dev"


def parse_timestamp(value: Union[datetime, str, None]) -> Optional[datetime]:
    """
    Parse a publication timestamp into an aware UTC datetime.

    Naive datetimes are assumed to already be UTC. Anything that cannot be
    parsed returns None, which the scorers treat as "infinitely far away".

    Args:
        value: A datetime, an ISO 8601 string, or None

    Returns:
        Aware datetime in UTC, or None
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        # fromisoformat only learned the trailing "Z" in 3.11
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            logger.debug(f"Unparsable timestamp: {value!r}")
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _as_list(value: Any) -> List[str]:
    # A lone company id arrives as a plain string; never split it into letters
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


@dataclass
class Article:
    """
    A news item as supplied by the storage layer.

    Read-only as far as newslens is concerned: clustering and scoring never
    modify an article.
    """
    id: str
    title: str
    summary: str
    category: Union[Category, str]
    companies: List[str] = field(default_factory=list)
    published_at: Union[datetime, str, None] = None
    source: Optional[str] = None
    source_url: Optional[str] = None
    body: Optional[str] = None

    @property
    def published(self) -> Optional[datetime]:
        """Publication time as an aware UTC datetime, or None if unusable."""
        return parse_timestamp(self.published_at)

    @property
    def company_set(self) -> FrozenSet[str]:
        """Entity identifiers with duplicates removed."""
        return frozenset(self.companies or ())

    @classmethod
    def from_dict(cls, record: Dict[str, Any]) -> "Article":
        """
        Build an Article from a storage-layer record.

        Accepts both the camelCase keys used by the web feed
        (``publishedAt``, ``sourceUrl``) and snake_case keys.

        Args:
            record: Mapping with at least an ``id``

        Returns:
            Article instance

        Raises:
            ValueError: If the record has no id
        """
        article_id = record.get("id")
        if article_id is None or str(article_id) == "":
            raise ValueError(f"Article record without an id: {record!r}")

        category = record.get("category") or ""
        try:
            category = Category(category)
        except ValueError:
            # Unknown categories still compare by value
            pass

        return cls(
            id=str(article_id),
            title=record.get("title") or "",
            summary=record.get("summary") or "",
            category=category,
            companies=_as_list(record.get("companies")),
            published_at=record.get("publishedAt", record.get("published_at")),
            source=record.get("source"),
            source_url=record.get("sourceUrl", record.get("source_url")),
            body=record.get("body"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize back to the camelCase shape the feed consumes."""
        published = self.published
        category = self.category.value if isinstance(self.category, Category) else self.category
        return {
            "id": self.id,
            "title": self.title,
            "summary": self.summary,
            "category": category,
            "companies": list(self.companies),
            "publishedAt": published.isoformat() if published else self.published_at,
            "source": self.source,
            "sourceUrl": self.source_url,
        }
