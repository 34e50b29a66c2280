"""
Company name matching for newslens.
"""
import re
from typing import Dict, Optional

# Slugs whose names collide with everyday words or are spelled several ways
COMPANY_PATTERNS: Dict[str, re.Pattern] = {
    'openai': re.compile(r'\bopen[\s\-.]?ai\b', re.IGNORECASE),
    'xai': re.compile(r'\bx\.?ai\b', re.IGNORECASE),
    'meta': re.compile(r'\bmeta\b(?!\s*data)', re.IGNORECASE),
    'linear': re.compile(r'\blinear\b(?!\s*regression)', re.IGNORECASE),
    'cursor': re.compile(r'\bcursor\b(?!\s*position)', re.IGNORECASE),
    'apple': re.compile(r'\bapple\b(?!\s*(?:pie|cider|tree))', re.IGNORECASE),
    'stripe': re.compile(r'\bstripe\b(?!\s*(?:pattern|shirt))', re.IGNORECASE),
    'slack': re.compile(r'\bslack\b(?!\s*(?:off|time))', re.IGNORECASE),
}


class CompanyPatternMatcher:
    """
    Maps a company slug to the regex used to find it in article text.
    """
    def __init__(self, overrides: Optional[Dict[str, re.Pattern]] = None):
        self.overrides = dict(COMPANY_PATTERNS if overrides is None else overrides)

    @staticmethod
    def generic_pattern(slug: str) -> re.Pattern:
        """Plain case-insensitive whole-word match of the slug."""
        return re.compile(r'\b' + re.escape(slug) + r'\b', re.IGNORECASE)

    def pattern_for(self, slug: str) -> re.Pattern:
        """
        Get the matching pattern for a company.

        Args:
            slug: Company identifier, e.g. "openai"

        Returns:
            Compiled case-insensitive pattern
        """
        slug = (slug or '').strip().lower()
        if slug in self.overrides:
            return self.overrides[slug]
        return self.generic_pattern(slug)

    def mentions(self, text: str, slug: str) -> int:
        """Count occurrences of the company in text."""
        if not (slug or '').strip():
            return 0
        return sum(1 for _ in self.pattern_for(slug).finditer(text or ''))
