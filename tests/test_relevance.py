"""Tests for company relevance scoring.

Run: python -m pytest tests/test_relevance.py -v
"""
import pytest

from newslens.core.relevance import (
    RELEVANCE_THRESHOLD,
    RelevanceScorer,
    filter_by_relevance,
    first_sentence,
    get_article_company_scores,
    is_relevant,
    relevance_score,
)
from tests.conftest import make_article


class TestScoring:
    """Point rules on realistic articles."""

    def test_saturated_score(self):
        """Title, first sentence, three mentions and an action keyword."""
        article = make_article(
            "1",
            "OpenAI announces GPT-5 as OpenAI rivals chase OpenAI",
            summary="OpenAI said the model ships today. Pricing was not disclosed.",
        )
        assert relevance_score(article, "openai") == 50 + 30 + 30 + 20

    def test_metadata_is_not_meta(self):
        article = make_article("1", "New metadata schema proposal", summary="The metadata schema is open.")
        assert relevance_score(article, "meta") == 0
        assert not is_relevant(article, "meta")

    def test_title_and_action(self):
        article = make_article("1", "Anthropic raises $2B", summary="The round was led by investors.")
        # title + one mention + "anthropic raises"
        assert relevance_score(article, "anthropic") == 50 + 10 + 20

    def test_passing_mention(self):
        article = make_article(
            "1",
            "Startups race to build agents",
            summary="Funding is flowing. Some founders previously worked at Google.",
        )
        assert relevance_score(article, "google") == 10
        assert not is_relevant(article, "google")

    def test_first_sentence_only(self):
        article = make_article(
            "1",
            "New model tops benchmark",
            summary="Mistral released the model on Monday. It is open weights.",
        )
        assert relevance_score(article, "mistral") == 30 + 10 + 20

    def test_action_keyword_before_company(self):
        article = make_article("1", "Anysphere launched Cursor 2.0")
        assert relevance_score(article, "cursor") == 50 + 10 + 20

    def test_action_keyword_must_be_adjacent(self):
        article = make_article("1", "OpenAI today announced a deal")
        assert relevance_score(article, "openai") == 50 + 10

    def test_action_bonus_applied_once(self):
        article = make_article("1", "Nvidia unveils chips", summary="Nvidia announced and Nvidia launched more.")
        # title, first sentence, three mentions, action
        assert relevance_score(article, "nvidia") == 50 + 30 + 30 + 20

    def test_spelling_variant_in_title(self):
        article = make_article("1", "Open AI ships new model")
        assert relevance_score(article, "openai") == 50 + 10

    def test_dict_articles(self):
        article = {"title": "Anthropic raises $2B", "summary": ""}
        assert relevance_score(article, "anthropic") == 80


class TestThreshold:
    """The relevance cutoff used by company feeds."""

    def test_threshold_value(self):
        assert RELEVANCE_THRESHOLD == 50

    def test_exactly_at_threshold_is_relevant(self):
        article = make_article(
            "1",
            "Chip stocks rally",
            summary="Nvidia shares rose. Analysts expect Nvidia to grow.",
        )
        assert relevance_score(article, "nvidia") == 50
        assert is_relevant(article, "nvidia")

    def test_filter_by_relevance_keeps_order(self):
        articles = [
            make_article("1", "Apple unveils Vision Pro 2"),
            make_article("2", "Best apple pie recipes"),
            make_article("3", "Apple opens store in Mumbai"),
        ]
        assert [a.id for a in filter_by_relevance(articles, "apple")] == ["1", "3"]


class TestEdgeCases:
    """Empty inputs never raise."""

    def test_empty_slug(self):
        article = make_article("1", "Anything at all")
        assert relevance_score(article, "") == 0
        assert relevance_score(article, "   ") == 0

    def test_empty_article(self):
        assert relevance_score(make_article("1", ""), "openai") == 0
        assert relevance_score({}, "openai") == 0

    def test_uppercase_slug(self):
        article = make_article("1", "Anthropic raises $2B")
        assert relevance_score(article, "Anthropic") == 80

    def test_scores_never_negative(self):
        articles = [
            make_article("1", ""),
            make_article("2", "metadata", summary="!!!"),
            make_article("3", "OpenAI", summary="."),
        ]
        for article in articles:
            for slug in ("openai", "meta", "xai", "unknown-co"):
                assert relevance_score(article, slug) >= 0

    def test_first_sentence(self):
        assert first_sentence("One. Two! Three?") == "One"
        assert first_sentence("No terminator") == "No terminator"
        assert first_sentence("") == ""


class TestCompanyScores:
    """Scores for every company an article is tagged with."""

    def test_scores_each_company_once(self):
        article = make_article(
            "1",
            "Microsoft invests in OpenAI",
            companies=["openai", "microsoft", "openai", "google"],
        )
        scores = get_article_company_scores(article)
        assert scores == {"openai": 60, "microsoft": 60, "google": 0}

    def test_no_companies(self):
        assert get_article_company_scores(make_article("1", "Alpha")) == {}

    def test_custom_scorer(self):
        scorer = RelevanceScorer()
        article = make_article("1", "xAI releases Grok 3")
        assert scorer.score(article, "xai") == 50 + 10 + 20
        assert scorer.is_relevant(article, "xai")
