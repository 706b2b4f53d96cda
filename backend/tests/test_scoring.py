# @TASK S2-T2.2 - Relevance scoring and highlight tests
# @TEST tests/test_scoring.py

"""Tests for relevance scoring and highlight extraction.

Pure functions only; no database involved.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from app.search.scoring import calculate_relevance_score, highlight_text, score_record
from tests.conftest import make_news

NOW = datetime(2026, 3, 15, 12, 0, 0, tzinfo=UTC)
OLD = NOW - timedelta(days=30)


def _score(title="", excerpt=None, content=None, query="budget", **kwargs):
    kwargs.setdefault("published_at", OLD)
    return calculate_relevance_score(title, excerpt, content, query.lower(), now=NOW, **kwargs)


# ---------------------------------------------------------------------------
# 1. Title matching
# ---------------------------------------------------------------------------


class TestTitleScoring:
    """Exact, substring and whole-word title matches."""

    def test_exact_title_match(self):
        """Exact case-insensitive title match scores 100 plus word matches."""
        # +100 exact, +30 for the single matching word
        assert _score(title="Budget", query="budget") == 130

    def test_exact_match_does_not_also_add_substring_bonus(self):
        """The +50 substring bonus only applies when the title is not an exact match."""
        assert _score(title="budget", query="budget") == 100 + 30

    def test_substring_title_match(self):
        """Title containing the query scores 50 plus word matches."""
        assert _score(title="The budget debate", query="budget") == 50 + 30

    def test_substring_inside_word_has_no_word_bonus(self):
        """A substring inside a longer word does not count as a word match."""
        assert _score(title="Budgetary rules", query="budget") == 50

    def test_word_matches_without_full_substring(self):
        """Each query word found in the title adds 30 even without a phrase match."""
        assert _score(title="Election results for 2024", query="2024 election") == 60

    def test_repeated_query_words_count_each_time(self):
        """Duplicate query words are each scored."""
        assert _score(title="tax news", query="tax tax") == 60

    def test_budget_2024_exact_title(self):
        """Exact title 'Budget 2024' earns the exact bonus plus two word matches."""
        score = _score(title="Budget 2024", query="Budget 2024")
        assert score >= 100 + 30 * 2

    def test_title_ordering_is_monotonic(self):
        """exact >= substring >= no match for otherwise identical records."""
        exact = _score(title="budget", query="budget")
        partial = _score(title="budget cuts", query="budget")
        none = _score(title="weather", query="budget")
        assert exact >= partial >= none
        assert none == 0


# ---------------------------------------------------------------------------
# 2. Body, flags and recency
# ---------------------------------------------------------------------------


class TestBodyAndBoosts:
    """Excerpt/content matches, flags and recency boosts."""

    def test_excerpt_match(self):
        assert _score(excerpt="All about the BUDGET") == 20

    def test_content_match(self):
        assert _score(content="budget lines") == 10

    def test_missing_content_scores_nothing(self):
        """Content that was not fetched (None) contributes nothing."""
        assert _score(content=None) == 0

    def test_featured_and_breaking(self):
        assert _score(is_featured=True) == 5
        assert _score(is_breaking=True) == 5
        assert _score(is_featured=True, is_breaking=True) == 10

    def test_published_this_week(self):
        assert _score(published_at=NOW - timedelta(days=3)) == 5

    def test_published_today(self):
        """Within a day both recency thresholds apply."""
        assert _score(published_at=NOW - timedelta(hours=2)) == 15

    def test_recent_scores_at_least_15_more_than_old(self):
        recent = _score(title="budget", published_at=NOW - timedelta(hours=5))
        old = _score(title="budget", published_at=NOW - timedelta(days=30))
        assert recent - old >= 15

    def test_unpublished_date_has_no_recency_boost(self):
        assert _score(published_at=None) == 0

    def test_naive_published_at_is_treated_as_utc(self):
        naive = (NOW - timedelta(hours=1)).replace(tzinfo=None)
        assert _score(published_at=naive) == 15

    def test_score_is_non_negative_integer(self):
        score = _score(title="x", excerpt="y", content="z")
        assert isinstance(score, int)
        assert score >= 0


# ---------------------------------------------------------------------------
# 3. Highlight extraction
# ---------------------------------------------------------------------------


class TestHighlightText:
    """Snippet extraction around query occurrences."""

    def test_empty_inputs(self):
        assert highlight_text("", "q") == []
        assert highlight_text(None, "q") == []
        assert highlight_text("text", "") == []

    def test_no_occurrence(self):
        assert highlight_text("nothing here", "budget") == []

    def test_short_text_snippet_is_whole_text(self):
        """Snippets are clamped to the text bounds."""
        assert highlight_text("The Budget", "budget") == ["The Budget"]

    def test_context_window(self):
        """Snippet spans 50 chars before and after the match."""
        text = "a" * 100 + "BUDGET" + "b" * 100
        (snippet,) = highlight_text(text, "budget")
        assert snippet == "a" * 50 + "BUDGET" + "b" * 50

    def test_at_most_three_snippets(self):
        text = " ".join(["budget"] * 10)
        snippets = highlight_text(text, "budget")
        assert len(snippets) == 3

    def test_snippets_are_literal_substrings(self):
        text = "Budget talks. " * 20 + "The final BUDGET vote."
        for snippet in highlight_text(text, "budget"):
            assert snippet in text

    def test_overlapping_matches_advance_by_one(self):
        """The scan resumes one character after each match start."""
        assert highlight_text("aaaa", "aa") == ["aaaa", "aaaa", "aaaa"]

    def test_original_case_is_preserved(self):
        assert highlight_text("Breaking NEWS today", "news") == ["Breaking NEWS today"]


# ---------------------------------------------------------------------------
# 4. Record scoring
# ---------------------------------------------------------------------------


class TestScoreRecord:
    """score_record combines the score with per-field highlights."""

    def test_highlights_for_title_and_excerpt(self):
        record = make_news(title="Budget 2024", excerpt="The budget was approved", published_at=OLD)

        score, highlights = score_record(record, "budget", "budget", now=NOW)

        assert score == 50 + 30 + 20
        assert highlights.title == ["Budget 2024"]
        assert highlights.excerpt == ["The budget was approved"]
        assert highlights.content == []

    def test_content_ignored_without_include_content(self):
        record = make_news(title="Other", content="budget in the body", published_at=OLD)

        score, highlights = score_record(record, "budget", "budget", now=NOW)

        assert score == 0
        assert highlights.content == []

    def test_content_scored_and_highlighted_with_include_content(self):
        record = make_news(title="Other", content="budget in the body", published_at=OLD)

        score, highlights = score_record(record, "budget", "budget", include_content=True, now=NOW)

        assert score == 10
        assert highlights.content == ["budget in the body"]

    def test_content_highlights_limited_to_first_500_chars(self):
        content = "x" * 600 + "budget"
        record = make_news(title="Other", content=content, published_at=OLD)

        score, highlights = score_record(record, "budget", "budget", include_content=True, now=NOW)

        assert score == 10
        assert highlights.content == []

    def test_missing_excerpt_has_no_highlights(self):
        record = make_news(title="Budget", excerpt=None, published_at=OLD)

        _, highlights = score_record(record, "budget", "budget", now=NOW)

        assert highlights.excerpt == []
