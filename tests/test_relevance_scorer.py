"""
Tests for the relevance scorer.

Covers term frequency, boost tiers, rating factor and ranking order.
"""

import pytest

from catalog_search.domain.entities import MatchType
from catalog_search.search.relevance_scorer import RelevanceScorer
from factories import make_item


@pytest.fixture
def scorer():
    """Create relevance scorer."""
    return RelevanceScorer()


# ============================================================================
# Term Frequency
# ============================================================================


class TestTermFrequency:
    """Test term-frequency scoring."""

    def test_title_and_description_weights(self, scorer, pashmina_scarf):
        """Test title hits weigh 2.0 and description hits 1.0."""
        # nepali: 1 title token; scarf: 1 title token + 1 description token
        score = scorer.term_frequency_score(pashmina_scarf, "nepali scarf")

        assert score == pytest.approx(5.0)

    def test_substring_inside_token_counts(self, scorer):
        """Test a query token contained in a longer word counts."""
        item = make_item("1", "Woolen Shawl", "")

        assert scorer.term_frequency_score(item, "wool") == pytest.approx(2.0)

    def test_each_occurrence_counts(self, scorer):
        """Test repeated tokens are counted every time."""
        item = make_item("1", "Tea Tea", "tea leaves for tea lovers")

        assert scorer.term_frequency_score(item, "tea") == pytest.approx(2 * 2.0 + 2 * 1.0)

    def test_case_insensitive(self, scorer):
        """Test term frequency ignores case."""
        item = make_item("1", "SINGING BOWL", "Brass Bowl")

        assert scorer.term_frequency_score(item, "bowl") == pytest.approx(3.0)

    def test_no_hits(self, scorer, black_tea):
        """Test unrelated query scores zero."""
        assert scorer.term_frequency_score(black_tea, "scarf") == 0.0


# ============================================================================
# Boost Factors
# ============================================================================


class TestBoostFactor:
    """Test match-type boosts."""

    def test_exact_title_match(self, scorer):
        """Test exact title match gets 3x boost, ignoring case and padding."""
        item = make_item("1", "  Singing Bowl ", "brass")

        assert scorer.match_type(item, "singing bowl") == MatchType.EXACT
        assert scorer.boost_factor(item, "singing bowl") == 3.0

    def test_title_contains_match(self, scorer):
        """Test title containing the query gets 2x boost."""
        item = make_item("1", "Tibetan Singing Bowl", "brass")

        assert scorer.match_type(item, "singing bowl") == MatchType.TITLE
        assert scorer.boost_factor(item, "singing bowl") == 2.0

    def test_description_contains_match(self, scorer):
        """Test description containing the query gets 1x boost."""
        item = make_item("1", "Meditation Set", "includes a singing bowl and mallet")

        assert scorer.match_type(item, "singing bowl") == MatchType.DESCRIPTION
        assert scorer.boost_factor(item, "singing bowl") == 1.0

    def test_fuzzy_only_match(self, scorer, pashmina_scarf):
        """Test candidates without a whole-query match get 0.5x boost."""
        assert scorer.match_type(pashmina_scarf, "nepali scarf") == MatchType.FUZZY
        assert scorer.boost_factor(pashmina_scarf, "nepali scarf") == 0.5


# ============================================================================
# Combined Score
# ============================================================================


class TestScore:
    """Test combined relevance score."""

    def test_rating_factor(self, scorer):
        """Test rating adds ten percent per point."""
        assert scorer.rating_factor(make_item("1", "x", weighted_rating=4.5)) == pytest.approx(1.45)
        assert scorer.rating_factor(make_item("2", "x")) == pytest.approx(1.0)

    def test_score_formula(self, scorer, pashmina_scarf):
        """Test score multiplies term frequency, boost and rating factor."""
        result = scorer.score(pashmina_scarf, "nepali scarf")

        assert result.score == pytest.approx(5.0 * 0.5 * 1.45)
        assert result.match_type == MatchType.FUZZY
        assert result.item is pashmina_scarf

    def test_exact_beats_contains(self, scorer):
        """Test exact title scores higher than title-contains, all else equal."""
        exact = make_item("1", "Scarf", "", weighted_rating=3.0)
        contains = make_item("2", "Red Scarf", "", weighted_rating=3.0)

        exact_score = scorer.score(exact, "scarf").score
        contains_score = scorer.score(contains, "scarf").score

        assert exact_score > contains_score
        assert exact_score == pytest.approx(2.0 * 3.0 * 1.3)
        assert contains_score == pytest.approx(2.0 * 2.0 * 1.3)

    def test_title_beats_description(self, scorer):
        """Test title match outranks a description-only match."""
        title_item = make_item("1", "Yak Wool Shawl", "soft")
        description_item = make_item("2", "Shawl", "made of yak wool")

        assert (
            scorer.score(title_item, "yak wool").score
            > scorer.score(description_item, "yak wool").score
        )

    def test_fuzzy_only_candidate_scores_zero(self, scorer):
        """Test a typo-only candidate has no term frequency."""
        item = make_item("1", "Silk Scarf", "")

        assert scorer.score(item, "scraf").score == 0.0

    def test_to_dict_includes_relevance(self, scorer, black_tea):
        """Test serialized result carries score and match type."""
        data = scorer.score(black_tea, "nepali black tea").to_dict()

        assert data["id"] == "b"
        assert data["_relevance"]["match_type"] == "exact"
        assert data["_relevance"]["score"] > 0


# ============================================================================
# Ranking
# ============================================================================


class TestRank:
    """Test ranking of candidate sets."""

    def test_sorted_non_increasing(self, scorer, sample_catalog):
        """Test ranked scores never increase."""
        ranked = scorer.rank(sample_catalog, "scarf")
        scores = [result.score for result in ranked]

        assert scores == sorted(scores, reverse=True)
        assert len(ranked) == len(sample_catalog)

    def test_scarf_ranks_above_tea(self, scorer, pashmina_scarf, black_tea):
        """Test the scarf outranks the tea for 'nepali scarf'."""
        ranked = scorer.rank([black_tea, pashmina_scarf], "nepali scarf")

        assert ranked[0].item is pashmina_scarf
        assert ranked[1].item is black_tea
        assert ranked[0].score > ranked[1].score

    def test_higher_rating_wins_textual_tie(self, scorer):
        """Test rating breaks otherwise equal textual relevance."""
        low = make_item("1", "Brass Bowl", "", weighted_rating=2.0)
        high = make_item("2", "Brass Bowl", "", weighted_rating=4.0)

        ranked = scorer.rank([low, high], "bowl")

        assert [result.item.id for result in ranked] == ["2", "1"]

    def test_ties_keep_retrieval_order(self, scorer):
        """Test equal scores keep their input order."""
        items = [make_item(str(i), f"Wool Scarf {i}", "") for i in range(5)]

        ranked = scorer.rank(items, "scarf")

        assert [result.item.id for result in ranked] == ["0", "1", "2", "3", "4"]

    def test_empty_candidates(self, scorer):
        """Test empty input ranks to empty output."""
        assert scorer.rank([], "scarf") == []

    def test_single_candidate(self, scorer, black_tea):
        """Test single candidate is returned with its score."""
        ranked = scorer.rank([black_tea], "tea")

        assert len(ranked) == 1
        assert ranked[0].item is black_tea


def test_get_stats(scorer):
    """Test scorer stats expose weights."""
    stats = scorer.get_stats()

    assert stats["term_weights"] == {"title": 2.0, "description": 1.0}
    assert stats["boost_factors"]["exact"] == 3.0
    assert stats["rating_weight"] == 0.1
