"""Tests for relevance, reading-time, and personalization scoring."""

import pytest

from decision_search.core.profiles import Profile
from decision_search.core.schemas import CandidateItem, Constraints
from decision_search.pipeline.scorer import (
    personalization_score,
    reading_time_score,
    relevance_score,
    score_candidate,
    score_candidates,
)


def _item(
    *,
    id: int = 1,
    category: str = "",
    tags: tuple[str, ...] = (),
    **metrics: float,
) -> CandidateItem:
    return CandidateItem(id=id, title=f"Item {id}", category=category, tags=tags, **metrics)


# ---------------------------------------------------------------------------
# Relevance
# ---------------------------------------------------------------------------


class TestRelevanceScore:
    def test_no_keywords_uses_base_metric(self) -> None:
        item = _item(category="course", tags=("python",), relevance=0.9)
        assert relevance_score(item, []) == pytest.approx(0.9)

    def test_tag_matches_without_category_match(self) -> None:
        item = _item(category="course", tags=("machine learning", "tutorial"), relevance=0.9)
        keywords = ["machine", "learning", "tutorial"]
        # (0.54 + 0 + 1.0 * 0.15) / 1.0
        assert relevance_score(item, keywords) == pytest.approx(0.69)

    def test_category_match(self) -> None:
        item = _item(category="tutorial", relevance=0.9)
        # (0.54 + 0.25) / 0.85
        assert relevance_score(item, ["tutorial"]) == pytest.approx(0.79 / 0.85)

    def test_partial_tag_ratio(self) -> None:
        item = _item(tags=("python", "cooking"), relevance=0.5)
        # (0.3 + 0.5 * 0.15) / 0.75
        assert relevance_score(item, ["python"]) == pytest.approx(0.5)

    def test_full_match_clamped_to_one(self) -> None:
        item = _item(category="python", tags=("python",), relevance=1.0)
        assert relevance_score(item, ["python"]) == pytest.approx(1.0)
        assert relevance_score(item, ["python"]) <= 1.0

    def test_zero_relevance_no_match(self) -> None:
        item = _item(category="recipe", tags=("cooking",), relevance=0.0)
        assert relevance_score(item, ["python"]) == 0.0

    def test_category_match_raises_score(self) -> None:
        matched = _item(category="course", relevance=0.5)
        unmatched = _item(category="recipe", relevance=0.5)
        assert relevance_score(matched, ["course"]) > relevance_score(unmatched, ["course"])


# ---------------------------------------------------------------------------
# Reading time
# ---------------------------------------------------------------------------


class TestReadingTimeScore:
    def test_anchor_points(self) -> None:
        assert reading_time_score(5) == 1.0
        assert reading_time_score(60) == 0.0
        assert reading_time_score(32.5) == pytest.approx(0.5)

    def test_outside_range(self) -> None:
        assert reading_time_score(1) == 1.0
        assert reading_time_score(120) == 0.0

    def test_non_increasing(self) -> None:
        scores = [reading_time_score(t) for t in range(0, 80)]
        assert all(a >= b for a, b in zip(scores, scores[1:]))


# ---------------------------------------------------------------------------
# Personalization
# ---------------------------------------------------------------------------


class TestPersonalizationScore:
    def test_researcher_ideal_item(self) -> None:
        item = _item(citations=1.0, depth=1.0, reviews=1.0, recency=1.0)
        assert personalization_score(item, Profile.RESEARCHER) == pytest.approx(1.0)

    def test_researcher_empty_item(self) -> None:
        assert personalization_score(_item(), Profile.RESEARCHER) == 0.0

    def test_shopper_weighted_average(self) -> None:
        item = _item(price=0.5, reviews=0.5)
        # (0.5 * 0.35 + 0.5 * 0.30) / (0.35 + 0.30 + 0.10 + 0.05)
        assert personalization_score(item, Profile.SHOPPER) == pytest.approx(0.40625)

    def test_budget_constraint_applied(self) -> None:
        item = _item(price=0.5, reviews=0.5)
        result = personalization_score(item, Profile.SHOPPER, Constraints(budget=True))
        assert result == pytest.approx(0.30625)

    def test_relevance_not_in_vector(self) -> None:
        low = _item(relevance=0.0, simplicity=0.5)
        high = _item(relevance=1.0, simplicity=0.5)
        assert personalization_score(low, Profile.CASUAL) == personalization_score(high, Profile.CASUAL)

    def test_casual_reading_time_weight(self) -> None:
        full = dict(simplicity=1.0, recency=1.0, reviews=1.0, price=1.0)
        long_read = _item(reading_time=60, **full)
        short_read = _item(reading_time=5, **full)
        # 0.60 / 0.75 and (0.60 - 0.15) / 0.75
        assert personalization_score(long_read, Profile.CASUAL) == pytest.approx(0.8)
        assert personalization_score(short_read, Profile.CASUAL) == pytest.approx(0.6)

    def test_never_negative(self) -> None:
        item = _item(reading_time=5)
        assert personalization_score(item, Profile.STUDENT) == 0.0

    def test_clamped_to_one_with_bonus(self) -> None:
        item = _item(citations=1.0, depth=1.0, reviews=1.0, recency=1.0)
        result = personalization_score(
            item, Profile.RESEARCHER, Constraints(skill_level="advanced"),
        )
        assert result == 1.0

    def test_every_profile_in_range(self) -> None:
        item = _item(simplicity=0.3, price=0.9, reviews=0.2, citations=0.7, depth=0.4, recency=0.1)
        for profile in Profile:
            assert 0.0 <= personalization_score(item, profile) <= 1.0


# ---------------------------------------------------------------------------
# Combination
# ---------------------------------------------------------------------------


class TestScoreCandidate:
    def test_final_is_weighted_blend(self) -> None:
        item = _item(category="course", tags=("python",), relevance=0.8, simplicity=0.6, recency=0.4)
        s = score_candidate(item, ["python"], Profile.STUDENT, Constraints(reading_time=30))
        assert s.final == pytest.approx(0.7 * s.relevance + 0.3 * s.personalization)

    def test_scores_in_range(self) -> None:
        item = _item(category="course", relevance=1.0, price=0.0, depth=1.0)
        constraints = Constraints(budget=True, reading_time=5, skill_level="beginner")
        s = score_candidate(item, ["course"], Profile.SHOPPER, constraints)
        for value in (s.relevance, s.personalization, s.final):
            assert 0.0 <= value <= 1.0

    def test_custom_relevance_weight(self) -> None:
        item = _item(relevance=0.8, simplicity=0.6)
        s = score_candidate(item, [], Profile.CASUAL, relevance_weight=0.5)
        assert s.final == pytest.approx(0.5 * s.relevance + 0.5 * s.personalization)


class TestScoreCandidates:
    def test_sorted_descending(self) -> None:
        items = [_item(id=1, relevance=0.4), _item(id=2, relevance=0.9), _item(id=3, relevance=0.7)]
        scored = score_candidates(items, [], Profile.CASUAL)
        assert [s.item.id for s in scored] == [2, 3, 1]

    def test_ties_keep_input_order(self) -> None:
        items = [_item(id=i, relevance=0.5) for i in (4, 2, 9)]
        scored = score_candidates(items, [], Profile.CASUAL)
        assert [s.item.id for s in scored] == [4, 2, 9]

    def test_empty_list(self) -> None:
        assert score_candidates([], [], Profile.CASUAL) == []
