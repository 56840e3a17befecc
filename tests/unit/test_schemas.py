"""Tests for core data models."""

import pytest
from pydantic import ValidationError

from decision_search.core.profiles import Profile
from decision_search.core.schemas import (
    DEFAULT_READING_TIME,
    CandidateItem,
    Constraints,
    ErrorResponse,
    RankedResult,
    SearchRequest,
    SkillLevel,
)


class TestCandidateItem:
    def test_missing_metrics_default(self) -> None:
        item = CandidateItem(id=1, title="Bare")
        assert item.relevance == 0.0
        assert item.depth == 0.0
        assert item.reading_time == DEFAULT_READING_TIME == 15
        assert item.tags == ()
        assert item.category == ""

    def test_camel_case_reading_time(self) -> None:
        item = CandidateItem.model_validate({"id": 1, "title": "T", "readingTime": 25})
        assert item.reading_time == 25

    def test_nulls_get_defaults(self) -> None:
        item = CandidateItem.model_validate({
            "id": "a",
            "title": "T",
            "category": None,
            "tags": None,
            "price": None,
            "readingTime": None,
        })
        assert item.category == ""
        assert item.tags == ()
        assert item.price == 0.0
        assert item.reading_time == 15

    def test_non_positive_reading_time_defaults(self) -> None:
        assert CandidateItem(id=1, title="T", reading_time=0).reading_time == 15

    def test_metrics_clamped(self) -> None:
        item = CandidateItem(id=1, title="T", relevance=1.4, price=-0.2)
        assert item.relevance == 1.0
        assert item.price == 0.0

    def test_frozen(self) -> None:
        item = CandidateItem(id=1, title="T")
        with pytest.raises(ValidationError):
            item.title = "Changed"  # type: ignore[misc]

    def test_labels(self) -> None:
        item = CandidateItem(id=1, title="T", category="Course", tags=("Machine Learning", ""))
        assert item.labels() == ["course", "machine learning"]

    def test_labels_without_category(self) -> None:
        assert CandidateItem(id=1, title="T", tags=("python",)).labels() == ["python"]


class TestConstraints:
    def test_defaults_are_empty(self) -> None:
        c = Constraints()
        assert c.is_empty
        assert c.currency == "USD"

    def test_amount_implies_budget(self) -> None:
        c = Constraints(budget_amount=50)
        assert c.budget is True
        assert not c.is_empty

    def test_camel_case_aliases(self) -> None:
        c = Constraints.model_validate({"budgetAmount": 20, "readingTime": 30, "skillLevel": "advanced"})
        assert c.budget is True
        assert c.reading_time == 30
        assert c.skill_level is SkillLevel.ADVANCED

    def test_skill_level_normalized(self) -> None:
        assert Constraints(skill_level=" Beginner ").skill_level is SkillLevel.BEGINNER

    def test_blank_skill_level_is_unset(self) -> None:
        assert Constraints(skill_level="").skill_level is None

    def test_unknown_skill_level_lists_valid_values(self) -> None:
        with pytest.raises(ValidationError, match="beginner"):
            Constraints(skill_level="expert")

    def test_currency_normalized(self) -> None:
        assert Constraints(currency="eur").currency == "EUR"

    def test_unknown_currency(self) -> None:
        with pytest.raises(ValidationError, match="currency"):
            Constraints(currency="XYZ")

    def test_reading_time_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            Constraints(reading_time=0)


class TestSearchRequest:
    def test_query_stripped(self) -> None:
        assert SearchRequest(query="  machine learning  ").query == "machine learning"

    def test_empty_query_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SearchRequest(query="   ")

    def test_default_profile(self) -> None:
        assert SearchRequest(query="python").profile is Profile.CASUAL

    def test_profile_normalized(self) -> None:
        assert SearchRequest(query="python", profile="Student").profile is Profile.STUDENT

    def test_unknown_profile_lists_valid_values(self) -> None:
        with pytest.raises(ValidationError, match="researcher"):
            SearchRequest(query="python", profile="wizard")


class TestErrorResponse:
    def test_from_validation_error(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            SearchRequest(query="python", profile="wizard")
        response = ErrorResponse.from_validation_error(exc_info.value)
        assert response.success is False
        assert "profile" in response.error
        assert response.valid_values["profile"] == ["student", "shopper", "researcher", "casual"]
        assert response.valid_values["skill_level"] == ["beginner", "intermediate", "advanced"]
        assert "USD" in response.valid_values["currency"]


class TestRankedResult:
    def test_requires_explanation(self) -> None:
        with pytest.raises(ValidationError):
            RankedResult(
                item=CandidateItem(id=1, title="T"),
                final_score=0.5,
                relevance_score=0.5,
                personalization_score=0.5,
                profile=Profile.CASUAL,
                explanations=[],
            )

    def test_score_bounds(self) -> None:
        with pytest.raises(ValidationError):
            RankedResult(
                item=CandidateItem(id=1, title="T"),
                final_score=1.2,
                relevance_score=0.5,
                personalization_score=0.5,
                profile=Profile.CASUAL,
                explanations=["ok"],
            )
