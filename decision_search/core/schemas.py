"""Core data models for the decision-aware search engine."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from decision_search.core.profiles import Profile, valid_profiles

DEFAULT_READING_TIME = 15

METRIC_FIELDS = ("relevance", "simplicity", "price", "reviews", "citations", "depth", "recency")

SUPPORTED_CURRENCIES = ("USD", "EUR", "GBP", "INR", "JPY", "CAD", "AUD", "SGD", "HKD", "MXN")


class SkillLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


def valid_skill_levels() -> list[str]:
    return [s.value for s in SkillLevel]


class CandidateItem(BaseModel):
    """A content item that can be ranked for a query.

    Frozen: scores live on RankedResult, never on the item itself.
    Missing metrics default to 0 and missing reading time to 15 minutes.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int | str
    title: str
    url: str = ""
    summary: str = ""
    category: str = ""
    tags: tuple[str, ...] = ()
    relevance: float = 0.0
    simplicity: float = 0.0
    price: float = 0.0
    reviews: float = 0.0
    citations: float = 0.0
    depth: float = 0.0
    recency: float = 0.0
    reading_time: int = Field(default=DEFAULT_READING_TIME, alias="readingTime")

    @field_validator("url", "summary", "category", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("tags", mode="before")
    @classmethod
    def tags_default(cls, v: Any) -> Any:
        if v is None:
            return ()
        if isinstance(v, str):
            return (v,)
        return v

    @field_validator(*METRIC_FIELDS, mode="before")
    @classmethod
    def metric_in_unit_range(cls, v: Any) -> float:
        if v is None:
            return 0.0
        return max(0.0, min(1.0, float(v)))

    @field_validator("reading_time", mode="before")
    @classmethod
    def reading_time_positive(cls, v: Any) -> int:
        if v is None:
            return DEFAULT_READING_TIME
        minutes = int(float(v))
        return minutes if minutes > 0 else DEFAULT_READING_TIME

    def labels(self) -> list[str]:
        """Category plus tags, lower-cased, empty labels dropped."""
        return [label.lower() for label in (self.category, *self.tags) if label]


class Constraints(BaseModel):
    """Optional user-declared constraints. An unset field is simply not applied."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    budget: bool = False
    budget_amount: float | None = Field(default=None, ge=0.0, alias="budgetAmount")
    currency: str = "USD"
    reading_time: int | None = Field(default=None, gt=0, alias="readingTime")
    skill_level: SkillLevel | None = Field(default=None, alias="skillLevel")

    @model_validator(mode="before")
    @classmethod
    def amount_implies_budget(cls, data: Any) -> Any:
        if isinstance(data, dict):
            amount = data.get("budget_amount", data.get("budgetAmount"))
            if amount is not None and not data.get("budget"):
                data = {**data, "budget": True}
        return data

    @field_validator("currency", mode="before")
    @classmethod
    def currency_supported(cls, v: Any) -> str:
        if v is None or v == "":
            return "USD"
        v = str(v).upper().strip()
        if v not in SUPPORTED_CURRENCIES:
            msg = f"currency must be one of {list(SUPPORTED_CURRENCIES)}, got '{v}'"
            raise ValueError(msg)
        return v

    @field_validator("skill_level", mode="before")
    @classmethod
    def skill_level_in_allowed(cls, v: Any) -> Any:
        if v is None or v == "":
            return None
        if isinstance(v, SkillLevel):
            return v
        v = str(v).lower().strip()
        if v not in valid_skill_levels():
            msg = f"skill_level must be one of {valid_skill_levels()}, got '{v}'"
            raise ValueError(msg)
        return v

    @property
    def is_empty(self) -> bool:
        return not self.budget and self.reading_time is None and self.skill_level is None


class SearchRequest(BaseModel):
    """A validated search request."""

    query: str
    profile: Profile = Profile.CASUAL
    constraints: Constraints = Field(default_factory=Constraints)

    @field_validator("query")
    @classmethod
    def query_not_empty(cls, v: str) -> str:
        if not v.strip():
            msg = "query must not be empty"
            raise ValueError(msg)
        return v.strip()

    @field_validator("profile", mode="before")
    @classmethod
    def profile_in_allowed(cls, v: Any) -> Any:
        if v is None or v == "":
            return Profile.CASUAL
        if isinstance(v, Profile):
            return v
        v = str(v).lower().strip()
        if v not in valid_profiles():
            msg = f"profile must be one of {valid_profiles()}, got '{v}'"
            raise ValueError(msg)
        return v


class RankedResult(BaseModel):
    """A candidate item with its scores, profile tag, and justification lines."""

    model_config = ConfigDict(frozen=True)

    item: CandidateItem
    final_score: float = Field(ge=0.0, le=1.0)
    relevance_score: float = Field(ge=0.0, le=1.0)
    personalization_score: float = Field(ge=0.0, le=1.0)
    profile: Profile
    explanations: list[str] = Field(min_length=1)


class DataSource(str, Enum):
    PRIMARY = "primary"
    FALLBACK = "fallback"


class ResultStatus(str, Enum):
    RANKED = "ranked"
    NO_MATCH = "no_match"


class ResponseMetadata(BaseModel):
    search_time: datetime = Field(default_factory=datetime.now)
    response_time_ms: float = 0.0
    data_source: DataSource = DataSource.PRIMARY
    status: ResultStatus = ResultStatus.RANKED


class SearchResponse(BaseModel):
    """Successful search: ranked results (possibly none) plus metadata."""

    success: bool = True
    query: str
    profile: Profile
    total_results: int
    results: list[RankedResult]
    metadata: ResponseMetadata


class ErrorResponse(BaseModel):
    """Rejected request, with the enumerations a caller may choose from."""

    success: bool = False
    error: str
    valid_values: dict[str, list[str]] = Field(default_factory=dict)

    @classmethod
    def from_validation_error(cls, exc: ValidationError) -> "ErrorResponse":
        messages = []
        for err in exc.errors():
            loc = ".".join(str(part) for part in err["loc"])
            messages.append(f"{loc}: {err['msg']}" if loc else err["msg"])
        return cls(error="; ".join(messages), valid_values=valid_request_values())


def valid_request_values() -> dict[str, list[str]]:
    """Enumerated values accepted by SearchRequest."""
    return {
        "profile": valid_profiles(),
        "skill_level": valid_skill_levels(),
        "currency": list(SUPPORTED_CURRENCIES),
    }
