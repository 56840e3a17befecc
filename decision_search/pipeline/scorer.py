"""Relevance and personalization scoring for candidate items.

Score range: 0-1 (clamped) for every component.

  relevance        query match: base metric, category match, tag match ratio
  personalization  profile-weighted metrics plus the constraint adjustment
  final            relevance_weight * relevance + (1 - relevance_weight) * personalization
"""

import logging

from pydantic import BaseModel, ConfigDict

from decision_search.core.profiles import Profile, weights_for
from decision_search.core.schemas import CandidateItem, Constraints
from decision_search.pipeline.constraints import constraint_adjustment
from decision_search.pipeline.keywords import labels_match, matches_any

logger = logging.getLogger(__name__)

BASE_WEIGHT = 0.6
CATEGORY_WEIGHT = 0.25
TAG_WEIGHT = 0.15

MIN_READING_TIME = 5
MAX_READING_TIME = 60

NEUTRAL_SCORE = 0.5

PERSONALIZATION_METRICS = ("simplicity", "price", "reviews", "citations", "depth", "recency")


class ScoreBreakdown(BaseModel):
    """Component scores for one candidate, kept so explanations reuse them."""

    model_config = ConfigDict(frozen=True)

    item: CandidateItem
    relevance: float
    personalization: float
    final: float


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def category_matches(item: CandidateItem, keywords: list[str]) -> bool:
    return bool(item.category) and any(labels_match(kw, item.category) for kw in keywords)


def matching_tags(item: CandidateItem, keywords: list[str]) -> list[str]:
    """Tags (original casing, original order) that match any keyword."""
    return [tag for tag in item.tags if matches_any(tag, keywords)]


def relevance_score(item: CandidateItem, keywords: list[str]) -> float:
    """Query-match component, normalized by the weights of the active sub-factors."""
    score = item.relevance * BASE_WEIGHT
    factors = BASE_WEIGHT

    if item.category and keywords:
        if category_matches(item, keywords):
            score += CATEGORY_WEIGHT
        factors += CATEGORY_WEIGHT

    if item.tags and keywords:
        ratio = len(matching_tags(item, keywords)) / max(1, len(item.tags))
        score += ratio * TAG_WEIGHT
        factors += TAG_WEIGHT

    normalized = score / factors if factors > 0 else item.relevance
    return _clamp(normalized)


def reading_time_score(minutes: float) -> float:
    """Map reading time to desirability: 1.0 at <=5 min, 0.0 at >=60 min, linear between."""
    if minutes <= MIN_READING_TIME:
        return 1.0
    if minutes >= MAX_READING_TIME:
        return 0.0
    return 1.0 - (minutes - MIN_READING_TIME) / (MAX_READING_TIME - MIN_READING_TIME)


def personalization_score(
    item: CandidateItem,
    profile: Profile,
    constraints: Constraints | None = None,
) -> float:
    """Profile-preference component plus the bounded constraint adjustment.

    Args:
        item: The candidate to score.
        profile: Declared user profile; selects the weight vector.
        constraints: Optional constraints; None means none apply.

    Returns:
        Personalization score in [0, 1]. Relevance is not part of this vector.
    """
    weights = weights_for(profile)
    metrics = {name: getattr(item, name) for name in PERSONALIZATION_METRICS}
    metrics["reading_time"] = reading_time_score(item.reading_time)

    profile_score = 0.0
    total_weight = 0.0
    for name, value in metrics.items():
        weight = getattr(weights, name)
        if weight != 0:
            profile_score += value * weight
            total_weight += abs(weight)

    normalized = profile_score / total_weight if total_weight > 0 else NEUTRAL_SCORE
    normalized += constraint_adjustment(item, constraints or Constraints())
    return _clamp(normalized)


def score_candidate(
    item: CandidateItem,
    keywords: list[str],
    profile: Profile,
    constraints: Constraints | None = None,
    relevance_weight: float = 0.7,
) -> ScoreBreakdown:
    """Score a single candidate; relevance and personalization are computed independently."""
    relevance = relevance_score(item, keywords)
    personalization = personalization_score(item, profile, constraints)
    final = relevance_weight * relevance + (1.0 - relevance_weight) * personalization
    return ScoreBreakdown(
        item=item,
        relevance=relevance,
        personalization=personalization,
        final=_clamp(final),
    )


def score_candidates(
    items: list[CandidateItem],
    keywords: list[str],
    profile: Profile,
    constraints: Constraints | None = None,
    relevance_weight: float = 0.7,
) -> list[ScoreBreakdown]:
    """Score a batch, sorted by final score desc. Ties keep their input order."""
    scored = [
        score_candidate(item, keywords, profile, constraints, relevance_weight)
        for item in items
    ]
    scored.sort(key=lambda s: s.final, reverse=True)
    logger.debug("Scored %d candidates for profile '%s'", len(scored), profile.value)
    return scored
