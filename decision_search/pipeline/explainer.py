"""Human-readable justifications for ranked results.

Lines are derived from the same inputs used for scoring and only for signals
that cross CONTRIBUTION_THRESHOLD. Unmet constraints are never mentioned.
"""

import math

from decision_search.core.profiles import Profile, weights_for
from decision_search.core.schemas import CandidateItem, Constraints, SkillLevel
from decision_search.pipeline.scorer import category_matches, matching_tags

CONTRIBUTION_THRESHOLD = 0.6
INTERMEDIATE_DEPTH_THRESHOLD = 0.4
FALLBACK_RELEVANCE_THRESHOLD = 0.5

MAX_LISTED_TAGS = 3
MAX_PROFILE_FACTORS = 2

# (metric, minimum profile weight, label), in reporting order.
_PROFILE_FACTORS: list[tuple[str, float, str]] = [
    ("simplicity", 0.2, "Easy to understand"),
    ("price", 0.2, "Affordable"),
    ("reviews", 0.2, "Highly reviewed"),
    ("citations", 0.2, "Highly cited"),
    ("depth", 0.2, "Comprehensive and detailed"),
    ("recency", 0.15, "Recently updated"),
]


def _percent(score: float) -> int:
    return math.floor(score * 100 + 0.5)


def generate_explanations(
    item: CandidateItem,
    profile: Profile,
    constraints: Constraints,
    keywords: list[str],
    relevance_score: float,
) -> list[str]:
    """Build the ordered justification lines for one result.

    Args:
        item: The ranked candidate.
        profile: Profile the ranking was computed for.
        constraints: Request constraints.
        keywords: Keywords extracted from the query.
        relevance_score: The relevance component already used for the final score.

    Returns:
        At least one explanation string.
    """
    explanations: list[str] = []

    if keywords and category_matches(item, keywords):
        explanations.append(f'Matches "{item.category}" result type you\'re looking for')

    tags = matching_tags(item, keywords) if keywords else []
    if tags:
        tag_list = ", ".join(tags[:MAX_LISTED_TAGS])
        more = " ..." if len(tags) > MAX_LISTED_TAGS else ""
        explanations.append(f"Matches your interests: {tag_list}{more}")

    if relevance_score >= CONTRIBUTION_THRESHOLD:
        explanations.append(
            f"Highly relevant to your search ({_percent(relevance_score)}% match)"
        )

    explanations.extend(_constraint_lines(item, constraints))

    factors = _profile_factors(item, profile)
    if factors:
        top = ", ".join(factors[:MAX_PROFILE_FACTORS])
        explanations.append(f"{profile.value.capitalize()} preference: {top}")

    if not explanations:
        if relevance_score >= FALLBACK_RELEVANCE_THRESHOLD:
            explanations.append(f"Relevant match ({_percent(relevance_score)}%)")
        else:
            explanations.append("Best available match for your search")

    return explanations


def _constraint_lines(item: CandidateItem, constraints: Constraints) -> list[str]:
    lines: list[str] = []

    max_minutes = constraints.reading_time
    if max_minutes is not None and item.reading_time <= max_minutes:
        lines.append(
            f"Fits your {max_minutes}-minute reading time limit ({item.reading_time} min)"
        )

    if constraints.budget and item.price > CONTRIBUTION_THRESHOLD:
        lines.append("Respects your budget constraint")

    level = constraints.skill_level
    if level is SkillLevel.BEGINNER and item.simplicity > CONTRIBUTION_THRESHOLD:
        lines.append("Appropriate for beginner level")
    elif level is SkillLevel.INTERMEDIATE and item.depth > INTERMEDIATE_DEPTH_THRESHOLD:
        lines.append("Good depth for intermediate learners")
    elif level is SkillLevel.ADVANCED and item.depth > CONTRIBUTION_THRESHOLD:
        lines.append("Sufficient depth for advanced learners")

    return lines


def _profile_factors(item: CandidateItem, profile: Profile) -> list[str]:
    weights = weights_for(profile)
    return [
        label
        for metric, min_weight, label in _PROFILE_FACTORS
        if getattr(weights, metric) > min_weight
        and getattr(item, metric) > CONTRIBUTION_THRESHOLD
    ]
