"""Bounded score adjustment from user-declared constraints.

Adjustments range from MAX_PENALTY (-0.25) to MAX_BONUS (+0.15). Penalties may
be stronger than bonuses; a constraint down-ranks a result but never removes it.
"""

from decision_search.core.schemas import CandidateItem, Constraints, SkillLevel

MAX_PENALTY = -0.25
MAX_BONUS = 0.15


def constraint_adjustment(item: CandidateItem, constraints: Constraints) -> float:
    """Sum one term per active constraint and clamp to [MAX_PENALTY, MAX_BONUS].

    Args:
        item: The candidate being scored.
        constraints: Request constraints; unset fields contribute nothing.

    Returns:
        Additive adjustment for the personalization score.
    """
    adjustment = 0.0

    if constraints.budget:
        adjustment += _budget_term(item)

    if constraints.reading_time is not None:
        adjustment += _reading_time_term(item, constraints.reading_time)

    if constraints.skill_level is not None:
        adjustment += _skill_level_term(item, constraints.skill_level)

    return max(MAX_PENALTY, min(MAX_BONUS, adjustment))


def _budget_term(item: CandidateItem) -> float:
    # price 1.0 = free/cheap, 0.0 = expensive
    return (1.0 - item.price) * MAX_PENALTY * 0.8


def _reading_time_term(item: CandidateItem, max_minutes: int) -> float:
    if item.reading_time <= max_minutes:
        term = MAX_BONUS * 0.4
    else:
        overage = min(1.0, (item.reading_time - max_minutes) / max_minutes)
        term = overage * MAX_PENALTY * 0.5
    # Simple content reads faster.
    return term + item.simplicity * (MAX_BONUS * 0.15)


def _skill_level_term(item: CandidateItem, level: SkillLevel) -> float:
    if level is SkillLevel.BEGINNER:
        return item.simplicity * (MAX_BONUS * 0.6) + item.depth * MAX_PENALTY * 0.5
    if level is SkillLevel.INTERMEDIATE:
        return max(item.depth, 0.3) * (MAX_BONUS * 0.2)
    # advanced
    return (
        item.depth * (MAX_BONUS * 0.4)
        + item.citations * (MAX_BONUS * 0.3)
        + (1.0 - item.depth) * MAX_PENALTY * 0.1
    )
