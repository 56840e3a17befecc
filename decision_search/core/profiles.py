"""User profiles and their fixed personalization weight vectors.

Weights only drive the personalization component (30% of the final score).
They never change which result types are admitted; that is the intent filter's job.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class Profile(str, Enum):
    """Closed set of user archetypes."""

    STUDENT = "student"
    SHOPPER = "shopper"
    RESEARCHER = "researcher"
    CASUAL = "casual"


class ProfileWeights(BaseModel):
    """Fixed-shape weight record. Every key is required; zero is a valid weight."""

    model_config = ConfigDict(frozen=True)

    simplicity: float
    relevance: float
    recency: float
    reviews: float
    depth: float
    price: float
    citations: float
    reading_time: float


PROFILE_WEIGHTS: dict[Profile, ProfileWeights] = {
    Profile.STUDENT: ProfileWeights(
        simplicity=0.30,
        relevance=0.25,
        recency=0.15,
        reviews=0.15,
        depth=0.10,
        price=0.05,
        citations=0.00,
        reading_time=-0.05,  # shorter is better
    ),
    Profile.SHOPPER: ProfileWeights(
        price=0.35,
        reviews=0.30,
        relevance=0.20,
        simplicity=0.10,
        recency=0.05,
        depth=0.00,
        citations=0.00,
        reading_time=0.00,
    ),
    Profile.RESEARCHER: ProfileWeights(
        citations=0.35,
        depth=0.30,
        relevance=0.20,
        reviews=0.10,
        recency=0.05,
        simplicity=0.00,
        price=0.00,
        reading_time=0.00,
    ),
    Profile.CASUAL: ProfileWeights(
        relevance=0.35,
        recency=0.25,
        reading_time=-0.15,  # prefer quick reads
        simplicity=0.20,
        reviews=0.10,
        price=0.05,
        depth=0.00,
        citations=0.00,
    ),
}

_missing = set(Profile) - set(PROFILE_WEIGHTS)
if _missing:
    _msg = f"Profiles without weights: {sorted(p.value for p in _missing)}"
    raise RuntimeError(_msg)

PROFILE_DESCRIPTIONS: dict[Profile, str] = {
    Profile.STUDENT: "Optimize for learning: simplicity, recency, and trustworthiness",
    Profile.SHOPPER: "Optimize for purchasing: price, reviews, and relevant products",
    Profile.RESEARCHER: "Optimize for research: citations, depth, and academic credibility",
    Profile.CASUAL: "General purpose: relevance, recency, and quick reads",
}

METRIC_DESCRIPTIONS: dict[str, str] = {
    "relevance": "How well the result matches the search query",
    "simplicity": "Ease of understanding",
    "price": "Cost factor",
    "reviews": "Trustworthiness and credibility",
    "citations": "Academic impact and citations",
    "depth": "Comprehensiveness of content",
    "recency": "How current the content is",
    "reading_time": "Time required to consume",
}


def weights_for(profile: Profile) -> ProfileWeights:
    """Return the weight record for a profile."""
    return PROFILE_WEIGHTS[profile]


def valid_profiles() -> list[str]:
    """Return the profile names accepted in requests."""
    return [p.value for p in Profile]


def describe_profiles() -> dict[str, dict[str, Any]]:
    """Catalog of profiles with their descriptions and weight vectors."""
    return {
        profile.value: {
            "description": PROFILE_DESCRIPTIONS[profile],
            "weights": PROFILE_WEIGHTS[profile].model_dump(),
        }
        for profile in Profile
    }


def describe_metrics(relevance_weight: float = 0.7) -> dict[str, Any]:
    """Catalog of the metrics that feed the final score."""
    personalization_weight = round(1.0 - relevance_weight, 4)
    metrics: list[dict[str, Any]] = []
    for name, description in METRIC_DESCRIPTIONS.items():
        weight: float | str = relevance_weight if name == "relevance" else "profile-dependent"
        metrics.append({"name": name, "description": description, "weight": weight})
    return {
        "metrics": metrics,
        "notes": (
            f"Final score = ({relevance_weight} x relevance) + "
            f"({personalization_weight} x personalization based on profile)"
        ),
    }
