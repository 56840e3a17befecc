"""Query keyword extraction and the label matching rule shared by the pipeline."""

MIN_KEYWORD_LENGTH = 4
MAX_KEYWORDS = 5


def extract_keywords(query: str) -> list[str]:
    """Turn a raw query into at most five lowercase significant tokens.

    Tokens of three characters or fewer are dropped before the cap is applied.
    No stemming, no stop-word list.
    """
    tokens = [t for t in query.lower().split() if len(t) >= MIN_KEYWORD_LENGTH]
    return tokens[:MAX_KEYWORDS]


def labels_match(keyword: str, label: str) -> bool:
    """Bidirectional containment: tolerates plural and compound mismatches."""
    label = label.lower()
    if not label or not keyword:
        return False
    return keyword in label or label in keyword


def matches_any(label: str, keywords: list[str]) -> bool:
    return any(labels_match(kw, label) for kw in keywords)
