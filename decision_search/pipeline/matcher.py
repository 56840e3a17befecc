"""Query-intent admission filter.

Runs before scoring. A candidate survives if any query keyword matches its
category or one of its tags (see keywords.labels_match). An empty survivor
list is a valid outcome, not an error.
"""

import logging

from decision_search.core.schemas import CandidateItem
from decision_search.pipeline.keywords import matches_any

logger = logging.getLogger(__name__)


class QueryIntentFilter:
    """Keep candidates whose category or tags match at least one keyword.

    If keywords is empty (query too short to parse), the filter is a no-op.
    """

    def __init__(self, keywords: list[str]) -> None:
        self._keywords = [kw.lower() for kw in keywords if kw]

    def __call__(self, candidates: list[CandidateItem]) -> list[CandidateItem]:
        if not self._keywords:
            return candidates
        result = [c for c in candidates if self._matches(c)]
        excluded = len(candidates) - len(result)
        if excluded:
            logger.debug("QueryIntentFilter: removed %d candidates", excluded)
        return result

    def _matches(self, candidate: CandidateItem) -> bool:
        return any(matches_any(label, self._keywords) for label in candidate.labels())
