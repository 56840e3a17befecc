"""Static candidate corpus backed by a JSON file.

The file is read once, on first fetch, and cached on the instance as an
immutable tuple. Concurrent requests share the cache without locking because
it is never mutated after load.

Expected layout::

    {"results": [{"id": 1, "title": "...", "category": "course", ...}, ...]}

A bare top-level list is accepted too.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from decision_search.core.schemas import CandidateItem
from decision_search.providers.base import CandidateSource

logger = logging.getLogger(__name__)

DEFAULT_RESULTS: tuple[dict[str, Any], ...] = (
    {
        "id": 1,
        "title": "Comprehensive Guide to Machine Learning",
        "url": "https://example.com/ml-guide",
        "summary": "A complete introduction to machine learning concepts",
        "category": "course",
        "tags": ["machine learning", "course", "tutorial", "learning"],
        "relevance": 0.95,
        "simplicity": 0.85,
        "price": 0.3,
        "reviews": 0.92,
        "citations": 0.7,
        "depth": 0.88,
        "recency": 0.75,
        "readingTime": 20,
    },
)


class StaticCorpus(CandidateSource):
    """Read-only candidate corpus loaded lazily from disk.

    Usage::

        corpus = StaticCorpus("data/results.json")
        items = await corpus.fetch("machine learning")
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self._path = Path(path) if path is not None else None
        self._items: tuple[CandidateItem, ...] | None = None

    @property
    def source_id(self) -> str:
        return "static"

    @property
    def items(self) -> tuple[CandidateItem, ...]:
        """All corpus items, loading them on first access."""
        if self._items is None:
            self._items = self._load()
        return self._items

    async def fetch(self, query: str) -> list[CandidateItem]:
        # The whole corpus is returned; the intent filter does the narrowing.
        return list(self.items)

    def _load(self) -> tuple[CandidateItem, ...]:
        if self._path is None:
            return parse_items(DEFAULT_RESULTS)
        try:
            raw = json.loads(self._path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Error loading corpus from %s: %s, using default corpus", self._path, e)
            return parse_items(DEFAULT_RESULTS)

        records = raw.get("results", []) if isinstance(raw, dict) else raw
        if not isinstance(records, list):
            logger.error("Corpus %s has no result list, using default corpus", self._path)
            return parse_items(DEFAULT_RESULTS)

        items = parse_items(records)
        logger.info("Loaded %d corpus items from %s", len(items), self._path)
        return items


def parse_items(records: list[Any] | tuple[Any, ...]) -> tuple[CandidateItem, ...]:
    """Validate raw records into CandidateItems, skipping the ones that cannot be parsed."""
    items: list[CandidateItem] = []
    for index, record in enumerate(records):
        try:
            items.append(CandidateItem.model_validate(record))
        except ValidationError as e:
            logger.warning("Skipping corpus entry %d: %s", index, e.errors()[0]["msg"])
    return tuple(items)
