"""Bing Web Search provider.

Maps web results into the CandidateItem shape. Web pages carry no quality
metrics, so they are filled with plausible values seeded by the result URL:
the same page always gets the same metrics, keeping rankings reproducible.
"""

import logging
import os
import random
from typing import Any

import httpx
from pydantic import ValidationError

from decision_search.core.config import ProviderConfig
from decision_search.core.schemas import CandidateItem
from decision_search.providers.base import CandidateSource, ProviderError

logger = logging.getLogger(__name__)

ENDPOINT_ENV = "BING_ENDPOINT"

# URL fragments → category, first match wins.
_CATEGORY_RULES: list[tuple[tuple[str, ...], str]] = [
    (("course", "udemy", "coursera"), "course"),
    (("book", "amazon", "goodreads"), "book"),
    (("paper", "arxiv", "scholar"), "research"),
    (("github", "documentation"), "code"),
    (("product", "shop"), "product"),
    (("news", "blog"), "article"),
]

_TAG_KEYWORDS: dict[str, tuple[str, ...]] = {
    "machine learning": ("machine learning", "ml", "ai", "artificial intelligence"),
    "python": ("python",),
    "javascript": ("javascript", "js", "nodejs", "node"),
    "web development": ("web", "html", "css", "react", "vue"),
    "data science": ("data science", "data analytics", "analytics"),
    "tutorial": ("tutorial", "guide", "how to", "learn"),
    "documentation": ("documentation", "docs", "reference"),
    "example": ("example", "code sample"),
}


def infer_category(url: str) -> str:
    """Guess a content category from the result URL."""
    url = url.lower()
    for fragments, category in _CATEGORY_RULES:
        if any(f in url for f in fragments):
            return category
    return "article"


def infer_tags(text: str) -> list[str]:
    """Guess topic tags from title + snippet text; 'general' when nothing matches."""
    text = text.lower()
    tags = [tag for tag, keywords in _TAG_KEYWORDS.items() if any(kw in text for kw in keywords)]
    return tags or ["general"]


def _text(page: dict[str, Any], key: str) -> str:
    value = page.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        msg = f"field '{key}' is {type(value).__name__}, expected str"
        raise TypeError(msg)
    return value


def web_result_to_item(index: int, page: dict[str, Any]) -> CandidateItem:
    """Convert one webPages.value entry into a CandidateItem.

    Raises:
        TypeError: If name, url, or snippet is present but not a string.
    """
    name = _text(page, "name")
    url = _text(page, "url")
    snippet = _text(page, "snippet")
    rng = random.Random(url)
    return CandidateItem(
        id=index + 1,
        title=name,
        url=url,
        summary=snippet,
        category=infer_category(url),
        tags=tuple(infer_tags(f"{name} {snippet}")),
        relevance=0.8 + rng.random() * 0.2,
        simplicity=0.7 + rng.random() * 0.3,
        price=0.5 + rng.random() * 0.5,
        reviews=0.6 + rng.random() * 0.4,
        citations=0.3 + rng.random() * 0.4,
        depth=0.6 + rng.random() * 0.4,
        recency=0.7 + rng.random() * 0.3,
        reading_time=5 + rng.randrange(40),
    )


class BingSearchProvider(CandidateSource):
    """Live candidate source using the Bing Web Search API.

    Credentials come from the environment (BING_API_KEY by default) and the
    endpoint from BING_ENDPOINT or the provider config. Every failure is raised
    as ProviderError so the caller can fall back to the static corpus.
    """

    def __init__(self, config: ProviderConfig, client: httpx.AsyncClient | None = None) -> None:
        self._config = config
        self._client = client

    @property
    def source_id(self) -> str:
        return "bing"

    async def fetch(self, query: str) -> list[CandidateItem]:
        endpoint = os.environ.get(ENDPOINT_ENV) or self._config.endpoint
        api_key = os.environ.get(self._config.api_key_env)
        if not endpoint or not api_key:
            msg = f"Bing API credentials not configured ({ENDPOINT_ENV}, {self._config.api_key_env})"
            raise ProviderError(msg)

        params = {"q": query, "count": self._config.max_results}
        headers = {"Ocp-Apim-Subscription-Key": api_key}
        try:
            if self._client is not None:
                response = await self._client.get(endpoint, params=params, headers=headers)
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.get(endpoint, params=params, headers=headers)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            msg = f"Bing API request failed: {e}"
            raise ProviderError(msg) from e
        except ValueError as e:
            msg = f"Bing API returned invalid JSON: {e}"
            raise ProviderError(msg) from e

        if not isinstance(data, dict):
            msg = "Bing API returned an unexpected payload"
            raise ProviderError(msg)
        web_pages = data.get("webPages") or {}
        if not isinstance(web_pages, dict):
            msg = "Bing API returned an unexpected webPages payload"
            raise ProviderError(msg)
        pages = web_pages.get("value") or []
        if not isinstance(pages, list):
            msg = "Bing API returned an unexpected webPages.value payload"
            raise ProviderError(msg)

        items: list[CandidateItem] = []
        for index, page in enumerate(pages):
            if not isinstance(page, dict):
                logger.warning("Skipping Bing result %d: not an object", index)
                continue
            try:
                items.append(web_result_to_item(index, page))
            except (TypeError, ValidationError) as e:
                logger.warning("Skipping Bing result %d: %s", index, e)
        logger.info("Bing API returned %d results for '%s'", len(items), query)
        return items
