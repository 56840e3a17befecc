"""Orchestrator: wires candidate source, intent filter, scorers, and explainer.

Data flow:
  1. Candidate source (live provider with timeout, static corpus fallback)
  2. Query-intent filter → admitted candidates
  3. Relevance + personalization scoring → final score
  4. Stable sort desc, truncate to the ranked-set size
  5. Explanations from the scores already computed
"""

import asyncio
import logging
import time

from decision_search.core.config import RankingConfig, Settings
from decision_search.core.schemas import (
    CandidateItem,
    DataSource,
    RankedResult,
    ResponseMetadata,
    ResultStatus,
    SearchRequest,
    SearchResponse,
)
from decision_search.pipeline.explainer import generate_explanations
from decision_search.pipeline.keywords import extract_keywords
from decision_search.pipeline.matcher import QueryIntentFilter
from decision_search.pipeline.scorer import score_candidates
from decision_search.providers.base import CandidateSource, ProviderError
from decision_search.providers.bing import BingSearchProvider
from decision_search.providers.static import StaticCorpus

logger = logging.getLogger(__name__)


class RankingOrchestrator:
    """Ranks candidates from an injected source for a validated request.

    Usage::

        orchestrator = RankingOrchestrator(StaticCorpus("data/results.json"))
        response = await orchestrator.search(SearchRequest(query="machine learning"))
    """

    def __init__(
        self,
        source: CandidateSource,
        fallback: CandidateSource | None = None,
        config: RankingConfig | None = None,
    ) -> None:
        self._source = source
        self._fallback = fallback
        self._config = config or RankingConfig()

    @property
    def config(self) -> RankingConfig:
        return self._config

    def rank(self, candidates: list[CandidateItem], request: SearchRequest) -> list[RankedResult]:
        """Filter, score, sort, truncate, and explain. Pure and synchronous.

        Returns an empty list when no candidate matches the query intent.
        """
        keywords = extract_keywords(request.query)
        admitted = QueryIntentFilter(keywords)(candidates)
        if not admitted:
            logger.info("No candidates match the intent of '%s'", request.query)
            return []

        scored = score_candidates(
            admitted,
            keywords,
            request.profile,
            request.constraints,
            relevance_weight=self._config.relevance_weight,
        )
        top = scored[: self._config.result_count]

        return [
            RankedResult(
                item=s.item,
                final_score=s.final,
                relevance_score=s.relevance,
                personalization_score=s.personalization,
                profile=request.profile,
                explanations=generate_explanations(
                    s.item, request.profile, request.constraints, keywords, s.relevance,
                ),
            )
            for s in top
        ]

    async def load_candidates(self, query: str) -> tuple[list[CandidateItem], DataSource]:
        """Fetch candidates from the primary source, falling back on failure, timeout, or no results.

        Raises:
            ProviderError: If the primary source fails and no fallback is configured.
        """
        try:
            candidates = await asyncio.wait_for(
                self._source.fetch(query), timeout=self._config.provider_timeout_s,
            )
        except (ProviderError, asyncio.TimeoutError) as e:
            if self._fallback is None:
                raise
            reason = str(e) or type(e).__name__
            logger.warning(
                "Source '%s' failed (%s), using '%s'",
                self._source.source_id, reason, self._fallback.source_id,
            )
            return await self._fallback.fetch(query), DataSource.FALLBACK

        if not candidates and self._fallback is not None:
            logger.info(
                "Source '%s' returned no results, using '%s'",
                self._source.source_id, self._fallback.source_id,
            )
            return await self._fallback.fetch(query), DataSource.FALLBACK

        return candidates, DataSource.PRIMARY

    async def search(self, request: SearchRequest) -> SearchResponse:
        """Run the full pipeline for one request and wrap the results with metadata."""
        started = time.perf_counter()
        candidates, data_source = await self.load_candidates(request.query)
        results = self.rank(candidates, request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        logger.info(
            "Search '%s' (%s): %d candidates, %d ranked, source=%s",
            request.query, request.profile.value, len(candidates), len(results), data_source.value,
        )

        return SearchResponse(
            query=request.query,
            profile=request.profile,
            total_results=len(results),
            results=results,
            metadata=ResponseMetadata(
                response_time_ms=round(elapsed_ms, 3),
                data_source=data_source,
                status=ResultStatus.RANKED if results else ResultStatus.NO_MATCH,
            ),
        )


def build_orchestrator(settings: Settings) -> RankingOrchestrator:
    """Build an orchestrator from settings: live provider first when enabled."""
    corpus = StaticCorpus(settings.corpus.path)
    if settings.provider.enabled:
        return RankingOrchestrator(
            BingSearchProvider(settings.provider), fallback=corpus, config=settings.ranking,
        )
    return RankingOrchestrator(corpus, config=settings.ranking)


def export_response_json(response: SearchResponse) -> str:
    """Export a search response as a JSON string."""
    return response.model_dump_json(indent=2)
