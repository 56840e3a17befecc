"""Abstract base class for candidate sources."""

from abc import ABC, abstractmethod

from decision_search.core.schemas import CandidateItem


class ProviderError(RuntimeError):
    """Raised when a candidate source cannot deliver results (unreachable, bad payload)."""


class CandidateSource(ABC):
    """Base class that every candidate source must implement."""

    @property
    @abstractmethod
    def source_id(self) -> str:
        """Unique identifier for this source (e.g. 'static', 'bing')."""

    @abstractmethod
    async def fetch(self, query: str) -> list[CandidateItem]:
        """Return raw (unfiltered, unscored) candidates for a query."""
