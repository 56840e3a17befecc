"""Configuration models and YAML loader for the decision-aware search engine."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


class RankingConfig(BaseModel):
    """Score blend, ranked-set size, and provider timeout."""

    result_count: int = Field(default=3, ge=1)
    relevance_weight: float = Field(default=0.7, ge=0.0, le=1.0)
    provider_timeout_s: float = Field(default=5.0, gt=0.0)

    @property
    def personalization_weight(self) -> float:
        return 1.0 - self.relevance_weight


class CorpusConfig(BaseModel):
    """Static candidate corpus."""

    path: str = "data/results.json"


class ProviderConfig(BaseModel):
    """Live web search provider (Bing Web Search)."""

    enabled: bool = False
    endpoint: str | None = None
    api_key_env: str = "BING_API_KEY"
    max_results: int = Field(default=5, ge=1, le=50)


class Settings(BaseModel):
    """Top-level settings loaded from YAML."""

    ranking: RankingConfig = Field(default_factory=RankingConfig)
    corpus: CorpusConfig = Field(default_factory=CorpusConfig)
    provider: ProviderConfig = Field(default_factory=ProviderConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file.

        A relative corpus path is resolved against the directory holding the
        YAML file, so the CLI works from any working directory.
        """
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        settings = cls.model_validate(raw)
        corpus_path = Path(settings.corpus.path)
        if "path" in (raw.get("corpus") or {}) and not corpus_path.is_absolute():
            settings.corpus = CorpusConfig(path=str(path.absolute().parent / corpus_path))
        return settings
