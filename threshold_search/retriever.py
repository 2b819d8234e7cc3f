import logging
from typing import Any, List, Optional

from langchain_core.documents import Document
from langchain_core.runnables.config import run_in_executor
from pydantic import ValidationError

from .backend import AsyncScoredSearchBackend, ScoredDocument, ScoredSearchBackend
from .config import ThresholdConfig

log = logging.getLogger("retriever")


class InvalidConfiguration(ValueError):
    """Raised when a searcher is constructed with unusable settings."""


def validate_config(config: ThresholdConfig) -> None:
    if not config.has_threshold:
        raise InvalidConfiguration(
            "At least min_similarity_score or max_distance_score must be provided"
        )
    # A non-positive step would never reach max_k against a store that keeps saturating.
    if config.k_increment <= 0:
        raise InvalidConfiguration(f"k_increment must be positive, got {config.k_increment}")
    if config.max_k <= 0:
        raise InvalidConfiguration(f"max_k must be positive, got {config.max_k}")


class AdaptiveThresholdSearcher:
    """
    Returns every document whose score clears a threshold, not a fixed top-k.

    The store is asked for `k_increment` results, then `2 * k_increment`, and so
    on, for as long as every returned candidate passes the threshold (the store
    may hold more) and `max_k` has not been reached.
    """

    def __init__(
        self,
        backend: ScoredSearchBackend,
        config: Optional[ThresholdConfig] = None,
        **options: Any,
    ):
        if config is not None and options:
            raise InvalidConfiguration(
                "Pass either a ThresholdConfig or keyword options, not both"
            )
        if config is None:
            try:
                config = ThresholdConfig(**options)
            except ValidationError as e:
                raise InvalidConfiguration(str(e)) from e

        validate_config(config)

        self.backend = backend
        self.config = config

    @classmethod
    def from_vector_store(cls, vector_store: ScoredSearchBackend, **options: Any) -> "AdaptiveThresholdSearcher":
        return cls(vector_store, **options)

    # ----- threshold policy -----
    def _passes(self, score: float) -> bool:
        cfg = self.config
        # similarity wins when both bounds are configured
        if cfg.min_similarity_score is not None:
            return score >= cfg.min_similarity_score
        if cfg.max_distance_score is not None:
            return score <= cfg.max_distance_score
        return False

    def _filter(self, results: List[ScoredDocument]) -> List[ScoredDocument]:
        return [(doc, score) for doc, score in results if self._passes(score)]

    def _saturated(self, survivors: int, current_k: int) -> bool:
        return survivors >= current_k and current_k < self.config.max_k

    def _finish(self, filtered: List[ScoredDocument], rounds: int) -> List[Document]:
        docs = [doc for doc, _ in filtered][: self.config.max_k]
        log.debug(f"Threshold search done after {rounds} round(s); returning {len(docs)} docs.")
        return docs

    # ----- public entry -----
    def search(self, query: str) -> List[Document]:
        current_k = 0
        rounds = 0
        while True:
            current_k += self.config.k_increment
            rounds += 1
            results = self.backend.similarity_search_with_score(
                query, k=current_k, filter=self.config.filter
            )
            filtered = self._filter(results)
            log.debug(
                f"k={current_k}: {len(results)} candidates, {len(filtered)} above threshold"
            )
            # Every requested slot passed; there may be more beyond the cutoff.
            if not self._saturated(len(filtered), current_k):
                break
        return self._finish(filtered, rounds)

    async def asearch(self, query: str) -> List[Document]:
        current_k = 0
        rounds = 0
        while True:
            current_k += self.config.k_increment
            rounds += 1
            results = await self._abackend_search(query, current_k)
            filtered = self._filter(results)
            log.debug(
                f"k={current_k}: {len(results)} candidates, {len(filtered)} above threshold"
            )
            if not self._saturated(len(filtered), current_k):
                break
        return self._finish(filtered, rounds)

    async def _abackend_search(self, query: str, k: int) -> List[ScoredDocument]:
        if isinstance(self.backend, AsyncScoredSearchBackend):
            return await self.backend.asimilarity_search_with_score(
                query, k=k, filter=self.config.filter
            )
        return await run_in_executor(
            None,
            self.backend.similarity_search_with_score,
            query,
            k=k,
            filter=self.config.filter,
        )


def from_vector_store(vector_store: ScoredSearchBackend, **options: Any) -> AdaptiveThresholdSearcher:
    """Shorthand for `AdaptiveThresholdSearcher.from_vector_store`."""
    return AdaptiveThresholdSearcher.from_vector_store(vector_store, **options)
