from .backend import AsyncScoredSearchBackend, ScoredDocument, ScoredSearchBackend
from .config import ThresholdConfig
from .langchain_adapter import ThresholdRetriever
from .retriever import AdaptiveThresholdSearcher, InvalidConfiguration, from_vector_store

__all__ = [
    "AdaptiveThresholdSearcher",
    "AsyncScoredSearchBackend",
    "InvalidConfiguration",
    "ScoredDocument",
    "ScoredSearchBackend",
    "ThresholdConfig",
    "ThresholdRetriever",
    "from_vector_store",
]
