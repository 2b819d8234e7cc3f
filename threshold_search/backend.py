from typing import Any, List, Optional, Protocol, Tuple, runtime_checkable

from langchain_core.documents import Document

# One (document, score) pair from a single backend query.
ScoredDocument = Tuple[Document, float]


class ScoredSearchBackend(Protocol):
    """
    Anything that can answer a scored similarity search.

    Matches the LangChain VectorStore signature, so FAISS, Chroma, the
    in-memory store etc. all qualify, and so does a plain test double.
    Results are expected best first, at most `k` of them.
    """

    def similarity_search_with_score(
        self, query: str, k: int = 4, filter: Optional[Any] = None, **kwargs: Any
    ) -> List[ScoredDocument]:
        ...


@runtime_checkable
class AsyncScoredSearchBackend(Protocol):
    async def asimilarity_search_with_score(
        self, query: str, k: int = 4, filter: Optional[Any] = None, **kwargs: Any
    ) -> List[ScoredDocument]:
        ...
