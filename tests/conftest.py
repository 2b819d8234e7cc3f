from typing import Callable, List, Tuple

import pytest
from langchain_core.documents import Document


def make_docs(n: int, score: float, start: int = 0) -> List[Tuple[Document, float]]:
    return [
        (Document(page_content=f"doc {i}", metadata={"id": i}), score)
        for i in range(start, start + n)
    ]


class RecordingBackend:
    """Fake vector store: answers from `respond(k)` and remembers every call."""

    def __init__(self, respond: Callable[[int], List[Tuple[Document, float]]]):
        self.respond = respond
        self.calls: List[int] = []
        self.filters: list = []

    def similarity_search_with_score(self, query, k=4, filter=None, **kwargs):
        self.calls.append(k)
        self.filters.append(filter)
        return self.respond(k)


class AsyncRecordingBackend(RecordingBackend):
    def __init__(self, respond):
        super().__init__(respond)
        self.async_calls: List[int] = []

    async def asimilarity_search_with_score(self, query, k=4, filter=None, **kwargs):
        self.async_calls.append(k)
        self.filters.append(filter)
        return self.respond(k)


@pytest.fixture
def always_saturated():
    """Every request for k returns k passing results, as if the store were endless."""
    return RecordingBackend(lambda k: make_docs(k, 0.9))
