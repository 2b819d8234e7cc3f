from typing import Any, List

from langchain_core.callbacks import (
    AsyncCallbackManagerForRetrieverRun,
    CallbackManagerForRetrieverRun,
)
from langchain_core.documents import Document
from langchain_core.retrievers import BaseRetriever
from pydantic import ConfigDict

from .backend import ScoredSearchBackend
from .retriever import AdaptiveThresholdSearcher


class ThresholdRetriever(BaseRetriever):
    """LangChain retriever adapter over an AdaptiveThresholdSearcher."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    searcher: AdaptiveThresholdSearcher

    @classmethod
    def from_vector_store(cls, vector_store: ScoredSearchBackend, **options: Any) -> "ThresholdRetriever":
        return cls(searcher=AdaptiveThresholdSearcher.from_vector_store(vector_store, **options))

    def _get_relevant_documents(
        self, query: str, *, run_manager: CallbackManagerForRetrieverRun
    ) -> List[Document]:
        return self.searcher.search(query)

    async def _aget_relevant_documents(
        self, query: str, *, run_manager: AsyncCallbackManagerForRetrieverRun
    ) -> List[Document]:
        return await self.searcher.asearch(query)
