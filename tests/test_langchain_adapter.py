import pytest
from langchain_core.documents import Document
from langchain_core.embeddings import DeterministicFakeEmbedding
from langchain_core.retrievers import BaseRetriever
from langchain_core.vectorstores import InMemoryVectorStore

from conftest import RecordingBackend, make_docs
from threshold_search import AdaptiveThresholdSearcher, InvalidConfiguration, ThresholdRetriever


@pytest.fixture
def store():
    texts = [f"release note number {i}" for i in range(25)]
    metadatas = [{"source": f"notes/{i}.txt", "group": "a" if i % 2 else "b"} for i in range(25)]
    return InMemoryVectorStore.from_texts(
        texts, DeterministicFakeEmbedding(size=64), metadatas=metadatas
    )


def test_retriever_is_a_langchain_retriever():
    retriever = ThresholdRetriever.from_vector_store(
        RecordingBackend(lambda k: []), min_similarity_score=0.5
    )
    assert isinstance(retriever, BaseRetriever)
    assert isinstance(retriever.searcher, AdaptiveThresholdSearcher)


def test_invoke_delegates_to_searcher():
    backend = RecordingBackend(lambda k: make_docs(10, 0.9) if k == 10 else make_docs(12, 0.9))
    retriever = ThresholdRetriever.from_vector_store(backend, min_similarity_score=0.5)
    docs = retriever.invoke("q")
    assert backend.calls == [10, 20]
    assert len(docs) == 12
    assert all(isinstance(d, Document) for d in docs)


@pytest.mark.asyncio
async def test_ainvoke_delegates_to_searcher():
    backend = RecordingBackend(lambda k: make_docs(4, 0.9))
    retriever = ThresholdRetriever(searcher=AdaptiveThresholdSearcher(backend, min_similarity_score=0.5))
    docs = await retriever.ainvoke("q")
    assert backend.calls == [10]
    assert len(docs) == 4


def test_from_vector_store_validates():
    with pytest.raises(InvalidConfiguration):
        ThresholdRetriever.from_vector_store(RecordingBackend(lambda k: []))


def test_in_memory_store_returns_everything_above_floor(store):
    # cosine similarity is always >= -1, so every stored text qualifies
    searcher = AdaptiveThresholdSearcher(store, min_similarity_score=-1.0)
    docs = searcher.search("release note number 3")
    assert len(docs) == 25


def test_in_memory_store_exact_match_only(store):
    searcher = AdaptiveThresholdSearcher(store, min_similarity_score=0.999)
    docs = searcher.search("release note number 7")
    assert [d.page_content for d in docs] == ["release note number 7"]


def test_in_memory_store_honours_filter(store):
    searcher = AdaptiveThresholdSearcher(
        store, min_similarity_score=-1.0, filter=lambda doc: doc.metadata["group"] == "a"
    )
    docs = searcher.search("release note")
    assert len(docs) == 12
    assert {d.metadata["group"] for d in docs} == {"a"}
