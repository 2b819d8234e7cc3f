import logging
import os

from langchain_community.embeddings import HuggingFaceEmbeddings
from langchain_community.vectorstores import FAISS

log = logging.getLogger("vector_store")


def load_vector_store(cfg: dict) -> FAISS:
    """Load a FAISS index previously written with `FAISS.save_local`. Never builds one."""
    index_dir = cfg["index_dir"]
    if not os.path.isdir(index_dir):
        raise FileNotFoundError(f"No FAISS index at {index_dir}")

    embedding_model = HuggingFaceEmbeddings(model_name=cfg["embedding_model"])
    db = FAISS.load_local(
        index_dir,
        embedding_model,
        allow_dangerous_deserialization=True,
    )
    log.info(f"Loaded FAISS index from {index_dir}.")
    return db
