import os
from typing import List

from langchain_core.documents import Document

SNIPPET_CHARS = 200


def format_source(doc: Document) -> str:
    src = os.path.basename(str(doc.metadata.get("source", "Unknown")))
    page = doc.metadata.get("page") or doc.metadata.get("page_number") or doc.metadata.get("slide")
    return f"{src} (page {page})" if page not in ("", None, 0) else src


def format_results(docs: List[Document]) -> str:
    if not docs:
        return "- (no matched documents)"
    lines = []
    for i, d in enumerate(docs, 1):
        snippet = " ".join(d.page_content.split())
        if len(snippet) > SNIPPET_CHARS:
            snippet = snippet[:SNIPPET_CHARS] + "..."
        lines.append(f"{i}. [{format_source(d)}] {snippet}")
    return "\n".join(lines)
