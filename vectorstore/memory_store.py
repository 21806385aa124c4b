from __future__ import annotations

import uuid
from typing import List, Sequence, Tuple

from langchain_core.documents import Document
from langchain_core.embeddings import Embeddings
from langchain_core.vectorstores import InMemoryVectorStore

from common.errors import EmptyIndexError
from common.logger import get_logger

log = get_logger(__name__)


class MemoryStore:
    def __init__(self, embeddings: Embeddings):
        """
        Wrapper for LangChain's in-memory vector store (cosine similarity).
        Entries live for the lifetime of the process; nothing is persisted.
        Not synchronized: use from a single thread.
        """
        self.embeddings = embeddings
        self._db = InMemoryVectorStore(embedding=embeddings)

    @property
    def db(self) -> InMemoryVectorStore:
        return self._db

    def __len__(self) -> int:
        return len(self._db.store)

    def add_documents(self, chunks: Sequence[Document]) -> List[str]:
        """
        Embed the chunks and add them to the index.
        No deduplication: every call stores fresh entries, even for chunks
        that already carry an id (e.g. search results added back).
        """
        if not chunks:
            return []
        ids = self._db.add_documents(
            list(chunks), ids=[str(uuid.uuid4()) for _ in chunks]
        )
        log.info("Added %d chunks (total %d)", len(ids), len(self))
        return ids

    def similarity_search_with_score(
        self, query: str, k: int = 4
    ) -> List[Tuple[Document, float]]:
        """Return up to k (chunk, cosine similarity) pairs, most similar first."""
        if not len(self):
            raise EmptyIndexError("Cannot search an empty vector store")
        return self._db.similarity_search_with_score(query, k=k)

    def similarity_search(self, query: str, k: int = 4) -> List[Document]:
        return [doc for doc, _ in self.similarity_search_with_score(query, k=k)]
