from __future__ import annotations

from typing import Iterable, List

from langchain.text_splitter import RecursiveCharacterTextSplitter
from langchain_core.documents import Document

from common.config import ChunkingConfig


def chunk_documents(
    docs: Iterable[Document], chunking: ChunkingConfig | None = None
) -> List[Document]:
    """
    Use LangChain's RecursiveCharacterTextSplitter to create overlapping
    character-based chunks, good for embeddings + retrieval.
    Chunks keep the source metadata and gain chunk_index and start_index.
    """
    chunking = chunking or ChunkingConfig()
    splitter = RecursiveCharacterTextSplitter(
        chunk_size=chunking.chunk_size,
        chunk_overlap=chunking.chunk_overlap,
        separators=["\n\n", "\n", " ", ""],
        add_start_index=True,
    )
    out: List[Document] = []
    for d in docs:
        for i, piece in enumerate(splitter.split_documents([d])):
            piece.metadata["chunk_index"] = i
            out.append(piece)
    return out
