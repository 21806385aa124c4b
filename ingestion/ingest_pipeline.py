from __future__ import annotations

from typing import List

from langchain_core.documents import Document
from tqdm import tqdm

from common.config import ChunkingConfig, LoaderConfig
from common.logger import get_logger
from ingestion.chunkers import chunk_documents
from ingestion.loaders import ensure_single_document, load_from_url
from vectorstore.memory_store import MemoryStore

log = get_logger(__name__)


def index_url(
    url: str,
    store: MemoryStore,
    *,
    selector: str = "p",
    loader_cfg: LoaderConfig | None = None,
    chunking: ChunkingConfig | None = None,
    batch_size: int = 64,
) -> List[Document]:
    """
    Index a single web page into the store.
    - Fetches and extracts text (exactly one Document is required)
    - Chunks
    - Embeds + adds chunks to the store

    Returns the chunks that were added.
    """
    docs = load_from_url(url, selector=selector, cfg=loader_cfg)
    doc = ensure_single_document(docs)
    log.info("Total characters: %d", len(doc.page_content))

    chunks = chunk_documents(docs, chunking)
    log.info("Split page into %d sub-documents.", len(chunks))

    for start in tqdm(range(0, len(chunks), batch_size), desc="Embedding chunks"):
        store.add_documents(chunks[start : start + batch_size])
    log.info("Index now holds %d entries", len(store))
    return chunks
