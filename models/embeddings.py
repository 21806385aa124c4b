from __future__ import annotations

from langchain_core.embeddings import Embeddings
from langchain_huggingface.embeddings import HuggingFaceEmbeddings
from langchain_openai import OpenAIEmbeddings

from common.config import Secrets, VectorStoreConfig
from common.logger import get_logger
from models.llm import require_openai_key

log = get_logger(__name__)


def load_embeddings(cfg: VectorStoreConfig, secrets: Secrets) -> Embeddings:
    if cfg.provider == "openai":
        embeddings = OpenAIEmbeddings(
            model=cfg.embedding_model, api_key=require_openai_key(secrets)
        )
    elif cfg.provider == "huggingface":
        embeddings = HuggingFaceEmbeddings(model_name=cfg.embedding_model)
    else:
        raise ValueError(f"Unsupported embeddings provider: {cfg.provider}")
    log.info("Using %s embeddings '%s'", cfg.provider, cfg.embedding_model)
    return embeddings
