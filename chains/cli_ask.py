from __future__ import annotations

import argparse
from pathlib import Path

import orjson

from chains.prompts import load_prompt
from chains.rag_graph import RagPipeline, format_context
from common.config import DEFAULT_CONFIG_PATH, Secrets, load_yaml_config
from common.errors import InputShapeMismatchError
from common.logger import get_logger
from ingestion.ingest_pipeline import index_url
from models.embeddings import load_embeddings
from models.llm import load_chat_model
from vectorstore.memory_store import MemoryStore

log = get_logger(__name__)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Index one web page in memory and answer a question about it."
    )
    parser.add_argument("question", type=str, nargs="?", default=None)
    parser.add_argument("--config", type=str, default=str(DEFAULT_CONFIG_PATH))
    parser.add_argument("--url", type=str, default=None)
    parser.add_argument("--selector", type=str, default=None)
    parser.add_argument("--k", type=int, default=None)
    parser.add_argument(
        "--per-element",
        action="store_true",
        help="Create one document per matched element instead of one per page",
    )
    args = parser.parse_args(argv)

    cfg = load_yaml_config(Path(args.config))
    secrets = Secrets()
    url = args.url or cfg.app.url
    selector = args.selector or cfg.app.selector
    question = args.question or cfg.app.question
    loader_cfg = cfg.loader
    if args.per_element:
        loader_cfg = loader_cfg.model_copy(update={"per_element": True})

    # Offline phase: build the in-memory index
    store = MemoryStore(load_embeddings(cfg.vectorstore, secrets))
    try:
        index_url(
            url,
            store,
            selector=selector,
            loader_cfg=loader_cfg,
            chunking=cfg.chunking,
            batch_size=cfg.vectorstore.batch_size,
        )
    except InputShapeMismatchError as e:
        log.error("Cannot index %s: %s", url, e)
        raise

    # Query phase
    pipeline = RagPipeline(
        store,
        prompt=load_prompt(cfg.prompt),
        llm=load_chat_model(cfg.llm, secrets),
        k=args.k or cfg.retrieval.k,
    )
    result = pipeline.ask(question)

    print("\n=== CONTEXT ===\n")
    dump = orjson.dumps(format_context(result["context"]), option=orjson.OPT_INDENT_2)
    print(dump.decode())
    print("\n=== ANSWER ===\n")
    print(result["answer"])


if __name__ == "__main__":
    main()
