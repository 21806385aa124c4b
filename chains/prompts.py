from __future__ import annotations

from functools import lru_cache

from langchain import hub
from langchain_core.prompts import ChatPromptTemplate

from common.config import PromptConfig
from common.logger import get_logger

log = get_logger(__name__)

# Same wording as the "rlm/rag-prompt" hub prompt.
RAG_TEMPLATE = (
    "You are an assistant for question-answering tasks. Use the following pieces "
    "of retrieved context to answer the question. If you don't know the answer, "
    "just say that you don't know. Use three sentences maximum and keep the "
    "answer concise.\n"
    "Question: {question} \n"
    "Context: {context} \n"
    "Answer:"
)

RAG_PROMPT = ChatPromptTemplate.from_messages([("human", RAG_TEMPLATE)])


@lru_cache(maxsize=None)
def pull_prompt(name: str) -> ChatPromptTemplate:
    """Fetch a prompt from LangChain Hub once per process."""
    log.info("Pulling prompt '%s' from hub", name)
    return hub.pull(name)


def load_prompt(cfg: PromptConfig | None = None) -> ChatPromptTemplate:
    cfg = cfg or PromptConfig()
    if cfg.source == "local":
        return RAG_PROMPT
    return pull_prompt(cfg.name)
