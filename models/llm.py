from __future__ import annotations

from langchain_core.language_models import BaseChatModel
from langchain_ollama import ChatOllama
from langchain_openai import ChatOpenAI

from common.config import LLMConfig, Secrets
from common.errors import MissingCredentialError
from common.logger import get_logger

log = get_logger(__name__)


def require_openai_key(secrets: Secrets) -> str:
    if not secrets.openai_api_key:
        raise MissingCredentialError(
            "OPENAI_API_KEY is not set (environment or .env file)"
        )
    return secrets.openai_api_key


def load_chat_model(cfg: LLMConfig, secrets: Secrets) -> BaseChatModel:
    """
    Build the chat model used to answer questions from the llm config section.
    """
    if cfg.provider == "openai":
        llm = ChatOpenAI(
            model=cfg.model_name,
            temperature=cfg.temperature,
            api_key=require_openai_key(secrets),
        )
    elif cfg.provider == "ollama":
        llm = ChatOllama(model=cfg.model_name, temperature=cfg.temperature)
    else:
        raise ValueError(f"Unsupported provider: {cfg.provider}")
    log.info("Using %s chat model '%s'", cfg.provider, cfg.model_name)
    return llm
