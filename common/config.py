from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings

from common.logger import get_logger

log = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path("config/config.yaml")


class AppConfig(BaseModel):
    url: str = "https://www.recipetineats.com/carbonara/#h-ingredients-in-carbonara-sauce"
    selector: str = "p"
    question: str = "How to obtain a creamy sauce while making a carbonara?"


class LoaderConfig(BaseModel):
    timeout: int = 20
    user_agent: str = "PageRAG/1.0"
    max_attempts: int = Field(default=1, ge=1)  # 1 = no retry
    per_element: bool = False


class ChunkingConfig(BaseModel):
    chunk_size: int = Field(default=1000, gt=0)
    chunk_overlap: int = Field(default=200, ge=0)

    @model_validator(mode="after")
    def _overlap_below_size(self) -> "ChunkingConfig":
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError(
                f"chunk_overlap ({self.chunk_overlap}) must be smaller than "
                f"chunk_size ({self.chunk_size})"
            )
        return self


class VectorStoreConfig(BaseModel):
    provider: str = Field(default="openai", pattern="^(openai|huggingface)$")
    embedding_model: str = "text-embedding-3-large"
    batch_size: int = Field(default=64, gt=0)


class RetrievalConfig(BaseModel):
    k: int = Field(default=4, gt=0)


class PromptConfig(BaseModel):
    source: str = Field(default="hub", pattern="^(hub|local)$")
    name: str = "rlm/rag-prompt"


class LLMConfig(BaseModel):
    provider: str = Field(default="openai", pattern="^(openai|ollama)$")
    model_name: str = "gpt-4o-mini"
    temperature: float = 0.0


class GlobalYAMLConfig(BaseModel):
    app: AppConfig = Field(default_factory=AppConfig)
    loader: LoaderConfig = Field(default_factory=LoaderConfig)
    chunking: ChunkingConfig = Field(default_factory=ChunkingConfig)
    vectorstore: VectorStoreConfig = Field(default_factory=VectorStoreConfig)
    retrieval: RetrievalConfig = Field(default_factory=RetrievalConfig)
    prompt: PromptConfig = Field(default_factory=PromptConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)


def load_yaml_config(path: Path = DEFAULT_CONFIG_PATH) -> GlobalYAMLConfig:
    path = Path(path)
    if not path.exists():
        log.warning("Config file %s not found, using defaults", path)
        return GlobalYAMLConfig()
    with open(path, "r") as f:
        raw = yaml.safe_load(f) or {}
    return GlobalYAMLConfig(**raw)


class Secrets(BaseSettings):
    openai_api_key: str | None = Field(default=None, alias="OPENAI_API_KEY")

    class Config:
        env_file = ".env"
        extra = "ignore"
        populate_by_name = True
