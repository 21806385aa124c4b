"""Retrieve-then-generate question answering as a two-node LangGraph."""
from __future__ import annotations

from typing import Any, Dict, List, Sequence, TypedDict

from langchain_core.documents import Document
from langchain_core.prompts import BasePromptTemplate
from langchain_core.runnables import Runnable
from langgraph.graph import END, START, StateGraph

from common.errors import PipelineStateError
from common.logger import get_logger
from vectorstore.memory_store import MemoryStore

log = get_logger(__name__)


class InputState(TypedDict):
    question: str


class State(TypedDict):
    question: str
    context: List[Document]
    answer: str


def join_context(docs: Sequence[Document]) -> str:
    return "\n".join(d.page_content for d in docs)


def response_text(response: Any) -> str:
    """Text of a chat message, a list of content blocks, or a plain string."""
    content = getattr(response, "content", response)
    if isinstance(content, str):
        return content
    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


def format_context(docs: Sequence[Document]) -> List[Dict[str, Any]]:
    """JSON-friendly view of retrieved chunks."""
    return [
        {"id": d.id, "page_content": d.page_content, "metadata": d.metadata}
        for d in docs
    ]


class RagPipeline:
    """
    Two-stage RAG flow: retrieve -> generate.

    The store, prompt and model are passed in so that tests can swap in fakes.
    Any failure inside a node aborts the run; there is no retry or fallback.
    """

    def __init__(
        self,
        store: MemoryStore,
        prompt: BasePromptTemplate,
        llm: Runnable,
        k: int = 4,
    ):
        self.store = store
        self.prompt = prompt
        self.llm = llm
        self.k = k
        self._graph = None

    def retrieve(self, state: InputState) -> Dict[str, Any]:
        docs = self.store.similarity_search(state["question"], k=self.k)
        log.info("Retrieved %d chunks", len(docs))
        return {"context": docs}

    def generate(self, state: State) -> Dict[str, Any]:
        if state.get("context") is None:
            raise PipelineStateError("generate requires retrieved context")
        messages = self.prompt.invoke(
            {"question": state["question"], "context": join_context(state["context"])}
        )
        response = self.llm.invoke(messages)
        return {"answer": response_text(response).strip()}

    def build_graph(self):
        graph = StateGraph(State)
        graph.add_node("retrieve", self.retrieve)
        graph.add_node("generate", self.generate)
        graph.add_edge(START, "retrieve")
        graph.add_edge("retrieve", "generate")
        graph.add_edge("generate", END)
        return graph.compile()

    @property
    def graph(self):
        if self._graph is None:
            self._graph = self.build_graph()
        return self._graph

    def ask(self, question: str) -> State:
        return self.graph.invoke({"question": question})
