from __future__ import annotations

import re
from typing import Callable, List

import pytest
import requests
from langchain_core.embeddings import Embeddings
from langchain_core.messages import AIMessage
from langchain_core.runnables import RunnableLambda

from ingestion import loaders

VOCAB = [
    "carbonara", "eggs", "cheese", "pasta", "pepper", "ingredients", "sauce",
    "creamy", "guanciale", "pizza", "dough", "oven", "weather", "rain", "sunny",
]


class KeywordEmbeddings(Embeddings):
    """Bag-of-words vectors over a tiny vocabulary, plus a constant bias term."""

    def _embed(self, text: str) -> List[float]:
        tokens = re.findall(r"[a-z]+", text.lower())
        return [0.5] + [float(tokens.count(w)) for w in VOCAB]

    def embed_documents(self, texts: List[str]) -> List[List[float]]:
        return [self._embed(t) for t in texts]

    def embed_query(self, text: str) -> List[float]:
        return self._embed(text)


def _answer_from_context(prompt_text: str) -> str:
    # Echo back whatever was given as context.
    match = re.search(r"Context:(.*)\nAnswer:", prompt_text, re.S)
    return match.group(1).strip() if match else "I don't know."


class RecordingChatModel(RunnableLambda):
    """Chat model stand-in: records each rendered prompt and replies from it."""

    def __init__(self, reply: Callable[[str], str] = _answer_from_context):
        self.reply = reply
        self.prompts: List[str] = []
        super().__init__(self._respond)

    def _respond(self, messages):
        text = messages.to_string()
        self.prompts.append(text)
        return AIMessage(content=self.reply(text))


class FakeResponse:
    def __init__(self, text: str, status_code: int = 200):
        self.text = text
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


@pytest.fixture
def embeddings() -> KeywordEmbeddings:
    return KeywordEmbeddings()


@pytest.fixture
def chat_model() -> RecordingChatModel:
    return RecordingChatModel()


@pytest.fixture
def serve_html(monkeypatch):
    """Patch requests.get to return the given HTML; returns the list of calls."""

    def _serve(html: str, status_code: int = 200):
        calls = []

        def fake_get(url, **kwargs):
            calls.append((url, kwargs))
            return FakeResponse(html, status_code)

        monkeypatch.setattr(loaders.requests, "get", fake_get)
        return calls

    return _serve


CARBONARA_HTML = """
<html>
  <head><title>Carbonara</title><script>var x = "<p>not me</p>";</script></head>
  <body>
    <nav><a href="/">Home</a></nav>
    <p>Carbonara needs eggs, cheese, pasta, and pepper.</p>
    <p>Toss the pasta off the heat so the eggs turn into a creamy sauce.</p>
    <div class="ad">Buy pizza dough now</div>
  </body>
</html>
"""


@pytest.fixture
def carbonara_html() -> str:
    return CARBONARA_HTML
