import pytest

from chains import prompts
from chains.prompts import RAG_PROMPT, load_prompt, pull_prompt
from common.config import PromptConfig


def test_rag_prompt_fills_question_and_context():
    value = RAG_PROMPT.invoke(
        {"question": "What ingredients are needed?", "context": "eggs\ncheese"}
    )
    messages = value.to_messages()

    assert len(messages) == 1
    assert messages[0].type == "human"
    assert "Question: What ingredients are needed?" in messages[0].content
    assert "Context: eggs\ncheese" in messages[0].content


def test_missing_slot_is_an_error():
    with pytest.raises(KeyError):
        RAG_PROMPT.invoke({"question": "What ingredients are needed?"})


def test_local_source_uses_bundled_prompt():
    assert load_prompt(PromptConfig(source="local")) is RAG_PROMPT


def test_hub_prompt_is_pulled_once(monkeypatch):
    calls = []

    def fake_pull(name):
        calls.append(name)
        return RAG_PROMPT

    monkeypatch.setattr(prompts.hub, "pull", fake_pull)
    pull_prompt.cache_clear()
    try:
        cfg = PromptConfig(source="hub", name="rlm/rag-prompt")
        first = load_prompt(cfg)
        second = load_prompt(cfg)
    finally:
        pull_prompt.cache_clear()

    assert first is second is RAG_PROMPT
    assert calls == ["rlm/rag-prompt"]
