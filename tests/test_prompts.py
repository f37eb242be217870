"""Tests for prompt loading and rendering."""

import pytest

from knowledge_context.models import PromptSpec
from knowledge_context.prompts import DEFAULT_PROMPT_PATH, load_prompt_spec, render


def test_load_packaged_chat_prompt():
    spec = load_prompt_spec()
    assert spec.name == "company_chat"
    assert spec.version == "1.0"
    assert "{{ question }}" in spec.user_template
    assert DEFAULT_PROMPT_PATH.exists()


def test_load_prompt_spec_from_file(tmp_path):
    path = tmp_path / "prompt.yaml"
    path.write_text("name: short\nversion: 2\nsystem: Be brief.\nuser: '{{ question }}'\n", encoding="utf-8")
    spec = load_prompt_spec(path)
    assert spec.name == "short"
    assert spec.version == "2"
    assert spec.system_template == "Be brief."


def test_load_prompt_spec_missing_file():
    with pytest.raises(FileNotFoundError, match="Prompt template not found"):
        load_prompt_spec("/nonexistent/prompt.yaml")


def test_render_with_context():
    messages = render(
        load_prompt_spec(),
        {
            "question": "Where is HQ?",
            "context": ["HQ is in Columbus, Indiana.", "Branch in Addison, IL."],
            "company_name": "Acme Utility Supply",
        },
    )
    assert [m["role"] for m in messages] == ["system", "user"]
    assert "Acme Utility Supply" in messages[0]["content"]
    user = messages[1]["content"]
    assert user.startswith("Use the following information")
    assert "- HQ is in Columbus, Indiana.\n- Branch in Addison, IL." in user
    assert user.endswith("Question: Where is HQ?")


def test_render_without_context_is_just_the_question():
    messages = render(load_prompt_spec(), {"question": "Hello there", "context": [], "company_name": "Acme"})
    assert messages[-1] == {"role": "user", "content": "Hello there"}


def test_render_inserts_history_between_system_and_question():
    history = [
        {"role": "user", "content": "Hi"},
        {"role": "assistant", "content": "Hello!"},
    ]
    messages = render(load_prompt_spec(), {"question": "Hours?", "context": [], "company_name": "Acme"}, history)
    assert [m["role"] for m in messages] == ["system", "user", "assistant", "user"]
    assert messages[-1]["content"] == "Hours?"


def test_render_empty_templates():
    spec = PromptSpec(name="empty", version="1.0", description="Empty")
    assert render(spec, {}) == []
