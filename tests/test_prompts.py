from __future__ import annotations

from fitbuddy_relay.common.prompts import build_chat_prompt, build_explain_prompt, render_prompt
from fitbuddy_relay.common.schema import ExplainMode


def test_render_prompt_substitution() -> None:
    tpl = "Hello {{input}}!"
    out = render_prompt(tpl, input="world")
    assert out == "Hello world!"


def test_render_prompt_does_not_reexpand_values() -> None:
    out = render_prompt("{{a}} and {{b}}", a="{{b}}", b="two")
    assert out == "{{b}} and two"


def test_render_prompt_leaves_unknown_placeholders() -> None:
    assert render_prompt("{{missing}}") == "{{missing}}"


def test_chat_prompt_embeds_message() -> None:
    prompt = build_chat_prompt("How do I start running?")
    assert "FitBuddy" in prompt
    assert prompt.endswith("\n\nUser: How do I start running?")


def test_explain_prompt_embeds_mode_language_and_code() -> None:
    prompt = build_explain_prompt("print(1)", ExplainMode.refactor, "python")
    assert "mode=refactor and language=python" in prompt
    assert "Provide a clear refactor of the code below." in prompt
    assert prompt.endswith("Code:\nprint(1)")


def test_explain_prompt_defaults() -> None:
    prompt = build_explain_prompt("x = 1")
    assert "mode=summary and language=auto" in prompt
