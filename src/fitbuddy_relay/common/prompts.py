"""Prompt templating helpers."""
from __future__ import annotations
import re

from fitbuddy_relay.common.schema import ExplainMode

CHAT_TEMPLATE = (
    "You are FitBuddy, a concise friendly fitness coach. Answer the user's question "
    "clearly and with practical steps. If user asks for a workout, include sets/reps/time. "
    "Keep it brief.\n\nUser: {{message}}"
)

EXPLAIN_TEMPLATE = (
    "You are a helpful code explainer. The user requested mode={{mode}} and "
    "language={{language}}. Provide a clear {{mode}} of the code below.\n\nCode:\n{{code}}"
)

_PLACEHOLDER = re.compile(r"\{\{(\w+)\}\}")

def render_prompt(template: str, **values: str) -> str:
    """
    Render values into the template.

    Placeholders are substituted in a single pass, so user text that happens
    to contain ``{{name}}`` is inserted verbatim.

    Args:
        template: Template content containing ``{{name}}`` placeholders.
        values: Replacement text per placeholder name.

    Returns:
        Rendered prompt.
    """
    return _PLACEHOLDER.sub(lambda m: values.get(m.group(1), m.group(0)), template)

def build_chat_prompt(message: str) -> str:
    return render_prompt(CHAT_TEMPLATE, message=message)

def build_explain_prompt(code: str, mode: ExplainMode | str = ExplainMode.summary, language: str = "auto") -> str:
    mode_value = mode.value if isinstance(mode, ExplainMode) else mode
    return render_prompt(EXPLAIN_TEMPLATE, mode=mode_value, language=language, code=code)
