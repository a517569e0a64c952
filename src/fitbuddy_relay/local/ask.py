"""Ask FitBuddy or the code explainer from the terminal, without the HTTP server.

Follows the same branching as the relay endpoints: chat degrades to the local
fallback, explanations require a Gemini key.
"""
from __future__ import annotations
import argparse
import asyncio
import logging
import sys

from fitbuddy_relay.common.config import Settings, load_settings
from fitbuddy_relay.common.errors import MISSING_KEY_MESSAGE, ConfigurationError, RelayError, UpstreamError
from fitbuddy_relay.common.logging_setup import setup_logging
from fitbuddy_relay.common.prompts import build_chat_prompt, build_explain_prompt
from fitbuddy_relay.common.schema import ExplainMode
from fitbuddy_relay.local.fallback import local_fallback
from fitbuddy_relay.upstream import gemini_client

LOGGER = logging.getLogger("fitbuddy.local.ask")

async def ask_chat(message: str, settings: Settings) -> tuple[str, str]:
    """
    Answer a chat message.

    Returns:
        (reply, source) where source is "gemini", "fallback" or "local-fallback".
    """
    if not settings.has_credential:
        return local_fallback(message), "local-fallback"
    try:
        reply = await gemini_client.generate_text(build_chat_prompt(message), settings)
    except UpstreamError as e:
        LOGGER.error("Gemini chat failed: %s", e)
        return local_fallback(message), "fallback"
    return reply, "gemini"

async def ask_explain(code: str, mode: ExplainMode, language: str, settings: Settings) -> str:
    if not settings.has_credential:
        raise ConfigurationError(MISSING_KEY_MESSAGE)
    return await gemini_client.generate_text(build_explain_prompt(code, mode, language), settings)

def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Query FitBuddy chat or code explainer")
    ap.add_argument("--text", required=True, help="Chat message, or code when --explain is set")
    ap.add_argument("--explain", action="store_true", help="Explain the text as code")
    ap.add_argument("--mode", default=ExplainMode.summary.value, choices=[m.value for m in ExplainMode])
    ap.add_argument("--language", default="auto")
    ap.add_argument("--cfg", default=None, help="Optional YAML config path")
    args = ap.parse_args(argv)

    settings = load_settings(args.cfg)
    setup_logging(settings.log_level)

    if args.explain:
        try:
            text = asyncio.run(ask_explain(args.text, ExplainMode(args.mode), args.language, settings))
        except RelayError as e:
            LOGGER.error("%s", e)
            return 1
        LOGGER.info("Source: gemini")
    else:
        text, source = asyncio.run(ask_chat(args.text, settings))
        LOGGER.info("Source: %s", source)
    print(text)
    return 0

if __name__ == "__main__":
    sys.exit(main())
