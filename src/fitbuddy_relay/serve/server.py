"""Launch the relay with uvicorn using the resolved settings."""
from __future__ import annotations
import argparse
import logging

import uvicorn

from fitbuddy_relay.common.config import load_settings, normalize_log_level
from fitbuddy_relay.common.logging_setup import setup_logging
from fitbuddy_relay.serve.fastapi_app import create_app

LOGGER = logging.getLogger("fitbuddy.serve.server")

def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser(description="Run the FitBuddy Gemini relay")
    ap.add_argument("--cfg", default=None, help="Optional YAML config path")
    args = ap.parse_args(argv)

    settings = load_settings(args.cfg)
    setup_logging(settings.log_level)
    LOGGER.info("Server running on http://localhost:%s (port %s)", settings.port, settings.port)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=normalize_log_level(settings.log_level).lower(),
    )

if __name__ == "__main__":
    main()
