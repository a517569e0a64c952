"""FastAPI relay between the FitBuddy web client and Gemini.

Endpoints:
- GET /health
- POST /api/chat            { "message": "..." }
- POST /api/explain         { "code": "...", "mode"?: "...", "language"?: "..." }
- POST /api/explain/stream  same body; text/plain, one chunk per line
"""
from __future__ import annotations
import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncIterator

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse, StreamingResponse

from fitbuddy_relay.common.chunking import chunk_text
from fitbuddy_relay.common.config import Settings, load_settings
from fitbuddy_relay.common.errors import (
    MISSING_KEY_MESSAGE,
    ConfigurationError,
    RelayError,
    UpstreamError,
    ValidationError,
)
from fitbuddy_relay.common.logging_setup import setup_logging
from fitbuddy_relay.common.prompts import build_chat_prompt, build_explain_prompt
from fitbuddy_relay.common.schema import ChatRequest, ChatResponse, ExplainRequest, ExplainResponse
from fitbuddy_relay.local.fallback import local_fallback
from fitbuddy_relay.upstream import gemini_client

LOGGER = logging.getLogger("fitbuddy.serve.app")

STREAM_HEADERS = {"Cache-Control": "no-cache"}

router = APIRouter()

def get_settings(request: Request) -> Settings:
    return request.app.state.settings

def _require_code(body: ExplainRequest | None) -> ExplainRequest:
    if body is None or not body.code:
        raise ValidationError("No code provided")
    return body

def _require_credential(settings: Settings) -> None:
    if not settings.has_credential:
        raise ConfigurationError(MISSING_KEY_MESSAGE)

@router.get("/health")
def health(settings: Settings = Depends(get_settings)) -> dict[str, str]:
    upstream = "configured" if settings.has_credential else "unconfigured"
    return {"status": "ok", "model": settings.model, "upstream": upstream}

@router.post("/api/chat", response_model=ChatResponse, response_model_exclude_none=True)
async def chat(body: ChatRequest | None = None, settings: Settings = Depends(get_settings)) -> ChatResponse:
    if body is None or not body.message:
        raise ValidationError("No message provided")

    if not settings.has_credential:
        return ChatResponse(reply=local_fallback(body.message), source="local-fallback")

    prompt = build_chat_prompt(body.message)
    try:
        reply = await gemini_client.generate_text(prompt, settings)
    except UpstreamError as e:
        LOGGER.error("Gemini chat failed: %s", e)
        return ChatResponse(reply=local_fallback(body.message), source="fallback", error=str(e))
    return ChatResponse(reply=reply, source="gemini")

@router.post("/api/explain", response_model=ExplainResponse)
async def explain(body: ExplainRequest | None = None, settings: Settings = Depends(get_settings)) -> ExplainResponse:
    req = _require_code(body)
    _require_credential(settings)

    prompt = build_explain_prompt(req.code, req.mode, req.language)
    explanation = await gemini_client.generate_text(prompt, settings)
    return ExplainResponse(explanation=explanation, source="gemini")

@router.post("/api/explain/stream")
async def explain_stream(body: ExplainRequest | None = None, settings: Settings = Depends(get_settings)):
    req = _require_code(body)
    _require_credential(settings)

    prompt = build_explain_prompt(req.code, req.mode, req.language)
    # The full answer is fetched before anything is written; chunks are
    # paced out afterwards, not relayed token by token.
    try:
        explanation = await gemini_client.generate_text(prompt, settings)
    except UpstreamError as e:
        LOGGER.error("Gemini explain failed: %s", e)
        return PlainTextResponse("Error: Gemini API failed\n", status_code=502, headers=STREAM_HEADERS)

    async def lines() -> AsyncIterator[str]:
        for chunk in chunk_text(explanation):
            yield chunk + "\n"

    return StreamingResponse(lines(), media_type="text/plain; charset=utf-8", headers=STREAM_HEADERS)

async def _relay_error(request: Request, exc: RelayError) -> JSONResponse:
    if isinstance(exc, UpstreamError):
        LOGGER.error("Gemini explain failed: %s", exc)
        return JSONResponse(status_code=exc.status_code, content={"error": "Gemini API error", "detail": str(exc)})
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": "Invalid request body", "detail": jsonable_encoder(exc.errors())})

async def _server_error(request: Request, exc: Exception) -> JSONResponse:
    LOGGER.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Server error"})

def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the relay application.

    Args:
        settings: Resolved settings; loaded from file/environment when omitted.
    """
    settings = settings or load_settings()

    @asynccontextmanager
    async def lifespan(app_instance: FastAPI) -> AsyncIterator[None]:
        if not settings.has_credential:
            LOGGER.warning("GEMINI_API_KEY is not set; chat uses local fallback and explain endpoints are disabled")
        yield

    app_instance = FastAPI(title="FitBuddy relay", lifespan=lifespan)
    app_instance.state.settings = settings
    app_instance.include_router(router)
    app_instance.add_exception_handler(RelayError, _relay_error)
    app_instance.add_exception_handler(RequestValidationError, _request_validation_error)
    app_instance.add_exception_handler(Exception, _server_error)
    return app_instance

@lru_cache(maxsize=1)
def get_app() -> FastAPI:
    """Application served as ``fitbuddy_relay.serve.fastapi_app:app``, built on first access."""
    settings = load_settings()
    setup_logging(settings.log_level)
    return create_app(settings)

def __getattr__(name: str) -> FastAPI:
    # Importing this module must not read the environment; only touching
    # ``app`` does.
    if name == "app":
        return get_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
