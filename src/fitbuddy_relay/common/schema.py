"""Pydantic models and dataclasses for request/response types."""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel

class ExplainMode(str, Enum):
    summary = "summary"
    line = "line"
    refactor = "refactor"
    doc = "doc"

class ExplainRequest(BaseModel):
    # code is checked by the handler so an empty value maps to a 400
    code: str | None = None
    mode: ExplainMode = ExplainMode.summary
    language: str = "auto"

class ChatRequest(BaseModel):
    message: str | None = None

class ChatResponse(BaseModel):
    reply: str
    source: str
    error: str | None = None

class ExplainResponse(BaseModel):
    explanation: str
    source: str

@dataclass(frozen=True)
class Found:
    """Candidate text located in a Gemini response."""
    text: str

@dataclass(frozen=True)
class NotFound:
    """Gemini response carried no usable candidate text."""

CandidateText = Found | NotFound
