"""Sentence-respecting text chunking for pseudo-streamed responses."""
from __future__ import annotations
import re

MAX_CHUNK = 240

_SENTENCE_BOUNDARY = re.compile(r"(?<=[.?!])\s+")

def split_sentences(text: str) -> list[str]:
    return _SENTENCE_BOUNDARY.split(text)

def chunk_text(text: str, max_chunk: int = MAX_CHUNK) -> list[str]:
    """
    Greedily pack whole sentences into chunks of at most ``max_chunk`` chars.

    Sentences are never split, so a single sentence longer than
    ``max_chunk`` becomes an oversize chunk of its own.

    Args:
        text: Completed response text.
        max_chunk: Target maximum chunk length.

    Returns:
        Stripped, non-empty chunks in original order.
    """
    chunks: list[str] = []
    buf = ""
    for sentence in split_sentences(text or ""):
        if len(f"{buf} {sentence}") > max_chunk:
            if buf:
                chunks.append(buf.strip())
                buf = sentence
            else:
                chunks.append(sentence.strip())
                buf = ""
        else:
            buf = f"{buf} {sentence}" if buf else sentence
    if buf:
        chunks.append(buf.strip())
    return [c for c in chunks if c]
