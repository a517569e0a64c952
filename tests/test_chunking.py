from __future__ import annotations

from fitbuddy_relay.common.chunking import MAX_CHUNK, chunk_text, split_sentences


def test_split_sentences_on_terminal_punctuation() -> None:
    assert split_sentences("One. Two?  Three!\nFour") == ["One.", "Two?", "Three!", "Four"]


def test_short_text_is_one_chunk() -> None:
    assert chunk_text("A. B. C.") == ["A. B. C."]


def test_empty_text_yields_no_chunks() -> None:
    assert chunk_text("") == []
    assert chunk_text("   ") == []


def test_chunks_respect_limit_and_order() -> None:
    sentences = [f"Sentence number {i} explains one more step of the routine." for i in range(20)]
    text = " ".join(sentences)
    chunks = chunk_text(text)
    assert len(chunks) > 1
    assert all(len(c) <= MAX_CHUNK for c in chunks)
    assert " ".join(chunks) == text


def test_oversize_sentence_is_kept_whole() -> None:
    long_sentence = "word " * 60 + "end."
    text = f"Short intro. {long_sentence} Short outro."
    chunks = chunk_text(text)
    assert chunks == ["Short intro.", long_sentence, "Short outro."]


def test_leading_oversize_sentence_stands_alone() -> None:
    long_sentence = "x" * 300 + "."
    assert chunk_text(f"{long_sentence} Next.") == [long_sentence, "Next."]


def test_custom_limit() -> None:
    assert chunk_text("Aa. Bb. Cc.", max_chunk=7) == ["Aa. Bb.", "Cc."]
