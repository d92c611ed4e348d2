"""Sentence and word splitting shared by the analyzers."""

import re
from typing import List


SENTENCE_BOUNDARY = re.compile(r"[.!?]+")
WORD_PATTERN = re.compile(r"\w+")


def split_pieces(text: str) -> List[str]:
    """Split text on runs of sentence punctuation, keeping every piece."""
    return SENTENCE_BOUNDARY.split(text)


def split_sentences(text: str) -> List[str]:
    """
    Split text into non-blank sentences.

    Pieces are returned unstripped; a sentence's position is its index
    in this list.
    """
    return [piece for piece in split_pieces(text) if piece.strip()]


def tokenize(text: str) -> List[str]:
    """Split text into word tokens."""
    return WORD_PATTERN.findall(text)


def content_words(text: str) -> List[str]:
    """Lowercase tokens longer than three characters, in text order."""
    return [token for token in tokenize(text.lower()) if len(token) > 3]
