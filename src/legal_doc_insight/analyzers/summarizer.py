"""Extractive summarization of legal text.

Sentences are ranked by the document-wide frequency of their words, with a
fixed bonus for every legal term they mention, and the best ones are
emitted greedily until the length or sentence limit is reached.
"""

from collections import Counter
from typing import List, Optional, Tuple

from ..config.defaults import LEGAL_TERMS
from .text_utils import content_words, split_pieces, tokenize


NO_CONTENT_SUMMARY = "No content available for summarization."
EMPTY_SUMMARY = "Summary could not be generated."
FAILED_SUMMARY = "Summary generation failed."

LEGAL_TERM_BONUS = 10
MIN_SENTENCE_LENGTH = 10


class Summarizer:
    """
    Frequency-based extractive summarizer.

    Output sentences keep their ranking order rather than document order.
    """

    def __init__(
        self,
        legal_terms: Optional[List[str]] = None,
        max_sentences: int = 8,
    ):
        """
        Initialize the summarizer.

        Args:
            legal_terms: Terms that boost a sentence's score. Defaults to
                the built-in legal vocabulary.
            max_sentences: Maximum number of sentences in a summary.
        """
        terms = legal_terms if legal_terms is not None else LEGAL_TERMS
        self._legal_terms = [t.lower() for t in terms]
        self._max_sentences = max_sentences

    def summarize(self, text: str, max_length: int = 500) -> str:
        """
        Build a summary of at most ``max_length`` characters.

        Args:
            text: Document text.
            max_length: Length limit checked before each sentence is added.

        Returns:
            The summary, or a fixed message when nothing can be summarized.
        """
        sentences = [
            piece for piece in split_pieces(text)
            if len(piece.strip()) > MIN_SENTENCE_LENGTH
        ]
        if not sentences:
            return NO_CONTENT_SUMMARY

        ranked = self.rank_sentences(text, sentences)

        summary = ""
        count = 0
        for sentence, _score in ranked:
            if count >= self._max_sentences or len(summary + sentence) > max_length:
                break
            summary += (" " if summary else "") + sentence + "."
            count += 1

        return summary.strip() or EMPTY_SUMMARY

    def rank_sentences(self, text: str, sentences: List[str]) -> List[Tuple[str, int]]:
        """Score sentences and sort them by score, ties in document order."""
        frequencies = Counter(content_words(text))

        scored = []
        for sentence in sentences:
            lowered = sentence.lower()
            score = sum(frequencies.get(token, 0) for token in tokenize(lowered))
            score += LEGAL_TERM_BONUS * sum(1 for term in self._legal_terms if term in lowered)
            scored.append((sentence.strip(), score))

        # sorted() is stable
        return sorted(scored, key=lambda item: item[1], reverse=True)
