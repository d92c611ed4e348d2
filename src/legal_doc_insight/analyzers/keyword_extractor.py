"""TF-IDF keyword extraction."""

import logging
from typing import List, Optional

import numpy as np
from sklearn.feature_extraction.text import TfidfVectorizer

from ..models.analysis import Keyword
from .text_utils import split_sentences


logger = logging.getLogger(__name__)

# Four or more word characters; shorter words are never keywords.
TOKEN_PATTERN = r"(?u)\b\w\w\w\w+\b"


class KeywordExtractor:
    """
    Ranks a document's words by TF-IDF weight.

    The document's sentences form the corpus, so a word scores high when
    it is frequent overall but concentrated in few sentences. A new
    vectorizer is fitted on every call and nothing is kept between calls.
    """

    def __init__(self, top_n: int = 20):
        self._top_n = top_n

    def extract(self, text: str, top_n: Optional[int] = None) -> List[Keyword]:
        """
        Extract the highest-scoring keywords of a document.

        Args:
            text: Document text.
            top_n: Number of keywords to return. Defaults to the value
                given at construction.

        Returns:
            Keywords sorted by score descending, ties by word.
        """
        limit = self._top_n if top_n is None else top_n
        sentences = [s.strip() for s in split_sentences(text)]
        if not sentences or limit <= 0:
            return []

        vectorizer = TfidfVectorizer(
            lowercase=True,
            token_pattern=TOKEN_PATTERN,
            norm=None,
        )
        try:
            matrix = vectorizer.fit_transform(sentences)
        except ValueError:
            # empty vocabulary
            logger.debug("No keyword candidates in text")
            return []

        scores = np.asarray(matrix.sum(axis=0)).ravel()
        words = vectorizer.get_feature_names_out()

        ranked = sorted(zip(words, scores), key=lambda item: (-item[1], item[0]))
        return [Keyword(word=str(word), score=float(score)) for word, score in ranked[:limit]]
