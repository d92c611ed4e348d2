"""Lexicon-based sentiment scoring."""

import functools
import logging
from typing import Dict, Mapping, Optional

import nltk
from nltk.sentiment.vader import SentimentIntensityAnalyzer

from ..models.analysis import Sentiment
from ..models.enums import SentimentLabel
from .text_utils import tokenize


logger = logging.getLogger(__name__)

LEXICON_RESOURCE = "vader_lexicon"


@functools.lru_cache(maxsize=1)
def load_lexicon() -> Dict[str, float]:
    """
    Load the VADER word valences once per process.

    Downloads the NLTK resource when it is missing. If it still cannot be
    loaded an empty lexicon is returned, which scores every text neutral.
    """
    try:
        return dict(SentimentIntensityAnalyzer().lexicon)
    except LookupError:
        logger.info(f"NLTK resource '{LEXICON_RESOURCE}' not found, downloading")

    try:
        nltk.download(LEXICON_RESOURCE, quiet=True)
        return dict(SentimentIntensityAnalyzer().lexicon)
    except (LookupError, OSError) as e:
        logger.warning(f"Sentiment lexicon unavailable, all texts score neutral: {e}")
        return {}


class SentimentAnalyzer:
    """
    Scores text with a word valence lexicon.

    The score is the sum of the token valences divided by the number of
    tokens, so long documents are not more extreme than short ones. Words
    are looked up one at a time; negation is not handled.
    """

    def __init__(self, lexicon: Optional[Mapping[str, float]] = None):
        self._lexicon = lexicon

    @property
    def lexicon(self) -> Mapping[str, float]:
        if self._lexicon is None:
            self._lexicon = load_lexicon()
        return self._lexicon

    def analyze(self, text: str) -> Sentiment:
        tokens = tokenize(text)
        if not tokens:
            return Sentiment()

        lexicon = self.lexicon
        score = sum(lexicon.get(token.lower(), 0.0) for token in tokens) / len(tokens)
        if score > 0:
            label = SentimentLabel.POSITIVE
        elif score < 0:
            label = SentimentLabel.NEGATIVE
        else:
            label = SentimentLabel.NEUTRAL

        return Sentiment(score=score, label=label, magnitude=abs(score))
