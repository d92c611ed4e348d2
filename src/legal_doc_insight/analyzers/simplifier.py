"""Plain-language rewriting of archaic legal phrasing."""

import re
from typing import List, Optional

from ..config.models import SimplificationRule
from ..config.defaults import default_simplifications
from .text_utils import split_pieces


LONG_SENTENCE_LENGTH = 100
CLAUSE_BOUNDARY = re.compile(r"[,;]")


class TextSimplifier:
    """Replaces legal phrases with plain words and breaks up long sentences."""

    def __init__(self, rules: Optional[List[SimplificationRule]] = None):
        rules = rules if rules is not None else default_simplifications()
        self._rules = [
            (re.compile(r"\b" + re.escape(rule.phrase) + r"\b", re.IGNORECASE), rule.replacement)
            for rule in rules
        ]

    def simplify(self, text: str) -> str:
        """
        Rewrite text in plainer language.

        Phrases are substituted in dictionary order, then every sentence
        longer than 100 characters is split at commas and semicolons.
        """
        simplified = text
        for pattern, replacement in self._rules:
            simplified = pattern.sub(lambda _match: replacement, simplified)

        pieces = [
            self.break_long_sentence(piece) if len(piece) > LONG_SENTENCE_LENGTH else piece
            for piece in split_pieces(simplified)
        ]
        return ". ".join(pieces).strip()

    @staticmethod
    def break_long_sentence(sentence: str) -> str:
        """Turn the clauses of a sentence into separate sentences."""
        clauses = CLAUSE_BOUNDARY.split(sentence)
        if len(clauses) > 1:
            return ". ".join(clauses)
        return sentence
