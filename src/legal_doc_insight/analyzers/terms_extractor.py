"""Detection of contractual terms and conditions."""

from typing import List, Optional

from ..config.defaults import TERM_TRIGGERS, default_term_category_rules
from ..config.models import CascadeRule, first_match
from ..models.analysis import TermsAndCondition
from .text_utils import split_sentences


class TermsExtractor:
    """Flags sentences that read as obligations, conditions or penalties."""

    def __init__(
        self,
        triggers: Optional[List[str]] = None,
        category_rules: Optional[List[CascadeRule]] = None,
        default_category: str = "General",
    ):
        triggers = triggers if triggers is not None else TERM_TRIGGERS
        self._triggers = [t.lower() for t in triggers]
        self._category_rules = (
            category_rules if category_rules is not None else default_term_category_rules()
        )
        self._default_category = default_category

    def extract(self, text: str) -> List[TermsAndCondition]:
        """Return every sentence containing a trigger phrase, categorized."""
        terms: List[TermsAndCondition] = []

        for position, sentence in enumerate(split_sentences(text)):
            lowered = sentence.lower()
            if any(trigger in lowered for trigger in self._triggers):
                terms.append(
                    TermsAndCondition(
                        sentence=sentence.strip(),
                        position=position,
                        type=self.categorize(sentence),
                    )
                )

        return terms

    def categorize(self, sentence: str) -> str:
        """Get the category of a flagged sentence."""
        return first_match(self._category_rules, sentence, self._default_category)
