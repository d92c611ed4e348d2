"""Document type classification."""

from typing import List, Optional

from ..config.defaults import default_classification_rules
from ..config.models import CascadeRule, first_match


class DocumentClassifier:
    """Labels a document by the first cascade rule its text matches."""

    def __init__(
        self,
        rules: Optional[List[CascadeRule]] = None,
        default_label: str = "Legal Document",
    ):
        self._rules = rules if rules is not None else default_classification_rules()
        self._default_label = default_label

    def classify(self, text: str) -> str:
        return first_match(self._rules, text, self._default_label)
