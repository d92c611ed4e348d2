"""Named entity extraction with spaCy.

People, organizations and places come from the statistical NER model.
Dates and money combine NER with regular expressions, and emails and phone
numbers are pattern-only. Pattern matches are aligned to spaCy tokens so
every category reports text the same way.
"""

import functools
import logging
import re
from typing import Dict, List, Optional, Tuple

import spacy
from spacy.language import Language
from spacy.tokens import Doc

from ..models.analysis import Entities
from ..models.enums import ENTITY_CATEGORIES
from ..stages import StageFailure, run_stage


logger = logging.getLogger(__name__)

DEFAULT_MODEL = "en_core_web_sm"

NER_LABELS: Dict[str, Tuple[str, ...]] = {
    "persons": ("PERSON",),
    "organizations": ("ORG",),
    "dates": ("DATE",),
    "money": ("MONEY",),
    "places": ("GPE", "LOC"),
}

_MONTHS = (
    r"(?:January|February|March|April|May|June|July|August|September|"
    r"October|November|December|Jan|Feb|Mar|Apr|Jun|Jul|Aug|Sep|Sept|Oct|Nov|Dec)\.?"
)
_AMOUNT = r"(?:\d{1,3}(?:,\d{3})+(?:\.\d+)?|\d+(?:\.\d+)?)"

PATTERNS: Dict[str, "re.Pattern[str]"] = {
    "dates": re.compile(
        r"\b\d{1,2}[/-]\d{1,2}[/-]\d{2,4}\b"
        r"|\b\d{4}-\d{2}-\d{2}\b"
        rf"|\b{_MONTHS}\s+\d{{1,2}}(?:st|nd|rd|th)?,?\s+\d{{4}}\b"
        rf"|\b\d{{1,2}}(?:st|nd|rd|th)?\s+(?:of\s+)?{_MONTHS}\s+\d{{4}}\b",
        re.IGNORECASE,
    ),
    "money": re.compile(
        rf"[$€£]\s?{_AMOUNT}(?:\s(?:million|billion|thousand))?"
        rf"|\b{_AMOUNT}\s?(?:USD|EUR|GBP|dollars|euros|pounds)\b",
        re.IGNORECASE,
    ),
    "emails": re.compile(r"\b[\w.+-]+@[\w-]+(?:\.[\w-]+)+\b"),
    "phones": re.compile(
        r"(?<!\w)(?:\+\d{1,3}[\s.-]?)?(?:\(\d{3}\)\s?|\d{3}[\s.-]?)\d{3}[\s.-]?\d{4}\b"
    ),
}


@functools.lru_cache(maxsize=None)
def load_pipeline(model_name: str = DEFAULT_MODEL) -> Language:
    """
    Load a spaCy pipeline once per process.

    Falls back to a blank English pipeline when the model package is not
    installed; pattern-based categories still work, NER categories are empty.
    """
    try:
        return spacy.load(model_name)
    except OSError:
        logger.warning(
            f"spaCy model '{model_name}' not found, using a blank English pipeline. "
            f"Install it with: python -m spacy download {model_name}"
        )
        return spacy.blank("en")


class EntityExtractor:
    """Extracts the seven entity categories from document text."""

    def __init__(self, model_name: str = DEFAULT_MODEL, nlp: Optional[Language] = None):
        """
        Initialize the entity extractor.

        Args:
            model_name: spaCy model to load on first use.
            nlp: Optional already-loaded pipeline (takes precedence).
        """
        self._model_name = model_name
        self._nlp = nlp

    @property
    def nlp(self) -> Language:
        if self._nlp is None:
            self._nlp = load_pipeline(self._model_name)
        return self._nlp

    def extract(self, text: str, failures: Optional[List[StageFailure]] = None) -> Entities:
        """
        Extract entities grouped by category.

        Each category is extracted on its own; one that fails comes back
        empty and is recorded in ``failures``.
        """
        doc = self._parse(text)

        values: Dict[str, List[str]] = {}
        for category in ENTITY_CATEGORIES:
            values[category] = run_stage(
                f"entities.{category}",
                functools.partial(self._extract_category, doc, category),
                list,
                failures,
            )

        return Entities(**values)

    def _parse(self, text: str) -> Doc:
        nlp = self.nlp
        if len(text) >= nlp.max_length:
            nlp.max_length = len(text) + 1
        return nlp(text)

    def _extract_category(self, doc: Doc, category: str) -> List[str]:
        """Collect a category's entity texts in document order."""
        found: List[Tuple[int, str]] = []

        labels = NER_LABELS.get(category, ())
        for ent in doc.ents:
            if ent.label_ in labels:
                found.append((ent.start_char, _normalize(ent.text)))

        pattern = PATTERNS.get(category)
        if pattern is not None:
            for match in pattern.finditer(doc.text):
                span = doc.char_span(match.start(), match.end(), alignment_mode="expand")
                if span is not None:
                    found.append((span.start_char, _normalize(span.text)))

        if category == "emails":
            found.extend((token.idx, token.text) for token in doc if token.like_email)

        found.sort(key=lambda item: item[0])
        return [value for _, value in found]


def _normalize(value: str) -> str:
    """Collapse internal whitespace (entities may span line breaks)."""
    return " ".join(value.split())
