"""Pairwise similarity and difference measures."""

import math
from collections import Counter
from typing import Dict, List

from ..analyzers.text_utils import content_words, split_sentences
from ..models.analysis import Entities
from ..models.comparison import EntityCount
from ..models.enums import ENTITY_CATEGORIES


MAX_LISTED_KEYWORDS = 10
SENTENCE_COUNT_GAP = 5
SENTENCE_LENGTH_GAP = 50


def frequency_map(text: str) -> Counter:
    """Count lowercase words longer than three characters, in first-seen order."""
    return Counter(content_words(text))


def jaccard_similarity(freq1: Counter, freq2: Counter) -> float:
    """Jaccard index of the two maps' vocabularies; 0.0 when both are empty."""
    union = freq1.keys() | freq2.keys()
    if not union:
        return 0.0
    return len(freq1.keys() & freq2.keys()) / len(union)


def common_keywords(freq1: Counter, freq2: Counter, limit: int = MAX_LISTED_KEYWORDS) -> List[str]:
    """Words in both maps, in the first map's order."""
    return [word for word in freq1 if word in freq2][:limit]


def unique_keywords(freq: Counter, other: Counter, limit: int = MAX_LISTED_KEYWORDS) -> List[str]:
    """Words of ``freq`` that ``other`` lacks, in first-seen order."""
    return [word for word in freq if word not in other][:limit]


def common_pair_entities(entities1: Entities, entities2: Entities) -> Dict[str, List[EntityCount]]:
    """Entities present in both documents, per category."""
    common: Dict[str, List[EntityCount]] = {}
    for category in ENTITY_CATEGORIES:
        others = set(entities2.get(category))
        common[category] = [
            EntityCount(entity=entity, count=2)
            for entity in entities1.get(category)
            if entity in others
        ]
    return common


def unique_pair_entities(entities: Entities, other: Entities) -> Dict[str, List[str]]:
    """Entities of one document absent from the other, per category."""
    unique: Dict[str, List[str]] = {}
    for category in ENTITY_CATEGORIES:
        others = set(other.get(category))
        unique[category] = [entity for entity in entities.get(category) if entity not in others]
    return unique


def structural_differences(text1: str, text2: str) -> List[str]:
    """
    Describe large differences in sentence count and sentence length.

    The length message always names Document 1 as the one with longer
    sentences, whichever it is.
    """
    differences: List[str] = []

    sentences1 = split_sentences(text1)
    sentences2 = split_sentences(text2)
    n1, n2 = len(sentences1), len(sentences2)

    if abs(n1 - n2) > SENTENCE_COUNT_GAP:
        differences.append(
            f"Document 1 has {n1} sentences while Document 2 has {n2} sentences"
        )

    if n1 and n2:
        avg1 = sum(len(s) for s in sentences1) / n1
        avg2 = sum(len(s) for s in sentences2) / n2
        if abs(avg1 - avg2) > SENTENCE_LENGTH_GAP:
            differences.append(
                f"Document 1 has longer sentences ({round_half_up(avg1)} chars) "
                f"compared to Document 2 ({round_half_up(avg2)} chars)"
            )

    return differences


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
