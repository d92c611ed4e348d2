"""Built-in vocabulary tables.

These are the tables the analyzers use unless a configuration directory
or explicit tables are loaded through the ConfigurationManager.
"""

from typing import List

from ..models.enums import RiskLevel
from .models import CascadeRule, RiskKeyword, SimplificationRule, VocabularyConfiguration


HIGH_RISK_KEYWORDS = ["liability", "damages", "penalty", "breach"]
MEDIUM_RISK_KEYWORDS = ["termination", "default", "warranty"]

# Order matters: hits are recorded keyword by keyword in this order.
RISK_KEYWORDS = [
    "liability", "damages", "penalty", "breach", "termination", "default",
    "indemnification", "warranty", "guarantee", "force majeure", "arbitration",
    "confidentiality", "non-compete", "liquidated damages", "specific performance",
    "injunction", "cease and desist", "material breach", "cure period",
]

LEGAL_TERMS = [
    "agreement", "contract", "party", "parties", "obligation", "liability",
    "damages", "breach", "termination", "amendment", "governing law",
    "jurisdiction", "dispute", "arbitration", "confidentiality", "indemnification",
    "warranty", "representation", "covenant", "condition", "precedent",
]

SIMPLIFICATIONS = [
    ("hereinafter", "from now on"),
    ("whereas", "while"),
    ("pursuant to", "according to"),
    ("in accordance with", "following"),
    ("notwithstanding", "despite"),
    ("hereby", "by this"),
    ("herein", "in this document"),
    ("thereof", "of that"),
    ("therein", "in that"),
    ("thereby", "by that"),
    ("whereby", "by which"),
    ("wherein", "in which"),
    ("heretofore", "before now"),
    ("hereinafter", "from now on"),
    ("aforesaid", "mentioned above"),
    ("aforementioned", "mentioned above"),
]

TERM_TRIGGERS = [
    "terms and conditions", "terms of service", "terms of use", "conditions",
    "obligation", "responsibility", "liability", "warranty", "guarantee",
    "shall", "must", "will", "agree", "accept", "comply", "violation",
    "penalty", "fine", "termination", "breach", "default",
]


def _severity_for(keyword: str) -> RiskLevel:
    if keyword in HIGH_RISK_KEYWORDS:
        return RiskLevel.HIGH
    if keyword in MEDIUM_RISK_KEYWORDS:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def default_risk_keywords() -> List[RiskKeyword]:
    """Build the default risk vocabulary with severities."""
    return [RiskKeyword(keyword=k, severity=_severity_for(k)) for k in RISK_KEYWORDS]


def default_simplifications() -> List[SimplificationRule]:
    """Build the default simplification dictionary."""
    return [SimplificationRule(phrase=p, replacement=r) for p, r in SIMPLIFICATIONS]


def default_classification_rules() -> List[CascadeRule]:
    """Build the default document classification cascade."""
    return [
        CascadeRule(label="Contract/Agreement", keywords=["agreement", "contract"], priority=1),
        CascadeRule(label="Policy/Terms", keywords=["policy", "terms"], priority=2),
        CascadeRule(label="Notice/Letter", keywords=["notice", "letter"], priority=3),
        CascadeRule(label="Legal Clause", keywords=["clause", "section"], priority=4),
    ]


def default_term_category_rules() -> List[CascadeRule]:
    """Build the default terms-and-conditions category cascade."""
    return [
        CascadeRule(label="Liability", keywords=["liability", "damages"], priority=1),
        CascadeRule(label="Termination", keywords=["termination", "breach"], priority=2),
        CascadeRule(label="Warranty", keywords=["warranty", "guarantee"], priority=3),
        CascadeRule(label="Obligation", keywords=["obligation", "responsibility"], priority=4),
        CascadeRule(label="Penalty", keywords=["penalty", "fine"], priority=5),
    ]


def default_configuration() -> VocabularyConfiguration:
    """Build a fresh configuration holding all built-in tables."""
    return VocabularyConfiguration(
        risk_keywords=default_risk_keywords(),
        legal_terms=list(LEGAL_TERMS),
        simplifications=default_simplifications(),
        classification_rules=default_classification_rules(),
        classification_default="Legal Document",
        term_triggers=list(TERM_TRIGGERS),
        term_category_rules=default_term_category_rules(),
        term_category_default="General",
    )
