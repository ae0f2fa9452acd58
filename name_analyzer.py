"""
NameAnalyzer — Heuristic quality score for an accepted identifier.

Scores a name against naming conventions and against the keywords of a
free-text description of what the variable holds. Best effort only: no rule
firing simply yields a sparse result.
"""

import re
from dataclasses import dataclass, field
from enum import Enum


GREAT_THRESHOLD = 4
GOOD_THRESHOLD = 2

SHORT_NAME_ALLOWLIST = frozenset({"i", "j", "k", "x", "y", "z"})
MIN_LENGTH = 3
GOOD_MAX_LENGTH = 15
MAX_LENGTH = 25

STOP_WORDS = frozenset({"this", "that", "with", "from", "into", "onto", "for", "and", "the"})
MIN_KEYWORD_LENGTH = 4

# Checked in order; first hit wins. "flag" style names always map to "Is".
CATEGORY_KEYWORDS = (
    ("Count", ("count", "number of", "counter")),
    ("Index", ("index", "position")),
    ("Is", ("flag", "boolean", "condition")),
    ("Amount", ("price", "cost", "amount")),
    ("Name", ("name", "label", "title")),
    ("Date", ("date", "time")),
    ("List", ("list", "array", "collection")),
)

_CAMEL = re.compile(r"^[a-z][a-zA-Z0-9_]*$")
_HAS_UPPER = re.compile(r"[A-Z]")
_PASCAL = re.compile(r"^[A-Z][a-zA-Z0-9_]*$")
_SNAKE = re.compile(r"^[a-z][a-z0-9_]*$")
_ALL_CAPS = re.compile(r"^[A-Z][A-Z0-9_]*$")
_HUNGARIAN = re.compile(r"^[a-z][a-z][A-Z]")
_UNINFORMATIVE_PREFIX = re.compile(r"^(tmp|temp|var|my)[A-Z]")


class Label(str, Enum):
    GREAT = "Great"
    GOOD = "Good"
    NEEDS_WORK = "NeedsWork"

    @property
    def summary(self) -> str:
        return _LABEL_SUMMARIES[self]

    @staticmethod
    def for_score(score: int) -> "Label":
        if score >= GREAT_THRESHOLD:
            return Label.GREAT
        if score >= GOOD_THRESHOLD:
            return Label.GOOD
        return Label.NEEDS_WORK


_LABEL_SUMMARIES = {
    Label.GREAT: "Great variable name! It follows best practices.",
    Label.GOOD: "Good variable name with room for improvement.",
    Label.NEEDS_WORK: "This variable name could be improved.",
}


@dataclass(frozen=True)
class Recommendation:
    score: int
    label: Label
    positives: tuple = field(default_factory=tuple)
    suggestions: tuple = field(default_factory=tuple)

    @property
    def overall(self) -> str:
        return self.label.summary

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "label": self.label.value,
            "overall": self.overall,
            "positives": list(self.positives),
            "suggestions": list(self.suggestions),
        }


def extract_keywords(description: str) -> list[str]:
    """Lower-cased description tokens that survive the length and stop-word filters."""
    return [
        word for word in description.lower().split()
        if len(word) >= MIN_KEYWORD_LENGTH and word not in STOP_WORDS
    ]


def infer_category(description: str) -> str | None:
    """Expected semantic word for the name, from the description's vocabulary."""
    desc = description.lower()
    for category, needles in CATEGORY_KEYWORDS:
        if any(n in desc for n in needles):
            return category
    return None


def analyze(identifier: str, description: str | None) -> Recommendation | None:
    """
    Score an identifier already accepted by the automaton.

    Returns None when there is no description to compare against.
    """
    if not identifier or not description:
        return None

    score = 0
    positives = []
    suggestions = []

    # Case convention
    if _CAMEL.match(identifier) and _HAS_UPPER.search(identifier) and not identifier.startswith("_"):
        score += 2
        positives.append("Uses camelCase notation, which is ideal for variables")
    elif _PASCAL.match(identifier):
        suggestions.append(
            "Consider using camelCase instead of PascalCase for variables "
            "(PascalCase is typically used for classes)"
        )
    elif _SNAKE.match(identifier) and "_" in identifier:
        score += 1
        positives.append("Uses snake_case, which is readable but consider camelCase for better convention")
    elif _ALL_CAPS.match(identifier):
        suggestions.append("ALL_CAPS naming is typically reserved for constants, not variables")

    if _HUNGARIAN.match(identifier):
        suggestions.append("Avoid Hungarian notation (type prefixes like 'strName') as it's considered outdated")

    # Length bands; 16..25 is neutral
    n = len(identifier)
    if n < MIN_LENGTH and identifier not in SHORT_NAME_ALLOWLIST:
        suggestions.append(
            "Variable name is very short. Consider a more descriptive name "
            "unless it's a well-known convention (like 'i' for loops)"
        )
    elif n > MAX_LENGTH:
        suggestions.append("Variable name is very long. Consider a more concise name")
    elif MIN_LENGTH <= n <= GOOD_MAX_LENGTH:
        score += 1
        positives.append("Name length is appropriate")

    # Description keywords
    lowered = identifier.lower()
    found = [word for word in extract_keywords(description) if word in lowered]
    if found:
        score += 2
        positives.append(f"Name reflects its purpose (contains keywords: {', '.join(found)})")
    else:
        category = infer_category(description)
        if category and category.lower() not in lowered:
            suggestions.append(f'Consider including "{category}" in the name to reflect its purpose')

    if identifier.startswith("_"):
        suggestions.append(
            "Leading underscore is often used for private properties/variables, "
            "be sure this is intentional"
        )

    if _UNINFORMATIVE_PREFIX.match(identifier):
        suggestions.append("Avoid uninformative prefixes like 'tmp', 'temp', 'var', or 'my'")

    return Recommendation(
        score=score,
        label=Label.for_score(score),
        positives=tuple(positives),
        suggestions=tuple(suggestions),
    )


get_recommendation = analyze
