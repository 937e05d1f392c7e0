"""
Rubric vocabularies and section layout for AIDOI eligibility.

Three closed vocabularies, each answer worth a fixed number of points.
Values are lowercase on the wire (that's what the backend serializes);
the capitalized spellings from the older form schema are accepted as
aliases on input and normalized.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class RubricAnswer(str, Enum):
    """Shared behaviour for the rubric vocabularies."""

    @property
    def points(self) -> int:
        return _POINTS[type(self)][self.value]

    @classmethod
    def lowest(cls) -> "RubricAnswer":
        """The zero-point choice - what absent or unreadable answers become."""
        return min(cls, key=lambda answer: answer.points)

    @classmethod
    def highest(cls) -> "RubricAnswer":
        return max(cls, key=lambda answer: answer.points)

    @classmethod
    def recognize(cls, value: Any) -> Optional["RubricAnswer"]:
        """Return the matching member, or None if value isn't one of ours."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        value = _LEGACY_ALIASES.get(value, value)
        try:
            return cls(value)
        except ValueError:
            return None

    @classmethod
    def parse(cls, value: Any) -> "RubricAnswer":
        """Total parse: anything unrecognized falls back to the lowest choice."""
        answer = cls.recognize(value)
        return answer if answer is not None else cls.lowest()


class StageLevel(RubricAnswer):
    """Degree of AI involvement in a research stage."""
    A = "a"
    B = "b"
    C = "c"
    D = "d"


class YesPartialNo(RubricAnswer):
    YES = "yes"
    PARTIAL = "partial"
    NO = "no"


class FullyPartialNot(RubricAnswer):
    FULLY = "fully"
    PARTIAL = "partial"
    NOT = "not"


_POINTS: dict[type, dict[str, int]] = {
    StageLevel: {"a": 5, "b": 3, "c": 1, "d": 0},
    YesPartialNo: {"yes": 5, "partial": 3, "no": 0},
    FullyPartialNot: {"fully": 5, "partial": 3, "not": 0},
}

# Older form schema used capitalized values for the same concepts
_LEGACY_ALIASES = {
    "A": "a",
    "B": "b",
    "C": "c",
    "D": "d",
    "Yes": "yes",
    "Partial": "partial",
    "No": "no",
    "Fully": "fully",
    "Not": "not",
}


@dataclass(frozen=True)
class RubricSection:
    """A named group of rubric items sharing one vocabulary."""
    key: str
    title: str
    vocabulary: type
    field_names: tuple

    @property
    def max_score(self) -> int:
        return len(self.field_names) * self.vocabulary.highest().points

    @property
    def score_field(self) -> str:
        """Backend field holding this section's computed score."""
        return f"score_section_{self.key}"


SECTIONS: tuple[RubricSection, ...] = (
    RubricSection(
        key="b",
        title="Research Stages",
        vocabulary=StageLevel,
        field_names=(
            "stage_hypothesis",
            "stage_literature",
            "stage_design",
            "stage_data_generation",
            "stage_data_analysis",
            "stage_writing",
            "stage_figures",
            "stage_references",
        ),
    ),
    RubricSection(
        key="c",
        title="Provenance & Transparency",
        vocabulary=YesPartialNo,
        field_names=(
            "provenance_text_generated",
            "provenance_figures_created",
            "provenance_log_available",
            "provenance_review_assisted",
        ),
    ),
    RubricSection(
        key="d",
        title="AI Limitations & Human Oversight",
        vocabulary=FullyPartialNot,
        field_names=(
            "limitations_errors_documented",
            "limitations_ethical_corrections",
            "limitations_misinterpretations",
        ),
    ),
    RubricSection(
        key="e",
        title="Reproducibility & Ethical Compliance",
        vocabulary=YesPartialNo,
        field_names=(
            "reproducibility_metadata",
            "reproducibility_datasets",
            "reproducibility_ethics",
        ),
    ),
    RubricSection(
        key="f",
        title="Originality & Compliance",
        vocabulary=YesPartialNo,
        field_names=(
            "originality_no_copied_material",
            "originality_authorship_declaration",
            "originality_novelty_introduced",
        ),
    ),
)

RUBRIC_FIELDS: tuple[str, ...] = tuple(f for section in SECTIONS for f in section.field_names)

FIELD_VOCABULARY: dict[str, type] = {
    f: section.vocabulary for section in SECTIONS for f in section.field_names
}

MAX_TOTAL: int = sum(section.max_score for section in SECTIONS)
