"""
Eligibility scoring for AIDOI metadata.

21 rubric items across five weighted sections (B-F), 105 points possible.
A record is eligible at 60 points or more.

The scorer is total: missing, None or unrecognized answers count as the
lowest choice of the item's vocabulary (0 points). Forms call it on every
edit to drive the live completion meter, so it holds no state.
"""

from typing import Any, Mapping
from pydantic import BaseModel, ConfigDict

from models.rubric import FIELD_VOCABULARY, MAX_TOTAL, RUBRIC_FIELDS, SECTIONS

ELIGIBILITY_THRESHOLD = 60


class EligibilityResult(BaseModel):
    """Section scores, total and verdict for one answer set."""
    model_config = ConfigDict(frozen=True)

    score_b: int = 0
    score_c: int = 0
    score_d: int = 0
    score_e: int = 0
    score_f: int = 0
    total: int = 0
    is_eligible: bool = False

    @property
    def max_total(self) -> int:
        return MAX_TOTAL

    def section(self, key: str) -> int:
        return getattr(self, f"score_{key}")

    def as_metadata_fields(self) -> dict:
        """Backend field names, for embedding into create/update payloads."""
        fields = {section.score_field: self.section(section.key) for section in SECTIONS}
        fields["total_score"] = self.total
        fields["is_eligible"] = self.is_eligible
        return fields


def _answers_of(answers: Any) -> Mapping:
    # AidoiMetadata and friends expose their answers; plain dicts are used as-is
    if hasattr(answers, "rubric_answers"):
        return answers.rubric_answers()
    if isinstance(answers, Mapping):
        return answers
    return {}


def item_points(field: str, value: Any) -> int:
    """Points for one rubric item. Unknown field names score 0."""
    vocabulary = FIELD_VOCABULARY.get(field)
    if vocabulary is None:
        return 0
    return vocabulary.parse(value).points


def score(answers: Any) -> EligibilityResult:
    """
    Score a set of rubric answers.

    Args:
        answers: mapping of rubric field name -> answer, or an AidoiMetadata.

    Returns:
        EligibilityResult with per-section scores, total and eligibility.
    """
    values = _answers_of(answers)

    sections = {}
    for section in SECTIONS:
        sections[f"score_{section.key}"] = sum(
            item_points(name, values.get(name)) for name in section.field_names
        )

    total = sum(sections.values())
    return EligibilityResult(
        **sections,
        total=total,
        is_eligible=total >= ELIGIBILITY_THRESHOLD,
    )


def completion(answers: Any) -> float:
    """Fraction of the 21 items carrying a recognized answer (0.0 - 1.0)."""
    values = _answers_of(answers)
    answered = sum(
        1 for name in RUBRIC_FIELDS
        if FIELD_VOCABULARY[name].recognize(values.get(name)) is not None
    )
    return answered / len(RUBRIC_FIELDS)
