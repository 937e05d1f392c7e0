"""
AIDOI - an identifier minted for an AI-assisted research object.

Field names match the backend's AIDOIMetadata struct exactly.
"""

from enum import Enum
from typing import Any, Optional
from pydantic import ConfigDict, Field, field_validator

from .base import WireModel, BaseEntity
from .rubric import (
    FIELD_VOCABULARY,
    RUBRIC_FIELDS,
    SECTIONS,
    FullyPartialNot,
    StageLevel,
    YesPartialNo,
)


class AidoiStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    DELETED = "deleted"


class AidoiResourceType(str, Enum):
    """Backend serializes these lowercase."""
    DATASET = "dataset"
    JOURNAL_ARTICLE = "journalarticle"
    SOFTWARE = "software"
    REPORT = "report"
    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"

    @property
    def label(self) -> str:
        return RESOURCE_TYPE_LABELS[self]


RESOURCE_TYPE_LABELS = {
    AidoiResourceType.DATASET: "Dataset",
    AidoiResourceType.JOURNAL_ARTICLE: "Paper / Journal Article",
    AidoiResourceType.SOFTWARE: "Model / Codebase",
    AidoiResourceType.REPORT: "Report",
    AidoiResourceType.IMAGE: "Image",
    AidoiResourceType.AUDIO: "Audio",
    AidoiResourceType.VIDEO: "Video",
}


class AidoiAuthor(WireModel):
    first_name: str
    last_name: str
    initials: str = ""
    affiliation: Optional[str] = None
    orcid: Optional[str] = None


class AidoiMetadata(WireModel):
    """
    Descriptive metadata plus the eligibility rubric.

    Rubric answers are normalized on the way in: legacy capitalized values
    become lowercase, anything unreadable becomes the lowest choice. The
    score fields are derived - call refresh_scores() after editing answers.
    """
    model_config = ConfigDict(validate_assignment=True)

    # Basic metadata
    creators: list[AidoiAuthor] = Field(default_factory=list)
    title: str = ""
    publisher: str = ""
    publication_year: Optional[int] = None
    resource_type: Optional[AidoiResourceType] = None
    description: Optional[str] = None
    license: Optional[str] = None
    ai_model: str = ""

    # Section B - Research Stages (40 pts)
    stage_hypothesis: StageLevel = StageLevel.D
    stage_hypothesis_description: str = ""
    stage_literature: StageLevel = StageLevel.D
    stage_literature_description: str = ""
    stage_design: StageLevel = StageLevel.D
    stage_design_description: str = ""
    stage_data_generation: StageLevel = StageLevel.D
    stage_data_generation_description: str = ""
    stage_data_analysis: StageLevel = StageLevel.D
    stage_data_analysis_description: str = ""
    stage_writing: StageLevel = StageLevel.D
    stage_writing_description: str = ""
    stage_figures: StageLevel = StageLevel.D
    stage_figures_description: str = ""
    stage_references: StageLevel = StageLevel.D
    stage_references_description: str = ""

    # Section C - Provenance & Transparency (20 pts)
    provenance_text_generated: YesPartialNo = YesPartialNo.NO
    provenance_text_generated_description: str = ""
    provenance_figures_created: YesPartialNo = YesPartialNo.NO
    provenance_figures_created_description: str = ""
    provenance_log_available: YesPartialNo = YesPartialNo.NO
    provenance_log_available_description: str = ""
    provenance_review_assisted: YesPartialNo = YesPartialNo.NO
    provenance_review_assisted_description: str = ""

    # Section D - AI Limitations & Human Oversight (15 pts)
    limitations_errors_documented: FullyPartialNot = FullyPartialNot.NOT
    limitations_errors_documented_description: str = ""
    limitations_ethical_corrections: FullyPartialNot = FullyPartialNot.NOT
    limitations_ethical_corrections_description: str = ""
    limitations_misinterpretations: FullyPartialNot = FullyPartialNot.NOT
    limitations_misinterpretations_description: str = ""

    # Section E - Reproducibility & Ethical Compliance (15 pts)
    reproducibility_metadata: YesPartialNo = YesPartialNo.NO
    reproducibility_metadata_description: str = ""
    reproducibility_datasets: YesPartialNo = YesPartialNo.NO
    reproducibility_datasets_description: str = ""
    reproducibility_ethics: YesPartialNo = YesPartialNo.NO
    reproducibility_ethics_description: str = ""

    # Section F - Overall Originality & Compliance (15 pts)
    originality_no_copied_material: YesPartialNo = YesPartialNo.NO
    originality_no_copied_material_description: str = ""
    originality_authorship_declaration: YesPartialNo = YesPartialNo.NO
    originality_authorship_declaration_description: str = ""
    originality_novelty_introduced: YesPartialNo = YesPartialNo.NO
    originality_novelty_introduced_description: str = ""

    # Calculated scores
    score_section_b: int = 0
    score_section_c: int = 0
    score_section_d: int = 0
    score_section_e: int = 0
    score_section_f: int = 0
    total_score: int = 0
    is_eligible: bool = False

    @field_validator(*RUBRIC_FIELDS, mode="before")
    @classmethod
    def _normalize_answer(cls, value: Any, info):
        return FIELD_VOCABULARY[info.field_name].parse(value)

    @field_validator("resource_type", mode="before")
    @classmethod
    def _normalize_resource_type(cls, value: Any):
        # Older form sent "Software", "JournalArticle", ...
        if isinstance(value, str):
            value = value.strip().lower()
            return value or None
        return value

    def rubric_answers(self) -> dict[str, str]:
        """The 21 rubric answers keyed by field name."""
        return {name: getattr(self, name).value for name in RUBRIC_FIELDS}

    def refresh_scores(self) -> "AidoiMetadata":
        """Recompute the derived score fields from the current answers."""
        from registry.scoring import score

        result = score(self)
        for name, value in result.as_metadata_fields().items():
            setattr(self, name, value)
        return self

    def merged(self, changes: dict) -> "AidoiMetadata":
        """Copy with the given fields replaced - for partial updates."""
        data = self.model_dump(mode="json")
        data.update(changes or {})
        return AidoiMetadata.model_validate(data)

    def section_scores(self) -> dict[str, int]:
        """Stored section scores keyed by section letter."""
        return {section.key: getattr(self, section.score_field) for section in SECTIONS}


class Aidoi(BaseEntity):
    """A minted identifier and its metadata, as stored by the backend."""
    organization_id: str
    org_admin_id: str = ""
    suffix: str
    target_url: str = ""
    metadata: AidoiMetadata = Field(default_factory=AidoiMetadata)
    status: AidoiStatus = AidoiStatus.ACTIVE


class AidoiCreate(WireModel):
    suffix: str = ""
    target_url: str = ""
    organization_id: str = Field(min_length=1)
    org_admin_id: Optional[str] = None
    metadata: AidoiMetadata = Field(default_factory=AidoiMetadata)
    # Form-only: appended to the derived suffix as /v{version}
    version: Optional[str] = Field(default=None, exclude=True)


class AidoiUpdate(WireModel):
    id: str = Field(min_length=1)
    suffix: Optional[str] = None
    target_url: Optional[str] = None
    metadata: Optional[AidoiMetadata] = None


class AidoiMinted(WireModel):
    """Backend's AidoiResponseDto."""
    full_aidoi: str
    resource_url: str
