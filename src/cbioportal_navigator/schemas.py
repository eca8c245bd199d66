"""
Pydantic schemas for tool input, resolved catalog entities and tool outcomes.

All models serialize with camelCase keys to match the cBioPortal vocabulary.
"""

from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from cbioportal_navigator.constants import TargetPage

# ============================================================================
# Base Models
# ============================================================================


class CamelModel(BaseModel):
    """Base class: camelCase aliases, population by field name allowed."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_json_dict(self) -> dict[str, Any]:
        """Dump with camelCase keys, dropping unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


# ============================================================================
# Resolved Entities
# ============================================================================


class ResolvedStudy(CamelModel):
    """Study record as returned by the study resolver."""

    model_config = ConfigDict(frozen=True)

    study_id: str = Field(..., description="Study identifier (e.g., 'luad_tcga')")
    name: str = Field(..., description="Study display name")
    description: Optional[str] = Field(None, description="Study description")
    cancer_type: Optional[str] = Field(None, description="Cancer type name")
    sample_count: Optional[int] = Field(None, description="Number of samples in the study")

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "ResolvedStudy":
        """Map a catalog study record."""
        cancer_type = record.get("cancerType") or {}
        return cls(
            study_id=record["studyId"],
            name=record.get("name", record["studyId"]),
            description=record.get("description"),
            cancer_type=cancer_type.get("name") or record.get("cancerTypeId"),
            sample_count=record.get("allSampleCount"),
        )


class ResolvedProfile(CamelModel):
    """Molecular profile record as returned by the profile resolver."""

    model_config = ConfigDict(frozen=True)

    molecular_profile_id: str = Field(..., description="Profile identifier")
    molecular_alteration_type: str = Field(..., description="Catalog alteration type code")
    name: str = Field(..., description="Profile display name")
    description: Optional[str] = Field(None, description="Profile description")

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "ResolvedProfile":
        """Map a catalog molecular profile record."""
        return cls(
            molecular_profile_id=record["molecularProfileId"],
            molecular_alteration_type=record["molecularAlterationType"],
            name=record.get("name", record["molecularProfileId"]),
            description=record.get("description"),
        )


# ============================================================================
# Tool Input
# ============================================================================


class PageParameters(CamelModel):
    """Structured parameters for resolve_and_build_url."""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        extra="ignore",
    )

    study_keywords: Optional[list[str]] = Field(
        None, description="Keywords to search for studies (e.g., ['TCGA', 'lung'])"
    )
    study_id: Optional[str] = Field(None, description="Direct study ID (skips search)")
    patient_id: Optional[str] = Field(None, description="Patient/case identifier")
    sample_id: Optional[str] = Field(None, description="Sample identifier")
    genes: Optional[list[str]] = Field(None, description="Gene symbols (e.g., ['TP53', 'KRAS'])")
    alterations: Optional[list[str]] = Field(
        None, description="Alteration types: mutation, cna, fusion, mrna, protein, methylation"
    )
    case_set_id: Optional[str] = Field(None, description="Case set ID (defaults to '{studyId}_all')")
    tab: Optional[str] = Field(None, description="Specific tab to navigate to")
    filters: Optional[dict[str, Any]] = Field(None, description="Additional filters")

    @field_validator("study_id", "patient_id", "sample_id", "case_set_id", "tab")
    @classmethod
    def empty_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat blank strings as not provided."""
        return v or None

    @field_validator("study_keywords", "genes", "alterations")
    @classmethod
    def drop_blank_items(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        """Remove blank entries from string lists."""
        if v is None:
            return v
        return [item.strip() for item in v if item and item.strip()]


class ResolveAndBuildUrlInput(CamelModel):
    """Input for resolve_and_build_url."""

    target_page: TargetPage = Field(..., description="Type of cBioPortal page to navigate to")
    parameters: PageParameters = Field(default_factory=PageParameters)


# ============================================================================
# Tool Outcomes
# ============================================================================


class StudyOption(CamelModel):
    """One candidate study in a clarification outcome."""

    study_id: str
    name: str
    description: Optional[str] = None
    sample_count: Optional[int] = None

    @classmethod
    def from_study(cls, study: ResolvedStudy) -> "StudyOption":
        return cls(
            study_id=study.study_id,
            name=study.name,
            description=study.description,
            sample_count=study.sample_count,
        )


class SuccessResponse(CamelModel):
    """URL was built."""

    success: Literal[True] = True
    url: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)

    def to_json_dict(self) -> dict[str, Any]:
        data = super().to_json_dict()
        if not self.warnings:
            data.pop("warnings", None)
        return data


class ClarificationResponse(CamelModel):
    """Input matched several studies; the caller must pick one."""

    success: Literal[False] = False
    needs_selection: Literal[True] = True
    message: str
    options: list[StudyOption]


class ErrorResponse(CamelModel):
    """Resolution failed."""

    success: Literal[False] = False
    error: str
    details: Optional[dict[str, Any]] = None


NavigationOutcome = Union[SuccessResponse, ClarificationResponse, ErrorResponse]
