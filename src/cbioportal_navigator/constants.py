"""
Constants used throughout the application.

Includes target pages, alteration type codes, cache key prefixes and
error messages.
"""

from enum import Enum

# ============================================================================
# Target Pages
# ============================================================================


class TargetPage(str, Enum):
    """cBioPortal page types a navigation URL can point to."""

    STUDY = "study"
    PATIENT = "patient"
    RESULTS = "results"


# ============================================================================
# Alteration Types
# ============================================================================


class AlterationType(str, Enum):
    """Semantic alteration labels accepted from callers."""

    MUTATION = "mutation"
    CNA = "cna"
    FUSION = "fusion"
    MRNA = "mrna"
    PROTEIN = "protein"
    METHYLATION = "methylation"


# Semantic label -> cBioPortal molecularAlterationType
ALTERATION_TYPE_CODES = {
    AlterationType.MUTATION.value: "MUTATION_EXTENDED",
    AlterationType.CNA.value: "COPY_NUMBER_ALTERATION",
    AlterationType.FUSION.value: "FUSION",
    AlterationType.MRNA.value: "MRNA_EXPRESSION",
    AlterationType.PROTEIN.value: "PROTEIN_LEVEL",
    AlterationType.METHYLATION.value: "METHYLATION",
}

# Unknown labels resolve to mutation data
DEFAULT_ALTERATION_CODE = ALTERATION_TYPE_CODES[AlterationType.MUTATION.value]

# ============================================================================
# URL Defaults
# ============================================================================

DEFAULT_STUDY_TAB = "summary"
DEFAULT_RESULTS_TAB = "oncoprint"
ALL_CASES_SUFFIX = "_all"

# ============================================================================
# Standard Annotations
# ============================================================================

# Read-only tools (no modifications)
READONLY_ANNOTATIONS = {
    "readOnlyHint": True,
    "destructiveHint": False,
    "idempotentHint": True,
    "openWorldHint": True,
}

# ============================================================================
# Cache Configuration
# ============================================================================

CACHE_PREFIX_STUDY_SEARCH = "search:"
CACHE_PREFIX_STUDY_VALID = "validate:"
CACHE_PREFIX_STUDY = "study:"
CACHE_PREFIX_STUDY_LIST = "studies:"
CACHE_PREFIX_PROFILE = "profile:"
CACHE_PREFIX_PROFILES = "profiles:"

# ============================================================================
# Error Messages
# ============================================================================

ERROR_STUDY_NOT_FOUND = 'Study ID "{study_id}" not found'
ERROR_NO_MATCHING_STUDIES = "No matching studies found"
ERROR_STUDY_INPUT_MISSING = "Either studyId or studyKeywords must be provided"
ERROR_PATIENT_STUDY_MISSING = "studyId is required for patient page"
ERROR_PATIENT_ID_MISSING = "Either patientId or sampleId must be provided"
ERROR_GENES_MISSING = "At least one gene must be provided"
ERROR_NO_VALID_GENES = "No valid genes found"
ERROR_UNKNOWN_PAGE = "Unknown target page: {target_page}"
ERROR_TIMEOUT = "Tool call timed out after {timeout}s"

MESSAGE_MULTIPLE_STUDIES = "Multiple studies found. Please specify which one:"
WARNING_INVALID_GENES = "Some genes were invalid and skipped: {genes}"
