"""Patient view URLs."""

from typing import Optional
from urllib.parse import urlencode


def build_patient_url(
    base_url: str,
    study_id: str,
    case_id: Optional[str] = None,
    sample_id: Optional[str] = None,
    tab: Optional[str] = None,
) -> str:
    """
    Build a patient view URL for a patient (case) or a single sample.

    The patient id takes precedence when both are given.
    """
    if not case_id and not sample_id:
        raise ValueError("Either case_id or sample_id is required")

    params = {"studyId": study_id}
    if case_id:
        params["caseId"] = case_id
    else:
        params["sampleId"] = sample_id

    path = f"/patient/{tab}" if tab else "/patient"
    return f"{base_url.rstrip('/')}{path}?{urlencode(params)}"
