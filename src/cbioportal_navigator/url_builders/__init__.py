"""
URL builders for cBioPortal pages.

Pure functions of already-resolved identifiers: no network, no cache.
"""

from dataclasses import dataclass
from typing import Callable

from cbioportal_navigator.url_builders.patient import build_patient_url
from cbioportal_navigator.url_builders.results import build_results_url
from cbioportal_navigator.url_builders.study import build_study_url


@dataclass(frozen=True)
class UrlBuilders:
    """Page URL builders handed to the navigator; swap in fakes for tests."""

    study: Callable[..., str] = build_study_url
    patient: Callable[..., str] = build_patient_url
    results: Callable[..., str] = build_results_url


__all__ = [
    "UrlBuilders",
    "build_patient_url",
    "build_results_url",
    "build_study_url",
]
