"""
Shared fixtures: an in-memory fake of the cBioPortal catalog and a navigator
wired to it with fresh caches.
"""

import asyncio
from collections import Counter
from typing import Any, Optional

import pytest

from cbioportal_navigator.clients.catalog_client import CatalogError, CatalogNotFoundError
from cbioportal_navigator.config import Settings
from cbioportal_navigator.services.navigator import build_navigator

STUDIES = [
    {
        "studyId": "luad_tcga",
        "name": "Lung Adenocarcinoma (TCGA)",
        "description": "TCGA Lung Adenocarcinoma",
        "cancerType": {"name": "Non-Small Cell Lung Cancer"},
        "cancerTypeId": "luad",
        "allSampleCount": 586,
    },
    {
        "studyId": "lusc_tcga",
        "name": "Lung Squamous Cell Carcinoma (TCGA)",
        "description": "TCGA Lung Squamous",
        "cancerType": {"name": "Non-Small Cell Lung Cancer"},
        "cancerTypeId": "lusc",
        "allSampleCount": 504,
    },
    {
        "studyId": "brca_tcga",
        "name": "Breast Invasive Carcinoma (TCGA)",
        "description": "TCGA Breast",
        "cancerType": {"name": "Invasive Breast Carcinoma"},
        "cancerTypeId": "brca",
        "allSampleCount": 1108,
    },
]

GENES = ["TP53", "KRAS", "EGFR", "BRCA1"]

PROFILES = {
    "luad_tcga": [
        {
            "molecularProfileId": "luad_tcga_gistic",
            "molecularAlterationType": "COPY_NUMBER_ALTERATION",
            "name": "Putative copy-number alterations from GISTIC",
        },
        {
            "molecularProfileId": "luad_tcga_mutations",
            "molecularAlterationType": "MUTATION_EXTENDED",
            "name": "Mutations",
            "description": "Mutation data from whole exome sequencing.",
        },
        {
            "molecularProfileId": "luad_tcga_mutations_uncalled",
            "molecularAlterationType": "MUTATION_EXTENDED",
            "name": "Mutations (uncalled)",
        },
    ],
    "lusc_tcga": [
        {
            "molecularProfileId": "lusc_tcga_gistic",
            "molecularAlterationType": "COPY_NUMBER_ALTERATION",
            "name": "Putative copy-number alterations from GISTIC",
        },
    ],
}


class FakeCatalog:
    """
    In-memory stand-in for CatalogClient.

    Records every call so tests can assert on catalog round-trips.
    """

    def __init__(
        self,
        studies: Optional[list[dict[str, Any]]] = None,
        genes: Optional[list[str]] = None,
        profiles: Optional[dict[str, list[dict[str, Any]]]] = None,
    ):
        self.studies = {s["studyId"]: s for s in (STUDIES if studies is None else studies)}
        self.genes = set(GENES if genes is None else genes)
        self.profiles = PROFILES if profiles is None else profiles
        self.calls: Counter = Counter()
        self.failing: set[str] = set()
        self.delay = 0.0

    async def _record(self, method: str, key: Any = None) -> None:
        self.calls[method] += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if method in self.failing or (key is not None and key in self.failing):
            raise CatalogError(f"Catalog unavailable for {method}")

    async def list_studies(self) -> list[dict[str, Any]]:
        await self._record("list_studies")
        return list(self.studies.values())

    async def get_study(self, study_id: str) -> dict[str, Any]:
        await self._record("get_study", study_id)
        if study_id not in self.studies:
            raise CatalogNotFoundError(f"/studies/{study_id}")
        return self.studies[study_id]

    async def get_gene(self, gene_id: str) -> dict[str, Any]:
        await self._record("get_gene", gene_id)
        if gene_id not in self.genes:
            raise CatalogNotFoundError(f"/genes/{gene_id}")
        return {"hugoGeneSymbol": gene_id, "entrezGeneId": 7157, "type": "protein-coding"}

    async def get_molecular_profiles(self, study_id: str) -> list[dict[str, Any]]:
        await self._record("get_molecular_profiles", study_id)
        return list(self.profiles.get(study_id, []))


@pytest.fixture
def catalog():
    """Fake catalog with three TCGA studies."""
    return FakeCatalog()


@pytest.fixture
def test_settings():
    """Settings with the public portal URL."""
    return Settings(cbioportal_url="https://www.cbioportal.org", cache_enabled=True)


@pytest.fixture
def navigator(catalog, test_settings):
    """Navigator with fresh caches over the fake catalog."""
    return build_navigator(catalog, test_settings)


@pytest.fixture
def make_catalog():
    """Factory for fake catalogs with custom contents."""
    return FakeCatalog
