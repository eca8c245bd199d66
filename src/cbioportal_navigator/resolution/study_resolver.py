"""
Study resolution: keyword search, id validation and detail lookup.
"""

import logging
from typing import Any

from cbioportal_navigator.clients.catalog_client import CatalogClient, CatalogError
from cbioportal_navigator.constants import (
    CACHE_PREFIX_STUDY,
    CACHE_PREFIX_STUDY_LIST,
    CACHE_PREFIX_STUDY_SEARCH,
    CACHE_PREFIX_STUDY_VALID,
)
from cbioportal_navigator.schemas import ResolvedStudy
from cbioportal_navigator.services.cache import MISSING, CacheService

logger = logging.getLogger(__name__)


class StudyResolver:
    """
    Resolve studies by keyword or id.

    Supports:
    - Case-insensitive substring search over id, name, description and
      cancer type
    - Id validation with negative caching
    - Detail lookup by id
    """

    def __init__(self, client: CatalogClient, cache: CacheService):
        self.client = client
        self.cache = cache

    async def search(self, keywords: list[str]) -> list[ResolvedStudy]:
        """
        Find studies matching any of the keywords.

        The cache key is the keywords as given, so order and duplicates
        produce distinct entries.

        Args:
            keywords: Search terms (e.g., ["TCGA", "lung"])

        Returns:
            Matching studies in catalog order, empty if none match
        """
        cache_key = self.cache.make_key(CACHE_PREFIX_STUDY_SEARCH, ",".join(keywords))
        cached = self.cache.get(cache_key)
        if cached is not MISSING:
            return cached

        needles = [kw.lower() for kw in keywords]
        results = [
            ResolvedStudy.from_record(study)
            for study in await self._list_studies()
            if any(needle in self._search_text(study) for needle in needles)
        ]

        logger.info(f"Study search {keywords} -> {len(results)} matches")
        self.cache.set(cache_key, results)
        return results

    async def validate(self, study_id: str) -> bool:
        """
        Check that a study id exists.

        Any catalog failure, not-found or otherwise, counts as invalid.
        """
        cache_key = self.cache.make_key(CACHE_PREFIX_STUDY_VALID, study_id)
        cached = self.cache.get(cache_key)
        if cached is not MISSING:
            return cached

        try:
            await self.client.get_study(study_id)
            is_valid = True
        except CatalogError as e:
            logger.info(f"Study '{study_id}' not valid: {e}")
            is_valid = False

        self.cache.set(cache_key, is_valid)
        return is_valid

    async def get_by_id(self, study_id: str) -> ResolvedStudy:
        """
        Get study details.

        Raises:
            CatalogError: If the study cannot be fetched; call validate() first
        """
        cache_key = self.cache.make_key(CACHE_PREFIX_STUDY, study_id)
        cached = self.cache.get(cache_key)
        if cached is not MISSING:
            return cached

        study = ResolvedStudy.from_record(await self.client.get_study(study_id))
        self.cache.set(cache_key, study)
        return study

    async def _list_studies(self) -> list[dict[str, Any]]:
        cache_key = self.cache.make_key(CACHE_PREFIX_STUDY_LIST, "all")
        cached = self.cache.get(cache_key)
        if cached is not MISSING:
            return cached

        studies = await self.client.list_studies()
        self.cache.set(cache_key, studies)
        return studies

    @staticmethod
    def _search_text(study: dict[str, Any]) -> str:
        cancer_type = study.get("cancerType") or {}
        fields = [
            study.get("studyId"),
            study.get("name"),
            study.get("description"),
            cancer_type.get("name"),
        ]
        return " ".join(f for f in fields if f).lower()
