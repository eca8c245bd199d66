"""
Molecular profile resolution for studies.
"""

import logging
from typing import Optional

from cbioportal_navigator.clients.catalog_client import CatalogClient, CatalogError
from cbioportal_navigator.constants import (
    ALTERATION_TYPE_CODES,
    CACHE_PREFIX_PROFILE,
    CACHE_PREFIX_PROFILES,
    DEFAULT_ALTERATION_CODE,
)
from cbioportal_navigator.schemas import ResolvedProfile
from cbioportal_navigator.services.cache import MISSING, CacheService

logger = logging.getLogger(__name__)


def map_alteration_type(alteration_type: str) -> str:
    """Map a semantic label to the catalog code, falling back to mutations."""
    return ALTERATION_TYPE_CODES.get(alteration_type.lower(), DEFAULT_ALTERATION_CODE)


class ProfileResolver:
    """
    Look up molecular profiles of a study.

    Lookups never raise: catalog failures are logged and reported as
    "no profile". A study without a matching profile is cached as None.
    """

    def __init__(self, client: CatalogClient, cache: CacheService):
        self.client = client
        self.cache = cache

    async def get_for_study(
        self,
        study_id: str,
        alteration_type: str = "mutation",
    ) -> Optional[ResolvedProfile]:
        """
        First profile of the study whose alteration type matches.

        Args:
            study_id: Study identifier
            alteration_type: Semantic label (mutation, cna, fusion, ...)

        Returns:
            Matching profile, or None
        """
        cache_key = self.cache.make_key(CACHE_PREFIX_PROFILE, study_id, alteration_type)
        cached = self.cache.get(cache_key)
        if cached is not MISSING:
            return cached

        try:
            profiles = await self.client.get_molecular_profiles(study_id)
        except CatalogError as e:
            logger.error(f"Error fetching profiles for study {study_id}: {e}")
            return None

        target_type = map_alteration_type(alteration_type)
        match = next(
            (p for p in profiles if p.get("molecularAlterationType") == target_type),
            None,
        )

        result = ResolvedProfile.from_record(match) if match else None
        if result is None:
            logger.info(f"No {target_type} profile for study {study_id}")

        self.cache.set(cache_key, result)
        return result

    async def get_all_for_study(self, study_id: str) -> list[ResolvedProfile]:
        """All profiles of the study, empty on failure."""
        cache_key = self.cache.make_key(CACHE_PREFIX_PROFILES, study_id)
        cached = self.cache.get(cache_key)
        if cached is not MISSING:
            return cached

        try:
            profiles = await self.client.get_molecular_profiles(study_id)
        except CatalogError as e:
            logger.error(f"Error fetching profiles for study {study_id}: {e}")
            return []

        results = [ResolvedProfile.from_record(p) for p in profiles]
        self.cache.set(cache_key, results)
        return results
