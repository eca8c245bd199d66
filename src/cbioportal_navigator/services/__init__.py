"""
Services layer: caching and navigation orchestration.
"""

from cbioportal_navigator.services.cache import MISSING, CacheService, CacheStats
from cbioportal_navigator.services.navigator import Navigator, build_navigator

__all__ = [
    "MISSING",
    "CacheService",
    "CacheStats",
    "Navigator",
    "build_navigator",
]
