"""
Resolvers mapping caller parameters to catalog entities.
"""

from cbioportal_navigator.resolution.gene_resolver import GeneResolver
from cbioportal_navigator.resolution.profile_resolver import ProfileResolver, map_alteration_type
from cbioportal_navigator.resolution.study_resolver import StudyResolver

__all__ = [
    "GeneResolver",
    "ProfileResolver",
    "StudyResolver",
    "map_alteration_type",
]
