"""
Client adapters for the cBioPortal catalog.
"""

from cbioportal_navigator.clients.catalog_client import (
    CatalogClient,
    CatalogError,
    CatalogNotFoundError,
)

__all__ = ["CatalogClient", "CatalogError", "CatalogNotFoundError"]
