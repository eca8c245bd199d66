"""
Gene symbol validation against the catalog.
"""

import asyncio
import logging
from typing import Any

from cbioportal_navigator.clients.catalog_client import CatalogClient, CatalogNotFoundError
from cbioportal_navigator.services.cache import MISSING, CacheService

logger = logging.getLogger(__name__)


class GeneResolver:
    """
    Validate and normalize Hugo gene symbols.

    Validity is cached per uppercase symbol, negative results included, so an
    unknown symbol costs one catalog round-trip per TTL window.
    """

    def __init__(self, client: CatalogClient, cache: CacheService):
        self.client = client
        self.cache = cache

    async def validate(self, gene_symbol: str) -> bool:
        """
        Check that a gene symbol exists in the catalog.

        Args:
            gene_symbol: Symbol in any case (e.g., "tp53")

        Returns:
            True if the catalog knows the gene

        Raises:
            CatalogError: On transport failures (not cached)
        """
        normalized = gene_symbol.upper()

        cached = self.cache.get(normalized)
        if cached is not MISSING:
            return cached

        try:
            await self.client.get_gene(normalized)
            is_valid = True
        except CatalogNotFoundError:
            is_valid = False

        self.cache.set(normalized, is_valid)
        return is_valid

    async def validate_batch(self, gene_symbols: list[str]) -> list[str]:
        """
        Validate symbols concurrently.

        Args:
            gene_symbols: Symbols in any case

        Returns:
            Uppercase symbols that are valid, in input order with case
            duplicates collapsed to the first occurrence. A symbol whose lookup
            fails is dropped without affecting the others.
        """
        normalized = list(dict.fromkeys(symbol.upper() for symbol in gene_symbols))
        results = await asyncio.gather(
            *(self.validate(symbol) for symbol in normalized),
            return_exceptions=True,
        )

        valid = []
        for symbol, result in zip(normalized, results):
            if isinstance(result, Exception):
                logger.warning(f"Gene lookup failed for {symbol}: {result}")
            elif result:
                valid.append(symbol)
        return valid

    async def get_gene_info(self, gene_symbol: str) -> dict[str, Any]:
        """Fetch the raw catalog record for a gene."""
        return await self.client.get_gene(gene_symbol.upper())
