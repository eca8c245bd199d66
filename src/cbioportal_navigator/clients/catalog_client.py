"""
Read-only REST client for the cBioPortal catalog.

Thin adapter over the public cBioPortal API with:
- Retry with exponential backoff on timeouts and connection errors
- Connection pooling
- NotFound distinguished from other failures

Calls are plain coroutines over httpx, so cancelling the awaiting task
(e.g. through asyncio.wait_for) aborts the in-flight request.
"""

import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Catalog request failed (transport error or unexpected status)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class CatalogNotFoundError(CatalogError):
    """Requested catalog record does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Not found in catalog: {path}", status_code=404)


def _segment(value: str) -> str:
    """Escape one path segment so ids containing /, ? or # stay inside it."""
    escaped = quote(str(value), safe="")
    if escaped in (".", ".."):
        # Dot segments would otherwise be collapsed by URL normalization
        return escaped.replace(".", "%2E")
    return escaped


class CatalogClient:
    """
    HTTP client for the cBioPortal REST API.

    Features:
    - Automatic retry with exponential backoff
    - Connection pooling
    - Timeout enforcement
    """

    def __init__(
        self,
        base_url: str,
        timeout: int = 30,
        max_retries: int = 3,
        max_connections: int = 100,
        max_keepalive_connections: int = 20,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize catalog client.

        Args:
            base_url: REST API root (e.g., https://www.cbioportal.org/api)
            timeout: Request timeout in seconds
            max_retries: Attempts for timeouts and connection errors
            max_connections: Maximum total connections
            max_keepalive_connections: Maximum keepalive connections
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self.transport = transport

        self.client: Optional[httpx.AsyncClient] = None

        self.limits = httpx.Limits(
            max_connections=max_connections,
            max_keepalive_connections=max_keepalive_connections,
        )

    async def initialize(self) -> None:
        """Initialize HTTP client with connection pooling."""
        if self.client is not None:
            return

        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout),
            limits=self.limits,
            headers={
                "User-Agent": "cbioportal-navigator/1.0.0",
                "Accept": "application/json",
            },
            follow_redirects=True,
            transport=self.transport,
        )

        logger.info(f"Catalog client initialized for {self.base_url}")

    async def close(self) -> None:
        """Close HTTP client and connections."""
        if self.client:
            await self.client.aclose()
            self.client = None
            logger.info("Catalog client closed")

    async def __aenter__(self):
        """Async context manager entry."""
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def _get(self, path: str, **params: Any) -> Any:
        """
        GET a catalog resource and decode its JSON body.

        Raises:
            CatalogNotFoundError: On HTTP 404
            CatalogError: On any other HTTP or transport failure
            RuntimeError: If not initialized
        """
        if self.client is None:
            raise RuntimeError("Catalog client not initialized")

        try:
            async for attempt in AsyncRetrying(
                retry=retry_if_exception_type((httpx.TimeoutException, httpx.ConnectError)),
                wait=wait_exponential(multiplier=1, min=1, max=10),
                stop=stop_after_attempt(self.max_retries),
                before_sleep=before_sleep_log(logger, logging.WARNING),
                reraise=True,
            ):
                with attempt:
                    response = await self.client.get(path, params=params or None)
                    response.raise_for_status()

        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                logger.debug(f"Catalog 404: {path}")
                raise CatalogNotFoundError(path) from e
            logger.error(
                f"Catalog request '{path}' failed: {e.response.status_code} - {e.response.text}"
            )
            raise CatalogError(
                f"Catalog request '{path}' failed with status {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e

        except httpx.HTTPError as e:
            logger.error(f"Catalog request '{path}' error: {e}")
            raise CatalogError(f"Catalog request '{path}' failed: {e}") from e

        logger.debug(f"Catalog GET '{path}' succeeded (status={response.status_code})")
        return response.json()

    # ========================================================================
    # Studies
    # ========================================================================

    async def list_studies(self) -> list[dict[str, Any]]:
        """List all studies with cancer type details."""
        return await self._get("/studies", projection="DETAILED")

    async def get_study(self, study_id: str) -> dict[str, Any]:
        """Get a study by id."""
        return await self._get(f"/studies/{_segment(study_id)}")

    # ========================================================================
    # Genes
    # ========================================================================

    async def get_gene(self, gene_id: str) -> dict[str, Any]:
        """Get a gene by Hugo symbol or Entrez gene id."""
        return await self._get(f"/genes/{_segment(gene_id)}")

    # ========================================================================
    # Molecular profiles and case sets
    # ========================================================================

    async def get_molecular_profiles(self, study_id: str) -> list[dict[str, Any]]:
        """List molecular profiles of a study, in catalog order."""
        return await self._get(f"/studies/{_segment(study_id)}/molecular-profiles")

    async def get_sample_lists(self, study_id: str) -> list[dict[str, Any]]:
        """List sample lists (case sets) of a study."""
        return await self._get(f"/studies/{_segment(study_id)}/sample-lists")

    # ========================================================================
    # Patients and samples
    # ========================================================================

    async def get_patients_in_study(self, study_id: str) -> list[dict[str, Any]]:
        return await self._get(f"/studies/{_segment(study_id)}/patients")

    async def get_patient(self, study_id: str, patient_id: str) -> dict[str, Any]:
        return await self._get(f"/studies/{_segment(study_id)}/patients/{_segment(patient_id)}")

    async def get_samples_for_patient(
        self, study_id: str, patient_id: str
    ) -> list[dict[str, Any]]:
        path = f"/studies/{_segment(study_id)}/patients/{_segment(patient_id)}/samples"
        return await self._get(path)
