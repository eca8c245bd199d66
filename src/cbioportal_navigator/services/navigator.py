"""
Navigation orchestration: resolve page parameters and build a portal URL.

Each call runs a single pipeline per target page and ends in one of three
outcomes:
- SuccessResponse: URL plus resolution metadata
- ClarificationResponse: keyword search matched several studies
- ErrorResponse: missing input, unknown entities or upstream failure

Presence checks always run before catalog calls. Any exception escaping the
page handlers is converted to an ErrorResponse in resolve_and_build_url().
"""

import logging
from typing import Any, Optional, Union

from pydantic import ValidationError

from cbioportal_navigator.clients.catalog_client import CatalogClient
from cbioportal_navigator.config import Settings
from cbioportal_navigator.constants import (
    ALL_CASES_SUFFIX,
    ERROR_GENES_MISSING,
    ERROR_NO_MATCHING_STUDIES,
    ERROR_NO_VALID_GENES,
    ERROR_PATIENT_ID_MISSING,
    ERROR_PATIENT_STUDY_MISSING,
    ERROR_STUDY_INPUT_MISSING,
    ERROR_STUDY_NOT_FOUND,
    ERROR_UNKNOWN_PAGE,
    MESSAGE_MULTIPLE_STUDIES,
    WARNING_INVALID_GENES,
    AlterationType,
    TargetPage,
)
from cbioportal_navigator.resolution import GeneResolver, ProfileResolver, StudyResolver
from cbioportal_navigator.schemas import (
    ClarificationResponse,
    ErrorResponse,
    NavigationOutcome,
    PageParameters,
    ResolveAndBuildUrlInput,
    StudyOption,
    SuccessResponse,
)
from cbioportal_navigator.services.cache import CacheService
from cbioportal_navigator.url_builders import UrlBuilders

logger = logging.getLogger(__name__)


class Navigator:
    """
    Sequence the resolvers for a target page and build the URL.

    Dependencies are passed in so tests can substitute fakes for the catalog
    and the URL builders.
    """

    def __init__(
        self,
        studies: StudyResolver,
        genes: GeneResolver,
        profiles: ProfileResolver,
        base_url: str,
        url_builders: Optional[UrlBuilders] = None,
    ):
        self.studies = studies
        self.genes = genes
        self.profiles = profiles
        self.base_url = base_url.rstrip("/")
        self.url_builders = url_builders or UrlBuilders()

    async def resolve_and_build_url(
        self,
        target_page: Union[str, TargetPage],
        parameters: Optional[dict[str, Any]] = None,
    ) -> NavigationOutcome:
        """
        Resolve parameters for a target page and build its URL.

        Args:
            target_page: "study", "patient" or "results"
            parameters: Raw parameter bag (camelCase keys)

        Returns:
            One of SuccessResponse, ClarificationResponse, ErrorResponse.
            Never raises.
        """
        try:
            request = self._parse_input(target_page, parameters)

            if request.target_page == TargetPage.STUDY:
                return await self._handle_study_page(request.parameters)
            if request.target_page == TargetPage.PATIENT:
                return await self._handle_patient_page(request.parameters)
            return await self._handle_results_page(request.parameters)

        except Exception as e:
            logger.error(f"Resolution failed for target page '{target_page}': {e}", exc_info=True)
            return ErrorResponse(
                error=str(e) or type(e).__name__,
                details={"type": type(e).__name__},
            )

    @staticmethod
    def _parse_input(
        target_page: Union[str, TargetPage],
        parameters: Optional[dict[str, Any]],
    ) -> ResolveAndBuildUrlInput:
        try:
            return ResolveAndBuildUrlInput.model_validate(
                {"targetPage": target_page, "parameters": parameters or {}}
            )
        except ValidationError as e:
            if any(err["loc"][:1] == ("targetPage",) for err in e.errors()):
                raise ValueError(ERROR_UNKNOWN_PAGE.format(target_page=target_page)) from e
            raise

    # ========================================================================
    # Study resolution shared by study and results pages
    # ========================================================================

    async def _resolve_study(
        self, params: PageParameters
    ) -> Union[str, ClarificationResponse, ErrorResponse]:
        """Resolve studyId or studyKeywords to a single study id, or an outcome."""
        if params.study_id:
            if not await self.studies.validate(params.study_id):
                return ErrorResponse(error=ERROR_STUDY_NOT_FOUND.format(study_id=params.study_id))
            return params.study_id

        if params.study_keywords:
            matches = await self.studies.search(params.study_keywords)

            if not matches:
                return ErrorResponse(
                    error=ERROR_NO_MATCHING_STUDIES,
                    details={"searchTerms": params.study_keywords},
                )

            if len(matches) > 1:
                logger.info(
                    f"Keywords {params.study_keywords} matched {len(matches)} studies, "
                    "asking for clarification"
                )
                return ClarificationResponse(
                    message=MESSAGE_MULTIPLE_STUDIES,
                    options=[StudyOption.from_study(s) for s in matches],
                )

            return matches[0].study_id

        return ErrorResponse(error=ERROR_STUDY_INPUT_MISSING)

    # ========================================================================
    # Page handlers
    # ========================================================================

    async def _handle_study_page(self, params: PageParameters) -> NavigationOutcome:
        resolved = await self._resolve_study(params)
        if not isinstance(resolved, str):
            return resolved
        study_id = resolved

        url = self.url_builders.study(
            self.base_url,
            study_id,
            tab=params.tab,
            filters=params.filters,
        )
        study = await self.studies.get_by_id(study_id)

        return SuccessResponse(
            url=url,
            metadata={"studyId": study_id, "studyName": study.name},
        )

    async def _handle_patient_page(self, params: PageParameters) -> NavigationOutcome:
        if not params.study_id:
            return ErrorResponse(error=ERROR_PATIENT_STUDY_MISSING)

        if not params.patient_id and not params.sample_id:
            return ErrorResponse(error=ERROR_PATIENT_ID_MISSING)

        if not await self.studies.validate(params.study_id):
            return ErrorResponse(error=ERROR_STUDY_NOT_FOUND.format(study_id=params.study_id))

        url = self.url_builders.patient(
            self.base_url,
            params.study_id,
            case_id=params.patient_id,
            sample_id=params.sample_id,
            tab=params.tab,
        )

        metadata = {
            "studyId": params.study_id,
            "patientId": params.patient_id,
            "sampleId": params.sample_id,
        }
        return SuccessResponse(
            url=url,
            metadata={k: v for k, v in metadata.items() if v is not None},
        )

    async def _handle_results_page(self, params: PageParameters) -> NavigationOutcome:
        if not params.study_id and not params.study_keywords:
            return ErrorResponse(error=ERROR_STUDY_INPUT_MISSING)

        if not params.genes:
            return ErrorResponse(error=ERROR_GENES_MISSING)

        # 1. Study
        resolved = await self._resolve_study(params)
        if not isinstance(resolved, str):
            return resolved
        study_id = resolved

        # 2. Genes
        valid_genes = await self.genes.validate_batch(params.genes)
        if not valid_genes:
            return ErrorResponse(
                error=ERROR_NO_VALID_GENES,
                details={"providedGenes": params.genes},
            )

        warnings = []
        invalid_genes = list(dict.fromkeys(g for g in params.genes if g.upper() not in valid_genes))
        if invalid_genes:
            warning = WARNING_INVALID_GENES.format(genes=", ".join(invalid_genes))
            logger.warning(warning)
            warnings.append(warning)

        # 3. Molecular profile (metadata only)
        alteration_type = (
            params.alterations[0] if params.alterations else AlterationType.MUTATION.value
        )
        profile = await self.profiles.get_for_study(study_id, alteration_type)

        # 4. Case set
        case_set_id = params.case_set_id or f"{study_id}{ALL_CASES_SUFFIX}"

        # 5. URL
        url = self.url_builders.results(
            self.base_url,
            [study_id],
            valid_genes,
            case_set_id=case_set_id,
            tab=params.tab,
        )
        study = await self.studies.get_by_id(study_id)

        metadata = {
            "studyId": study_id,
            "studyName": study.name,
            "genes": valid_genes,
            "caseSetId": case_set_id,
        }
        if profile is not None:
            metadata["molecularProfileId"] = profile.molecular_profile_id

        return SuccessResponse(url=url, metadata=metadata, warnings=warnings)


def build_navigator(
    client: CatalogClient,
    settings: Settings,
    url_builders: Optional[UrlBuilders] = None,
) -> Navigator:
    """
    Wire resolvers with one cache per domain.

    Args:
        client: Initialized catalog client
        settings: Application settings (base URL, TTLs)
        url_builders: Optional replacement URL builders

    Returns:
        Navigator ready to serve requests
    """
    gene_cache = CacheService(
        "gene",
        ttl_seconds=settings.gene_cache_ttl_seconds,
        enabled=settings.cache_enabled,
    )
    study_cache = CacheService(
        "study",
        ttl_seconds=settings.study_cache_ttl_seconds,
        enabled=settings.cache_enabled,
    )
    profile_cache = CacheService(
        "profile",
        ttl_seconds=settings.profile_cache_ttl_seconds,
        enabled=settings.cache_enabled,
    )

    return Navigator(
        studies=StudyResolver(client, study_cache),
        genes=GeneResolver(client, gene_cache),
        profiles=ProfileResolver(client, profile_cache),
        base_url=settings.cbioportal_url,
        url_builders=url_builders,
    )
