"""
Unit tests for the Navigator page pipelines.

Covers success, clarification and error outcomes for the study, patient and
results pages against the fake catalog.

Run with: pytest tests/unit/test_navigator.py -v
"""

from unittest.mock import MagicMock

import pytest

from cbioportal_navigator.schemas import ClarificationResponse, ErrorResponse, SuccessResponse
from cbioportal_navigator.services.navigator import build_navigator
from cbioportal_navigator.url_builders import UrlBuilders


@pytest.mark.unit
class TestStudyPage:
    async def test_valid_study_id(self, navigator):
        outcome = await navigator.resolve_and_build_url("study", {"studyId": "luad_tcga"})

        assert isinstance(outcome, SuccessResponse)
        assert outcome.url == "https://www.cbioportal.org/study/summary?id=luad_tcga"
        assert outcome.metadata == {
            "studyId": "luad_tcga",
            "studyName": "Lung Adenocarcinoma (TCGA)",
        }

    async def test_invalid_study_id(self, navigator):
        outcome = await navigator.resolve_and_build_url("study", {"studyId": "nope_study"})

        assert isinstance(outcome, ErrorResponse)
        assert "nope_study" in outcome.error

    async def test_single_keyword_match(self, navigator):
        outcome = await navigator.resolve_and_build_url(
            "study", {"studyKeywords": ["adenocarcinoma"]}
        )

        assert isinstance(outcome, SuccessResponse)
        assert "luad_tcga" in outcome.url
        assert outcome.metadata["studyId"] == "luad_tcga"

    async def test_two_matches_need_clarification(self, navigator):
        outcome = await navigator.resolve_and_build_url("study", {"studyKeywords": ["lung"]})

        assert isinstance(outcome, ClarificationResponse)
        assert len(outcome.options) == 2
        assert [o.study_id for o in outcome.options] == ["luad_tcga", "lusc_tcga"]
        assert outcome.options[0].sample_count == 586

    async def test_no_match(self, navigator):
        outcome = await navigator.resolve_and_build_url(
            "study", {"studyKeywords": ["zzz-no-match"]}
        )

        assert isinstance(outcome, ErrorResponse)
        assert outcome.error == "No matching studies found"
        assert outcome.details == {"searchTerms": ["zzz-no-match"]}

    async def test_missing_study_input(self, navigator, catalog):
        outcome = await navigator.resolve_and_build_url("study", {})

        assert isinstance(outcome, ErrorResponse)
        assert outcome.error == "Either studyId or studyKeywords must be provided"
        assert sum(catalog.calls.values()) == 0

    async def test_study_id_takes_precedence_over_keywords(self, navigator, catalog):
        outcome = await navigator.resolve_and_build_url(
            "study", {"studyId": "brca_tcga", "studyKeywords": ["lung"]}
        )

        assert outcome.metadata["studyId"] == "brca_tcga"
        assert catalog.calls["list_studies"] == 0

    async def test_tab_and_filters(self, navigator):
        outcome = await navigator.resolve_and_build_url(
            "study",
            {"studyId": "luad_tcga", "tab": "clinicalData", "filters": {"sex": "Female"}},
        )

        assert outcome.url.startswith("https://www.cbioportal.org/study/clinicalData?id=luad_tcga")
        assert "#filterJson=" in outcome.url


@pytest.mark.unit
class TestPatientPage:
    async def test_patient_id(self, navigator):
        outcome = await navigator.resolve_and_build_url(
            "patient", {"studyId": "luad_tcga", "patientId": "TCGA-05-4244"}
        )

        assert isinstance(outcome, SuccessResponse)
        assert outcome.url == (
            "https://www.cbioportal.org/patient?studyId=luad_tcga&caseId=TCGA-05-4244"
        )
        assert outcome.metadata == {"studyId": "luad_tcga", "patientId": "TCGA-05-4244"}

    async def test_sample_id(self, navigator):
        outcome = await navigator.resolve_and_build_url(
            "patient", {"studyId": "luad_tcga", "sampleId": "TCGA-05-4244-01", "tab": "summary"}
        )

        assert outcome.url == (
            "https://www.cbioportal.org/patient/summary?studyId=luad_tcga&sampleId=TCGA-05-4244-01"
        )

    async def test_missing_study_id(self, navigator):
        outcome = await navigator.resolve_and_build_url("patient", {"patientId": "P1"})

        assert outcome.error == "studyId is required for patient page"

    async def test_missing_patient_and_sample_fails_before_catalog_call(self, navigator, catalog):
        outcome = await navigator.resolve_and_build_url("patient", {"studyId": "luad_tcga"})

        assert isinstance(outcome, ErrorResponse)
        assert outcome.error == "Either patientId or sampleId must be provided"
        assert catalog.calls["get_study"] == 0

    async def test_unknown_study(self, navigator):
        outcome = await navigator.resolve_and_build_url(
            "patient", {"studyId": "nope_study", "patientId": "P1"}
        )

        assert outcome.error == 'Study ID "nope_study" not found'


@pytest.mark.unit
class TestResultsPage:
    async def test_end_to_end(self, navigator):
        """Study id plus two valid genes with a mutation profile."""
        outcome = await navigator.resolve_and_build_url(
            "results", {"studyId": "luad_tcga", "genes": ["TP53", "KRAS"]}
        )

        assert isinstance(outcome, SuccessResponse)
        assert "cancer_study_list=luad_tcga" in outcome.url
        assert "gene_list=TP53%20KRAS" in outcome.url
        assert outcome.metadata == {
            "studyId": "luad_tcga",
            "studyName": "Lung Adenocarcinoma (TCGA)",
            "genes": ["TP53", "KRAS"],
            "caseSetId": "luad_tcga_all",
            "molecularProfileId": "luad_tcga_mutations",
        }
        assert outcome.warnings == []

    async def test_no_valid_genes(self, navigator):
        outcome = await navigator.resolve_and_build_url(
            "results", {"studyId": "luad_tcga", "genes": ["FOO", "BAR"]}
        )

        assert isinstance(outcome, ErrorResponse)
        assert outcome.error == "No valid genes found"
        assert outcome.details == {"providedGenes": ["FOO", "BAR"]}

    async def test_invalid_gene_dropped_with_warning(self, navigator, caplog):
        outcome = await navigator.resolve_and_build_url(
            "results", {"studyId": "luad_tcga", "genes": ["tp53", "NOTAGENE"]}
        )

        assert isinstance(outcome, SuccessResponse)
        assert outcome.metadata["genes"] == ["TP53"]
        assert outcome.warnings == ["Some genes were invalid and skipped: NOTAGENE"]
        assert "NOTAGENE" in caplog.text

    async def test_duplicate_genes_collapsed(self, navigator, catalog):
        outcome = await navigator.resolve_and_build_url(
            "results", {"studyId": "luad_tcga", "genes": ["TP53", "tp53", "KRAS"]}
        )

        assert outcome.metadata["genes"] == ["TP53", "KRAS"]
        assert "gene_list=TP53%20KRAS&" in outcome.url
        assert outcome.warnings == []
        assert catalog.calls["get_gene"] == 2

    async def test_case_set_defaults_to_all(self, navigator):
        outcome = await navigator.resolve_and_build_url(
            "results", {"studyId": "brca_tcga", "genes": ["BRCA1"]}
        )

        assert outcome.metadata["caseSetId"] == "brca_tcga_all"
        assert "case_set_id=brca_tcga_all" in outcome.url

    async def test_explicit_case_set(self, navigator):
        outcome = await navigator.resolve_and_build_url(
            "results",
            {"studyId": "luad_tcga", "genes": ["TP53"], "caseSetId": "luad_tcga_sequenced"},
        )

        assert outcome.metadata["caseSetId"] == "luad_tcga_sequenced"

    async def test_missing_profile_does_not_block(self, navigator):
        outcome = await navigator.resolve_and_build_url(
            "results", {"studyId": "brca_tcga", "genes": ["TP53"]}
        )

        assert isinstance(outcome, SuccessResponse)
        assert "molecularProfileId" not in outcome.metadata

    async def test_first_alteration_selects_profile(self, navigator):
        outcome = await navigator.resolve_and_build_url(
            "results",
            {"studyId": "luad_tcga", "genes": ["EGFR"], "alterations": ["cna", "mutation"]},
        )

        assert outcome.metadata["molecularProfileId"] == "luad_tcga_gistic"

    async def test_profile_failure_does_not_block(self, navigator, catalog):
        catalog.failing.add("get_molecular_profiles")

        outcome = await navigator.resolve_and_build_url(
            "results", {"studyId": "luad_tcga", "genes": ["TP53"]}
        )

        assert isinstance(outcome, SuccessResponse)
        assert "molecularProfileId" not in outcome.metadata

    async def test_keywords_with_multiple_matches(self, navigator, catalog):
        outcome = await navigator.resolve_and_build_url(
            "results", {"studyKeywords": ["lung"], "genes": ["TP53"]}
        )

        assert isinstance(outcome, ClarificationResponse)
        assert len(outcome.options) == 2
        assert catalog.calls["get_gene"] == 0

    async def test_keywords_with_no_match(self, navigator, catalog):
        outcome = await navigator.resolve_and_build_url(
            "results", {"studyKeywords": ["zzz-no-match"], "genes": ["TP53"]}
        )

        assert isinstance(outcome, ErrorResponse)
        assert outcome.error == "No matching studies found"
        assert outcome.details == {"searchTerms": ["zzz-no-match"]}
        assert catalog.calls["get_gene"] == 0

    async def test_keywords_with_single_match(self, navigator):
        outcome = await navigator.resolve_and_build_url(
            "results", {"studyKeywords": ["breast"], "genes": ["BRCA1"]}
        )

        assert outcome.metadata["studyId"] == "brca_tcga"

    async def test_missing_genes_fails_before_catalog_call(self, navigator, catalog):
        outcome = await navigator.resolve_and_build_url("results", {"studyId": "luad_tcga"})

        assert outcome.error == "At least one gene must be provided"
        assert sum(catalog.calls.values()) == 0

    async def test_blank_genes_count_as_missing(self, navigator):
        outcome = await navigator.resolve_and_build_url(
            "results", {"studyId": "luad_tcga", "genes": ["", "  "]}
        )

        assert outcome.error == "At least one gene must be provided"

    async def test_unknown_study(self, navigator):
        outcome = await navigator.resolve_and_build_url(
            "results", {"studyId": "nope_study", "genes": ["TP53"]}
        )

        assert outcome.error == 'Study ID "nope_study" not found'


@pytest.mark.unit
class TestErrorBoundary:
    async def test_unknown_target_page(self, navigator):
        outcome = await navigator.resolve_and_build_url("timeline", {"studyId": "luad_tcga"})

        assert isinstance(outcome, ErrorResponse)
        assert outcome.error == "Unknown target page: timeline"

    async def test_malformed_parameters(self, navigator):
        outcome = await navigator.resolve_and_build_url("results", {"genes": "TP53"})

        assert isinstance(outcome, ErrorResponse)
        assert outcome.details == {"type": "ValidationError"}

    async def test_upstream_failure_becomes_error(self, navigator, catalog):
        """get_by_id failures after validation surface as an error outcome."""
        await navigator.studies.validate("luad_tcga")
        catalog.failing.add("get_study")

        outcome = await navigator.resolve_and_build_url("study", {"studyId": "luad_tcga"})

        assert isinstance(outcome, ErrorResponse)
        assert outcome.error == "Catalog unavailable for get_study"
        assert outcome.details == {"type": "CatalogError"}

    async def test_search_failure_becomes_error(self, navigator, catalog):
        catalog.failing.add("list_studies")

        outcome = await navigator.resolve_and_build_url("study", {"studyKeywords": ["lung"]})

        assert isinstance(outcome, ErrorResponse)
        assert "list_studies" in outcome.error


@pytest.mark.unit
class TestInjectedUrlBuilders:
    async def test_builders_receive_resolved_identifiers(self, catalog, test_settings):
        builders = UrlBuilders(
            study=MagicMock(return_value="study-url"),
            patient=MagicMock(return_value="patient-url"),
            results=MagicMock(return_value="results-url"),
        )
        navigator = build_navigator(catalog, test_settings, url_builders=builders)

        outcome = await navigator.resolve_and_build_url(
            "results", {"studyKeywords": ["adenocarcinoma"], "genes": ["kras"], "tab": "mutations"}
        )

        assert outcome.url == "results-url"
        builders.results.assert_called_once_with(
            "https://www.cbioportal.org",
            ["luad_tcga"],
            ["KRAS"],
            case_set_id="luad_tcga_all",
            tab="mutations",
        )
        builders.study.assert_not_called()


@pytest.mark.unit
class TestSerialization:
    async def test_success_json_shape(self, navigator):
        outcome = await navigator.resolve_and_build_url("study", {"studyId": "luad_tcga"})

        assert outcome.to_json_dict() == {
            "success": True,
            "url": "https://www.cbioportal.org/study/summary?id=luad_tcga",
            "metadata": {"studyId": "luad_tcga", "studyName": "Lung Adenocarcinoma (TCGA)"},
        }

    async def test_clarification_json_shape(self, navigator):
        outcome = await navigator.resolve_and_build_url("study", {"studyKeywords": ["lung"]})
        payload = outcome.to_json_dict()

        assert payload["success"] is False
        assert payload["needsSelection"] is True
        assert payload["message"] == "Multiple studies found. Please specify which one:"
        assert payload["options"][0] == {
            "studyId": "luad_tcga",
            "name": "Lung Adenocarcinoma (TCGA)",
            "description": "TCGA Lung Adenocarcinoma",
            "sampleCount": 586,
        }

    async def test_error_json_shape(self, navigator):
        outcome = await navigator.resolve_and_build_url("patient", {"studyId": "luad_tcga"})

        assert outcome.to_json_dict() == {
            "success": False,
            "error": "Either patientId or sampleId must be provided",
        }
