"""Results (query) page URLs."""

from typing import Optional
from urllib.parse import quote, urlencode

from cbioportal_navigator.constants import DEFAULT_RESULTS_TAB

# case_set_id value the portal uses for a user-defined case list
CUSTOM_CASE_SET_ID = "-1"


def build_results_url(
    base_url: str,
    studies: list[str],
    genes: list[str],
    case_set_id: Optional[str] = None,
    case_ids: Optional[list[str]] = None,
    tab: Optional[str] = None,
) -> str:
    """
    Build a results page URL.

    Args:
        base_url: Portal base URL
        studies: Study ids, joined into cancer_study_list
        genes: Gene symbols, space separated in gene_list
        case_set_id: Named case set; defaults to "{first study}_all"
        case_ids: Custom "study:sample" ids, overrides case_set_id
        tab: Results tab (default: oncoprint)

    Examples:
        build_results_url("https://www.cbioportal.org", ["luad_tcga"], ["TP53", "KRAS"])
        -> ".../results/oncoprint?cancer_study_list=luad_tcga&case_set_id=luad_tcga_all
            &gene_list=TP53%20KRAS&Action=Submit"
    """
    if not studies:
        raise ValueError("At least one study id is required")
    if not genes:
        raise ValueError("At least one gene is required")

    params = {"cancer_study_list": ",".join(studies)}
    if case_ids:
        params["case_set_id"] = CUSTOM_CASE_SET_ID
        params["case_ids"] = "\n".join(case_ids)
    else:
        params["case_set_id"] = case_set_id or f"{studies[0]}_all"
    params["gene_list"] = " ".join(genes)
    params["Action"] = "Submit"

    query = urlencode(params, quote_via=quote, safe=",")
    return f"{base_url.rstrip('/')}/results/{tab or DEFAULT_RESULTS_TAB}?{query}"
