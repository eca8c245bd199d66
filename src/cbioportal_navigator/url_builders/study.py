"""Study view URLs."""

import json
from typing import Any, Optional, Union
from urllib.parse import quote, urlencode

from cbioportal_navigator.constants import DEFAULT_STUDY_TAB


def build_study_url(
    base_url: str,
    study_ids: Union[str, list[str]],
    tab: Optional[str] = None,
    filters: Optional[dict[str, Any]] = None,
) -> str:
    """
    Build a study view URL.

    Examples:
        build_study_url("https://www.cbioportal.org", "luad_tcga")
        -> "https://www.cbioportal.org/study/summary?id=luad_tcga"
    """
    if isinstance(study_ids, str):
        study_ids = [study_ids]
    if not study_ids:
        raise ValueError("At least one study id is required")

    query = urlencode({"id": ",".join(study_ids)}, safe=",")
    url = f"{base_url.rstrip('/')}/study/{tab or DEFAULT_STUDY_TAB}?{query}"

    if filters:
        filter_json = json.dumps(filters, separators=(",", ":"), sort_keys=True)
        url += f"#filterJson={quote(filter_json, safe='')}"

    return url
