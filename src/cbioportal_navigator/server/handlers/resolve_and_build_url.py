"""
resolve_and_build_url Handler

Turns tool arguments into a navigation outcome and serializes it as JSON.
Every outcome, errors included, is returned as a JSON document.
"""

import json
import logging
from typing import Any, Dict, List

import mcp.types as types

from cbioportal_navigator.services.navigator import Navigator

logger = logging.getLogger(__name__)


async def handle(arguments: Dict[str, Any], navigator: Navigator) -> List[types.TextContent]:
    """
    Resolve parameters and build a cBioPortal URL.

    Args:
        arguments: Tool parameters
            - targetPage (str): "study", "patient" or "results" (REQUIRED)
            - parameters (dict): Page parameters
        navigator: Navigator wired to the catalog client

    Returns:
        List with one TextContent holding the outcome JSON
    """
    target_page = arguments.get("targetPage")
    parameters = arguments.get("parameters") or {}

    if isinstance(parameters, dict):
        logger.info(f"Resolving {target_page} page with parameters: {sorted(parameters)}")

    outcome = await navigator.resolve_and_build_url(target_page, parameters)

    if outcome.success:
        logger.info(f"Built URL: {outcome.url}")

    return [types.TextContent(type="text", text=to_json(outcome.to_json_dict()))]


def to_json(payload: Dict[str, Any]) -> str:
    """Serialize an outcome payload."""
    return json.dumps(payload, indent=2)
