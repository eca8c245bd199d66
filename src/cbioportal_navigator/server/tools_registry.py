"""
Tool Registry - MCP tool definitions (schemas and descriptions).
"""

import mcp.types as types

from cbioportal_navigator.constants import READONLY_ANNOTATIONS, AlterationType, TargetPage

RESOLVE_AND_BUILD_URL = "resolve_and_build_url"


def get_all_tools() -> list[types.Tool]:
    """Return list of all tool definitions."""
    return TOOL_DEFINITIONS


TOOL_DEFINITIONS = [
    types.Tool(
        name=RESOLVE_AND_BUILD_URL,
        title="Resolve and build cBioPortal URL",
        description="""Resolve parameters and build a cBioPortal URL from structured input.

Accepts parameters already extracted from a user query and:
1. Resolves/validates them against the cBioPortal catalog
2. Handles ambiguity (returns options when several studies match)
3. Fills in defaults (case set, molecular profile)
4. Builds the final URL

This tool expects structured input, not raw natural language.

**Target pages:**
- study: studyId, or studyKeywords to search; optional tab and filters
- patient: studyId plus patientId or sampleId; optional tab
- results: studyId or studyKeywords, genes; optional alterations, caseSetId, tab

**Responses:**
- Success: {"success": true, "url": "...", "metadata": {...}}
- Ambiguity: {"success": false, "needsSelection": true, "message": "...", "options": [...]}
- Error: {"success": false, "error": "...", "details": {...}}

Examples:
- Results page: targetPage="results",
  parameters={"studyKeywords": ["TCGA", "lung", "adenocarcinoma"], "genes": ["TP53"]}
- Results page by id: targetPage="results",
  parameters={"studyId": "luad_tcga", "genes": ["TP53", "KRAS"]}
- Study view: targetPage="study", parameters={"studyId": "luad_tcga"}
""",
        inputSchema={
            "type": "object",
            "properties": {
                "targetPage": {
                    "type": "string",
                    "enum": [page.value for page in TargetPage],
                    "description": "The type of cBioPortal page to navigate to",
                },
                "parameters": {
                    "type": "object",
                    "properties": {
                        "studyKeywords": {
                            "type": "array",
                            "items": {"type": "string"},
                            "description": 'Keywords to search for studies (e.g., ["TCGA", "lung"])',
                        },
                        "studyId": {
                            "type": "string",
                            "description": "Direct study ID (skips search if provided)",
                        },
                        "patientId": {
                            "type": "string",
                            "description": "Patient/case identifier",
                        },
                        "sampleId": {
                            "type": "string",
                            "description": "Sample identifier",
                        },
                        "genes": {
                            "type": "array",
                            "items": {"type": "string"},
                            "description": 'Gene symbols (e.g., ["TP53", "KRAS"])',
                        },
                        "alterations": {
                            "type": "array",
                            "items": {"type": "string"},
                            "description": "Alteration types, first one is used: "
                            + ", ".join(t.value for t in AlterationType),
                        },
                        "caseSetId": {
                            "type": "string",
                            "description": "Case set ID (defaults to '{studyId}_all')",
                        },
                        "tab": {
                            "type": "string",
                            "description": "Specific tab to navigate to",
                        },
                        "filters": {
                            "type": "object",
                            "description": "Additional study view filters",
                        },
                    },
                },
            },
            "required": ["targetPage", "parameters"],
        },
        annotations=types.ToolAnnotations(**READONLY_ANNOTATIONS),
    ),
]
