"""
cBioPortal Navigator MCP Server

Exports the server instance and its lifecycle functions.
"""

from cbioportal_navigator.server.core import (
    cleanup_backend,
    handle_call_tool,
    handle_list_tools,
    initialize_backend,
    main,
    run,
    server,
)

__all__ = [
    "main",
    "run",
    "server",
    "initialize_backend",
    "cleanup_backend",
    "handle_list_tools",
    "handle_call_tool",
]
