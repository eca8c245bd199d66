"""
cBioPortal Navigator MCP Tool Handlers

Each module contains the implementation for one MCP tool.
All handlers expose a `handle(args, navigator)` function.
"""

from cbioportal_navigator.server.handlers import resolve_and_build_url

__all__ = ["resolve_and_build_url"]
