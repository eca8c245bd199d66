"""
Entry point for running the cBioPortal Navigator MCP server as a module.

Usage:
    python -m cbioportal_navigator.server
"""

from cbioportal_navigator.server import run

if __name__ == "__main__":
    run()
