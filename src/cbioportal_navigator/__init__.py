"""
cBioPortal Navigator MCP Server

Resolves structured study, gene and profile parameters against the cBioPortal
catalog and builds navigation URLs for study, patient and results pages.
"""

__version__ = "1.0.0"
__author__ = "cBioPortal Navigator Team"


# Lazy import to avoid MCP dependency for standalone usage
def __getattr__(name):
    if name == "server":
        from cbioportal_navigator.server import server
        return server
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["server", "__version__"]
