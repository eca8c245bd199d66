#!/usr/bin/env python3
"""
cBioPortal Navigator MCP Server - Core Infrastructure

Contains:
- Server initialization
- Tool listing handler
- Tool call router with per-call timeout
- Backend lifecycle management
"""

import asyncio
import logging
import sys
from typing import Any, Optional

import mcp.server.stdio
import mcp.types as types
from mcp.server.lowlevel import NotificationOptions, Server
from mcp.server.models import InitializationOptions

from cbioportal_navigator import __version__
from cbioportal_navigator.clients.catalog_client import CatalogClient
from cbioportal_navigator.config import settings
from cbioportal_navigator.constants import ERROR_TIMEOUT
from cbioportal_navigator.schemas import ErrorResponse
from cbioportal_navigator.services.navigator import Navigator, build_navigator

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.effective_log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    if settings.log_format == "text"
    else '{"time":"%(asctime)s","name":"%(name)s","level":"%(levelname)s","message":"%(message)s"}',
    stream=sys.stderr,
)

logger = logging.getLogger(__name__)

# Initialize MCP server
server = Server(settings.mcp_server_name)

# Global state
_client: Optional[CatalogClient] = None
_navigator: Optional[Navigator] = None


async def initialize_backend() -> Navigator:
    """Initialize the catalog client and the navigator."""
    global _client, _navigator

    logger.info("Starting cBioPortal Navigator MCP Server")
    logger.info(
        f"Configuration: portal={settings.cbioportal_url}, api={settings.api_base_url}"
    )

    _client = CatalogClient(
        base_url=settings.api_base_url,
        timeout=settings.rest_timeout_seconds,
        max_retries=settings.rest_max_retries,
    )
    await _client.initialize()

    _navigator = build_navigator(_client, settings)
    logger.info(
        f"Caches initialized: gene_ttl={settings.gene_cache_ttl_seconds}s, "
        f"study_ttl={settings.study_cache_ttl_seconds}s, "
        f"profile_ttl={settings.profile_cache_ttl_seconds}s, "
        f"enabled={settings.cache_enabled}"
    )
    logger.info("Server initialization complete")
    return _navigator


async def cleanup_backend() -> None:
    """Cleanup backend connections."""
    global _client, _navigator

    logger.info("Shutting down cBioPortal Navigator MCP Server")

    if _navigator is not None:
        for name, cache in (
            ("gene", _navigator.genes.cache),
            ("study", _navigator.studies.cache),
            ("profile", _navigator.profiles.cache),
        ):
            logger.info(f"Final {name} cache stats: {cache.get_stats()}")

    if _client is not None:
        await _client.close()
    _client = None
    _navigator = None
    logger.info("Connections closed")


async def get_navigator() -> Navigator:
    """Return the navigator, initializing the backend on first use."""
    if _navigator is None:
        return await initialize_backend()
    return _navigator


@server.list_tools()
async def handle_list_tools() -> list[types.Tool]:
    """
    List all available MCP tools.

    Tool definitions are in tools_registry module.
    Handler implementations are in server/handlers/.
    """
    from cbioportal_navigator.server.tools_registry import get_all_tools

    return get_all_tools()


@server.call_tool()
async def handle_call_tool(
    name: str, arguments: dict[str, Any]
) -> list[types.TextContent]:
    """
    Route tool calls to handler implementations.

    The call is cancelled, in-flight catalog requests included, once
    settings.tool_timeout_seconds elapse.

    Args:
        name: Tool name
        arguments: Tool-specific parameters

    Returns:
        List of text content responses
    """
    from cbioportal_navigator.server.handlers import resolve_and_build_url
    from cbioportal_navigator.server.tools_registry import RESOLVE_AND_BUILD_URL

    try:
        if name == RESOLVE_AND_BUILD_URL:
            navigator = await get_navigator()
            return await asyncio.wait_for(
                resolve_and_build_url.handle(arguments or {}, navigator),
                timeout=settings.tool_timeout_seconds,
            )
        else:
            raise ValueError(f"Unknown tool: {name}")
    except asyncio.TimeoutError:
        logger.error(f"Tool {name} timed out after {settings.tool_timeout_seconds}s")
        error = ErrorResponse(error=ERROR_TIMEOUT.format(timeout=settings.tool_timeout_seconds))
        return [types.TextContent(
            type="text",
            text=resolve_and_build_url.to_json(error.to_json_dict()),
        )]
    except Exception as e:
        logger.error(f"Tool error in {name}: {e}", exc_info=True)
        error = ErrorResponse(error=str(e), details={"type": type(e).__name__})
        return [types.TextContent(
            type="text",
            text=resolve_and_build_url.to_json(error.to_json_dict()),
        )]


async def main():
    """Main entry point."""
    logger.info("=" * 80)
    logger.info(f"cBioPortal Navigator MCP Server v{__version__}")
    logger.info("=" * 80)
    logger.info("Transport: stdio")
    logger.info(f"Debug mode: {settings.debug_mode}")
    logger.info(f"Tool timeout: {settings.tool_timeout_seconds}s")
    logger.info("=" * 80)

    try:
        await initialize_backend()

        async with mcp.server.stdio.stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                InitializationOptions(
                    server_name=settings.mcp_server_name,
                    server_version=__version__,
                    capabilities=server.get_capabilities(
                        notification_options=NotificationOptions(),
                        experimental_capabilities={},
                    ),
                ),
            )

    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception as e:
        logger.error(f"Server error: {e}", exc_info=True)
        sys.exit(1)
    finally:
        await cleanup_backend()


def run() -> None:
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
