# roadmap_assembler/__main__.py
"""
Entry point for the roadmap-assembler MCP server.

CRITICAL: Server imports configure_logging() first to prevent stdout pollution.
"""

import asyncio
import logging

# Import server (which configures logging before anything else)
from roadmap_assembler.server import initialize_store, mcp, shutdown_store

logger = logging.getLogger(__name__)


async def main() -> None:
    """Open the fragment store, then serve MCP over stdio until the client disconnects."""
    await initialize_store()

    logger.info("Starting MCP server on stdio transport")
    try:
        await mcp.run_stdio_async()
    finally:
        await shutdown_store()


if __name__ == "__main__":
    asyncio.run(main())
