"""docsearch MCP server entrypoint using FastMCP.

Exposes documentation search over a prebuilt index as MCP tools.
Run with:
  - poetry run docsearch-mcp
  - or: python -m docsearch.mcp.server (ensure PYTHONPATH includes ./src)
"""
from __future__ import annotations

import logging
from typing import Optional

from fastmcp import FastMCP

from docsearch.config import Settings, load_settings
from docsearch.exceptions import DocSearchError
from docsearch.logging_setup import configure_logging
from docsearch.mcp.tools import register_search_tools
from docsearch.search.adapter import SearchAdapter

logger = logging.getLogger(__name__)


class AppState:
    """Application state shared by MCP tools."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.search: Optional[SearchAdapter] = None

    def init_search(self) -> None:
        """Load the corpus and index if configured; leave search disabled otherwise."""
        cfg = self.settings.index
        if cfg.corpus_path and cfg.index_dir:
            self.search = SearchAdapter.from_settings(self.settings)
        else:
            logger.warning("Search index not configured; docs_search is disabled")
            self.search = None


# Global state and server instance
_state: Optional[AppState] = None
mcp = FastMCP("docsearch MCP Server")


# ----- Tools -----

@mcp.tool
def health() -> str:
    """Simple health check tool."""
    return "ok"


# ----- Entrypoint -----

def main() -> None:
    """Initialize state and run the MCP server."""
    global _state
    settings = load_settings()
    configure_logging(settings.app.log_level)
    _state = AppState(settings)
    try:
        _state.init_search()
    except DocSearchError:
        logger.error("Failed to load search index", exc_info=True)
        raise
    register_search_tools(mcp, get_state=lambda: _state)
    # Choose transport based on configuration: stdio (default), http, or sse
    transport = settings.app.transport
    if transport in ("http", "sse"):
        mcp.run(transport=transport, host=settings.app.host, port=settings.app.port)
    else:
        mcp.run()


if __name__ == "__main__":  # pragma: no cover
    main()
