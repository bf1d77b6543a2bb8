"""Documentation search tools for FastMCP.

Expose the prebuilt documentation index to MCP clients; results use the same
hit shape as the search-box UI.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from fastmcp import FastMCP

from docsearch.search.adapter import SearchAdapter


def register_search_tools(mcp: FastMCP, get_state: Callable[[], Any]) -> None:
    """Register documentation search tools on the given FastMCP instance.

    Reads the adapter from state.search (built at server start-up).
    """

    def _get_adapter() -> SearchAdapter:
        state = get_state()
        adapter = getattr(state, "search", None)
        if adapter is None:
            raise RuntimeError(
                "Search is not configured. Set DOCSEARCH_INDEX__CORPUS_PATH, DOCSEARCH_INDEX__INDEX_DIR."
            )
        return adapter

    @mcp.tool
    async def docs_search(query: str, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Search the documentation and return highlighted hits.

        Parameters
        ----------
        query: str
            Search-box text. Quote a phrase ("red pepper") to require it literally.
        limit: int | None
            Optional cap below the configured maximum number of hits.
        """
        if not query or not str(query).strip():
            return []
        hits = await _get_adapter().search(query)
        if limit is not None:
            hits = hits[: max(0, int(limit))]
        return [h.to_dict() for h in hits]
