import asyncio
import logging
from typing import Any, Dict, Mapping, Optional

from langchain_core.tools import StructuredTool

from flight_search.core.config import AmadeusSettings
from flight_search.core.errors import FlightSearchError
from flight_search.services.amadeus.client import AmadeusClient, create_amadeus_client
from flight_search.services.amadeus.query import build_summary, parse_search_request
from flight_search.services.amadeus.schemas import FlightSearchInput, SearchResult, ToolResult

logger = logging.getLogger(__name__)

FLIGHT_SEARCH_TOOL_NAME = "flight_search"
FLIGHT_SEARCH_TOOL_DESCRIPTION = (
    "Search for flights using origin, destination, dates, and preferences (Amadeus API)."
)
SOURCE = "amadeus"


def flight_search_json_schema() -> Dict[str, Any]:
    """JSON schema advertised to the workflow for the tool arguments."""

    return FlightSearchInput.model_json_schema()


async def run_flight_search(
    args: Mapping[str, Any],
    *,
    client: Optional[AmadeusClient] = None,
    settings: Optional[AmadeusSettings] = None,
) -> ToolResult:
    """Run one flight search and wrap the outcome in a success/failure envelope.

    Without an explicit ``client`` the credentials are read from the environment
    on every call, so missing credentials are reported before any HTTP request.
    Cancelling the surrounding task propagates ``asyncio.CancelledError`` as-is.
    """

    try:
        request = parse_search_request(args)
        summary = build_summary(request)
        if client is not None:
            offers = await client.search(request)
        else:
            async with create_amadeus_client(settings or AmadeusSettings.from_env()) as owned:
                offers = await owned.search(request)
    except FlightSearchError as exc:
        logger.error(f"Flight search failed ({type(exc).__name__}): {exc}")
        return ToolResult.failure(str(exc))

    return ToolResult.ok(SearchResult(query=summary, results=offers, source=SOURCE))


def create_flight_search_tool(
    client: Optional[AmadeusClient] = None,
    *,
    settings: Optional[AmadeusSettings] = None,
) -> StructuredTool:
    """Expose the Amadeus flight search as a LangChain tool.

    Synchronous ``invoke`` runs each search on its own event loop; pass no
    ``client`` there so every call opens its HTTP connections on that loop.
    """

    async def flight_search(**kwargs) -> Dict[str, Any]:
        result = await run_flight_search(kwargs, client=client, settings=settings)
        return result.model_dump()

    def _run(**kwargs) -> Dict[str, Any]:
        # Sync callers get a private event loop per call.
        return asyncio.run(flight_search(**kwargs))

    return StructuredTool.from_function(
        func=_run,
        coroutine=flight_search,
        name=FLIGHT_SEARCH_TOOL_NAME,
        description=FLIGHT_SEARCH_TOOL_DESCRIPTION,
        args_schema=FlightSearchInput,
    )
