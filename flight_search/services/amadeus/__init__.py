"""Amadeus flight search API integration.

This module provides the client, token cache and tool factory that expose the
Amadeus flight offers search to LangChain-based travel workflows.

Public API:
    - create_amadeus_client: Factory function to create the Amadeus client
    - TokenCache: Process-wide cache for the client-credentials bearer token
    - build_query: Query summary and provider parameters for a search
    - normalize_offers: Flatten a flight-offers response into FlightOffer records
    - run_flight_search: Tool entry point returning a ToolResult envelope
    - create_flight_search_tool: Factory function to create the LangChain tool
    - FlightSearchInput: Pydantic schema for the tool arguments
"""
from flight_search.services.amadeus.auth import AccessToken, Credentials, TokenCache, default_token_cache
from flight_search.services.amadeus.client import AmadeusClient, create_amadeus_client
from flight_search.services.amadeus.normalizer import normalize_offers
from flight_search.services.amadeus.query import build_query, parse_search_request
from flight_search.services.amadeus.schemas import (
    FlightOffer,
    FlightSearchInput,
    SearchRequest,
    SearchResult,
    ToolResult,
)
from flight_search.services.amadeus.tools import (
    FLIGHT_SEARCH_TOOL_DESCRIPTION,
    FLIGHT_SEARCH_TOOL_NAME,
    create_flight_search_tool,
    flight_search_json_schema,
    run_flight_search,
)

__all__ = [
    "AccessToken",
    "Credentials",
    "TokenCache",
    "default_token_cache",
    "AmadeusClient",
    "create_amadeus_client",
    "normalize_offers",
    "build_query",
    "parse_search_request",
    "FlightOffer",
    "FlightSearchInput",
    "SearchRequest",
    "SearchResult",
    "ToolResult",
    "FLIGHT_SEARCH_TOOL_DESCRIPTION",
    "FLIGHT_SEARCH_TOOL_NAME",
    "create_flight_search_tool",
    "flight_search_json_schema",
    "run_flight_search",
]
