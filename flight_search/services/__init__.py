"""External service integrations for flight search.

Each service module exports:
    - create_*_client: Factory to create the API client
    - create_*_tool: Factory to create a LangChain tool from the client
    - Input schemas: Pydantic models for tool parameters

Example Usage:
    >>> from flight_search.services.amadeus import create_amadeus_client, create_flight_search_tool
    >>> from flight_search.core.config import AmadeusSettings
    >>>
    >>> settings = AmadeusSettings.from_env()
    >>> client = create_amadeus_client(settings)
    >>> tool = create_flight_search_tool(client)
"""

from flight_search.services.amadeus import (
    AmadeusClient,
    FlightSearchInput,
    create_amadeus_client,
    create_flight_search_tool,
    run_flight_search,
)

__all__ = [
    "AmadeusClient",
    "FlightSearchInput",
    "create_amadeus_client",
    "create_flight_search_tool",
    "run_flight_search",
]
