"""FastAPI surface exposing the flight search tool to remote workflows."""
from __future__ import annotations

# Load environment variables from .env file
from dotenv import load_dotenv

# Load .env file before any other imports that might need environment variables
load_dotenv()


import logging
from typing import Dict

from fastapi import Depends, FastAPI

from flight_search.api.dependencies import get_settings
from flight_search.api.schemas import ToolDescription
from flight_search.core.config import AmadeusSettings
from flight_search.services.amadeus import (
    FLIGHT_SEARCH_TOOL_DESCRIPTION,
    FLIGHT_SEARCH_TOOL_NAME,
    FlightSearchInput,
    ToolResult,
    flight_search_json_schema,
    run_flight_search,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Flight Search Tool API", version="0.1.0")


@app.post("/tools/flight_search", response_model=ToolResult)
async def flight_search(
    payload: FlightSearchInput,
    settings: AmadeusSettings = Depends(get_settings),
) -> ToolResult:
    """Run one Amadeus flight search.

    Upstream and configuration failures are reported inside the envelope
    (``success=false`` with ``error``), never as HTTP errors.

    Example JSON payload:
        ```json
        {
            "origin": "SFO",
            "destination": "JFK",
            "depart_date": "2024-05-01",
            "passengers": 2,
            "cabin": "economy",
            "max_price": 500,
            "currency": "USD"
        }
        ```
    """

    logger.info(f"Flight search request: {payload.origin} -> {payload.destination} on {payload.depart_date}")
    result = await run_flight_search(payload.model_dump(exclude_none=True), settings=settings)
    if result.success:
        logger.info("Flight search completed successfully")
    return result


@app.get("/tools/flight_search/schema", response_model=ToolDescription)
async def flight_search_schema() -> ToolDescription:
    """Describe the tool the way workflow engines register it."""

    return ToolDescription(
        name=FLIGHT_SEARCH_TOOL_NAME,
        description=FLIGHT_SEARCH_TOOL_DESCRIPTION,
        parameters=flight_search_json_schema(),
    )


@app.get("/health")
async def health_check() -> Dict[str, str]:
    """Simple health endpoint used for readiness probes."""

    return {"status": "healthy", "service": "flight-search-api"}
