"""Translate tool arguments into a query summary and Amadeus search parameters."""
from __future__ import annotations

from typing import Any, Dict, Mapping, Tuple, Union

from pydantic import ValidationError

from flight_search.core.errors import InvalidRequestError
from flight_search.services.amadeus.schemas import SearchRequest

SearchArgs = Union[SearchRequest, Mapping[str, Any]]


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for item in exc.errors():
        field = ".".join(str(loc) for loc in item.get("loc", ()))
        parts.append(f"{field}: {item.get('msg')}" if field else str(item.get("msg")))
    return "; ".join(parts)


def parse_search_request(args: SearchArgs) -> SearchRequest:
    """Build a typed request, failing only when origin, destination or depart_date are unusable."""

    if isinstance(args, SearchRequest):
        return args
    try:
        return SearchRequest.model_validate(dict(args or {}))
    except ValidationError as exc:
        raise InvalidRequestError(
            f"invalid flight search arguments: {_format_validation_error(exc)}"
        ) from exc


def _format_price(value: float) -> str:
    return f"{value:.0f}"


def build_summary(request: SearchRequest) -> str:
    parts = [f"{request.origin} → {request.destination}"]
    parts.append(f"depart {request.depart_date.isoformat()}")
    if request.return_date is not None:
        parts.append(f"return {request.return_date.isoformat()}")
    if request.passengers:
        parts.append(f"{request.passengers} pax")
    if request.cabin:
        parts.append(request.cabin.lower())
    if request.max_price:
        parts.append(" ".join(filter(None, ["max", _format_price(request.max_price), request.currency])))
    return ", ".join(parts)


def build_params(request: SearchRequest) -> Dict[str, str]:
    params = {
        "originLocationCode": request.origin,
        "destinationLocationCode": request.destination,
        "departureDate": request.depart_date.isoformat(),
    }
    if request.return_date is not None:
        params["returnDate"] = request.return_date.isoformat()
    params["adults"] = str(request.adults)
    if request.cabin:
        params["travelClass"] = request.cabin.upper()
    if request.currency:
        params["currencyCode"] = request.currency
    if request.max_price:
        params["maxPrice"] = _format_price(request.max_price)
    # Always include connecting itineraries, not only direct flights.
    params["nonStop"] = "false"
    return params


def build_query(args: SearchArgs) -> Tuple[str, Dict[str, str]]:
    """Return the human readable summary and the provider query parameters."""

    request = parse_search_request(args)
    return build_summary(request), build_params(request)
