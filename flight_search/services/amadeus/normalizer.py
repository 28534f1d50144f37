"""Flatten Amadeus flight-offers responses into ``FlightOffer`` records."""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Union

from flight_search.core.errors import ParseError
from flight_search.services.amadeus.schemas import FlightOffer

logger = logging.getLogger(__name__)


def time_from_iso(value: str) -> str:
    """Return the time-of-day part of an ISO timestamp such as ``2024-05-01T08:00:00``."""

    if not value:
        return ""
    parts = value.split("T")
    if len(parts) == 2:
        return parts[1]
    return value


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _mapping(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _to_offer(item: Any) -> Optional[FlightOffer]:
    """Map one raw offer, or return ``None`` when it has no usable itinerary."""

    if not isinstance(item, dict):
        return None
    itineraries = item.get("itineraries")
    if not isinstance(itineraries, list) or not itineraries:
        return None
    # Only the outbound itinerary is reported.
    itinerary = _mapping(itineraries[0])
    segments = [seg for seg in itinerary.get("segments") or [] if isinstance(seg, dict)]
    if not segments:
        return None

    first, last = segments[0], segments[-1]
    departure = _mapping(first.get("departure"))
    arrival = _mapping(last.get("arrival"))
    carrier = _text(first.get("carrierCode"))
    price = _mapping(item.get("price"))

    return FlightOffer(
        airline=carrier,
        flight_number=f"{carrier}{_text(first.get('number'))}".strip(),
        origin=_text(departure.get("iataCode")),
        destination=_text(arrival.get("iataCode")),
        depart_time=time_from_iso(_text(departure.get("at"))),
        arrive_time=time_from_iso(_text(arrival.get("at"))),
        duration=_text(itinerary.get("duration")),
        stops=len(segments) - 1,
        price=_text(price.get("total")),
        currency=_text(price.get("currency")),
    )


def normalize_offers(body: Union[bytes, str]) -> List[FlightOffer]:
    """Parse a flight-offers response body into canonical offers.

    An unparseable body is a hard ``ParseError``. Individual offers without an
    itinerary or without segments are dropped and counted in the log.
    """

    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ParseError(f"amadeus flight offers response is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise ParseError("amadeus flight offers response is not a JSON object")

    data = payload.get("data") or []
    if not isinstance(data, list):
        raise ParseError("amadeus flight offers response field 'data' is not a list")

    offers: List[FlightOffer] = []
    skipped = 0
    for item in data:
        offer = _to_offer(item)
        if offer is None:
            skipped += 1
            continue
        offers.append(offer)

    if skipped:
        logger.warning(f"Skipped {skipped} of {len(data)} flight offers without itinerary segments")
    return offers
