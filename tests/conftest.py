"""Pytest configuration for the flight search project."""
from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import httpx
import pytest

# Ensure the project root is on sys.path so that import flight_search works under pytest.
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from flight_search.core.config import AmadeusSettings  # noqa: E402
from flight_search.services.amadeus.auth import Credentials  # noqa: E402

BASE_URL = "https://test.api.amadeus.com"
TOKEN_PATH = "/v1/security/oauth2/token"
OFFERS_PATH = "/v2/shopping/flight-offers"


class FakeClock:
    """Deterministic replacement for ``time.time``."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def _json_response(status: int, body: Any) -> httpx.Response:
    if isinstance(body, (bytes, str)):
        return httpx.Response(status, content=body)
    return httpx.Response(status, json=body)


class FakeAmadeus:
    """In-process stand-in for the Amadeus token and flight-offers endpoints."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.token_status = 200
        self.token_body: Optional[Any] = None
        self.token_delay = 0.0
        self.offers_status = 200
        self.offers_body: Any = {"data": []}
        self.issued = 0

    @property
    def token_calls(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path == TOKEN_PATH]

    @property
    def search_calls(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path == OFFERS_PATH]

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == TOKEN_PATH:
            if self.token_delay:
                await asyncio.sleep(self.token_delay)
            self.issued += 1
            body = self.token_body
            if body is None:
                body = {
                    "type": "amadeusOAuth2Token",
                    "access_token": f"token-{self.issued}",
                    "token_type": "Bearer",
                    "expires_in": 1799,
                }
            return _json_response(self.token_status, body)
        if request.url.path == OFFERS_PATH:
            return _json_response(self.offers_status, self.offers_body)
        return httpx.Response(404, json={"errors": [{"status": 404, "title": "NOT FOUND"}]})

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


def make_segment(carrier: str, number: str, dep: str, dep_at: str, arr: str, arr_at: str) -> Dict[str, Any]:
    return {
        "departure": {"iataCode": dep, "terminal": "1", "at": dep_at},
        "arrival": {"iataCode": arr, "at": arr_at},
        "carrierCode": carrier,
        "number": number,
        "aircraft": {"code": "321"},
        "duration": "PT3H",
        "numberOfStops": 0,
    }


def make_offer(segments: List[Dict[str, Any]], *, total: str = "412.30", currency: str = "USD",
               duration: str = "PT6H30M", extra_itineraries: int = 0) -> Dict[str, Any]:
    itineraries = [{"duration": duration, "segments": segments}]
    for _ in range(extra_itineraries):
        itineraries.append({
            "duration": "PT5H45M",
            "segments": [make_segment("UA", "900", "JFK", "2024-05-08T10:00:00", "SFO", "2024-05-08T13:45:00")],
        })
    return {
        "type": "flight-offer",
        "id": "1",
        "source": "GDS",
        "itineraries": itineraries,
        "price": {"currency": currency, "total": total, "base": "350.00", "grandTotal": total},
    }


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_amadeus() -> FakeAmadeus:
    return FakeAmadeus()


@pytest.fixture
def settings() -> AmadeusSettings:
    return AmadeusSettings(client_id="test-id", client_secret="test-secret", base_url=BASE_URL)


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(client_id="test-id", client_secret="test-secret")


@pytest.fixture
def two_segment_offer() -> Dict[str, Any]:
    return make_offer([
        make_segment("AA", "100", "SFO", "2024-05-01T08:00:00", "ORD", "2024-05-01T11:00:00"),
        make_segment("AA", "2101", "ORD", "2024-05-01T12:15:00", "JFK", "2024-05-01T14:30:00"),
    ])


@pytest.fixture
def offers_payload(two_segment_offer) -> Dict[str, Any]:
    return {"meta": {"count": 1}, "data": [two_segment_offer], "dictionaries": {}}


@pytest.fixture
def offers_body(offers_payload) -> bytes:
    return json.dumps(offers_payload).encode()


@pytest.fixture
def search_args() -> Dict[str, Any]:
    return {
        "origin": "SFO",
        "destination": "JFK",
        "depart_date": "2024-05-01",
        "passengers": 2,
        "cabin": "ECONOMY",
        "max_price": 500,
        "currency": "USD",
    }
