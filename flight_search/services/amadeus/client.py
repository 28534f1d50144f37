import logging
from typing import List, Optional

import httpx

from flight_search.core.config import AmadeusSettings
from flight_search.core.errors import UpstreamError, format_response_error
from flight_search.services.amadeus.auth import Credentials, TokenCache, default_token_cache
from flight_search.services.amadeus.normalizer import normalize_offers
from flight_search.services.amadeus.query import build_params
from flight_search.services.amadeus.schemas import FlightOffer, SearchRequest

logger = logging.getLogger(__name__)

FLIGHT_OFFERS_PATH = "/v2/shopping/flight-offers"


class AmadeusClient:
    """Thin async wrapper around the Amadeus flight-offers search endpoint."""

    def __init__(
        self,
        credentials: Credentials,
        *,
        base_url: str,
        token_cache: Optional[TokenCache] = None,
        timeout_s: float = 25.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.credentials = credentials
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self.token_cache = token_cache if token_cache is not None else default_token_cache
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"accept": "application/json"},
            timeout=httpx.Timeout(timeout_s, connect=10.0),
            transport=transport,
        )

    async def aclose(self) -> None:
        """Close the underlying HTTPX client."""

        await self._client.aclose()

    async def __aenter__(self) -> "AmadeusClient":
        """Support async context-manager usage."""

        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        """Ensure the HTTP client is closed when leaving a context."""

        await self._client.aclose()

    async def get_token(self) -> str:
        return await self.token_cache.get_token(self._client, self.credentials, base_url=self.base_url)

    async def fetch_offers(self, request: SearchRequest, token: str) -> bytes:
        """Issue one authenticated GET against the offers endpoint and return the raw body."""

        try:
            response = await self._client.get(
                FLIGHT_OFFERS_PATH,
                params=build_params(request),
                headers={"Authorization": f"Bearer {token}"},
                timeout=self.timeout_s,
            )
        except httpx.TimeoutException as exc:
            raise UpstreamError(
                f"amadeus flight offers request timed out after {self.timeout_s:g}s"
            ) from exc
        except httpx.HTTPError as exc:
            raise UpstreamError(f"amadeus flight offers request failed: {exc}") from exc

        if not response.is_success:
            if response.status_code == httpx.codes.UNAUTHORIZED:
                # The provider revoked the token early; the next call exchanges again.
                await self.token_cache.invalidate()
            raise UpstreamError(
                f"amadeus flight offers request failed: {format_response_error(response)}",
                status_code=response.status_code,
            )
        return response.content

    async def search(self, request: SearchRequest) -> List[FlightOffer]:
        """Acquire a token, fetch the offers and normalise them."""

        token = await self.get_token()
        body = await self.fetch_offers(request, token)
        offers = normalize_offers(body)
        logger.info(
            f"Amadeus returned {len(offers)} offers for {request.origin}-{request.destination} "
            f"on {request.depart_date.isoformat()}"
        )
        return offers


def create_amadeus_client(
    settings: AmadeusSettings,
    *,
    token_cache: Optional[TokenCache] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> AmadeusClient:
    """Instantiate the Amadeus client using project configuration."""

    credentials = Credentials.from_settings(settings)
    return AmadeusClient(
        credentials,
        base_url=settings.base_url,
        token_cache=token_cache,
        timeout_s=settings.search_timeout_s,
        transport=transport,
    )
