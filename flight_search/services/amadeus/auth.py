"""Client-credentials token cache for the Amadeus Self-Service API.

Amadeus issues bearer tokens that live for roughly half an hour. The token is
cached process-wide and refreshed 30 seconds before it expires. All reads and
writes happen under one ``threading.Lock``: concurrent searches that find an
expired token wait for a single exchange and then share its result.
"""
from __future__ import annotations

import asyncio
import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

import httpx

from flight_search.core.config import AmadeusSettings
from flight_search.core.errors import AuthError, ConfigurationError, format_response_error

logger = logging.getLogger(__name__)

TOKEN_PATH = "/v1/security/oauth2/token"
EXPIRY_MARGIN_S = 30.0
FALLBACK_LIFETIME_S = 20 * 60.0

Clock = Callable[[], float]


@dataclass(frozen=True)
class Credentials:
    """Client id/secret pair used for the client-credentials grant."""

    client_id: str
    client_secret: str = field(repr=False)

    @classmethod
    def from_settings(cls, settings: AmadeusSettings) -> "Credentials":
        """Fail fast, before any network call, when either value is missing."""

        if not settings.has_credentials():
            raise ConfigurationError("missing AMADEUS_CLIENT_ID or AMADEUS_CLIENT_SECRET")
        return cls(
            client_id=settings.ensure("client_id"),
            client_secret=settings.ensure("client_secret"),
        )


@dataclass(frozen=True)
class AccessToken:
    value: str = field(repr=False)
    issued_at: float
    expires_at: float
    client_id: str = ""

    def is_fresh(self, now: float, margin_s: float = EXPIRY_MARGIN_S) -> bool:
        return now < self.expires_at - margin_s


def _token_lifetime(raw: Any) -> float:
    if isinstance(raw, bool):
        return FALLBACK_LIFETIME_S
    try:
        lifetime = float(raw)
    except (TypeError, ValueError):
        return FALLBACK_LIFETIME_S
    if lifetime <= 0:
        return FALLBACK_LIFETIME_S
    return lifetime


class TokenCache:
    """Holds the current Amadeus access token and refreshes it on demand.

    The state is guarded by a ``threading.Lock`` so one cache can be shared by
    searches running on different event loops and threads. Waiting for the lock
    happens in a worker thread, never on the event loop itself.
    """

    def __init__(
        self,
        *,
        clock: Clock = time.time,
        timeout_s: float = 15.0,
        margin_s: float = EXPIRY_MARGIN_S,
    ) -> None:
        self._clock = clock
        self._timeout_s = timeout_s
        self._margin_s = margin_s
        self._token: Optional[AccessToken] = None
        self._lock = threading.Lock()

    @property
    def current(self) -> Optional[AccessToken]:
        """The cached token, if any, regardless of freshness."""

        return self._token

    async def _acquire(self) -> None:
        if self._lock.acquire(blocking=False):
            return

        guard = threading.Lock()
        state = {"acquired": False, "abandoned": False}

        def wait() -> None:
            self._lock.acquire()
            with guard:
                if state["abandoned"]:
                    self._lock.release()
                else:
                    state["acquired"] = True

        try:
            await asyncio.to_thread(wait)
        except asyncio.CancelledError:
            # A cancelled waiter must not keep the lock, whenever the worker gets it.
            with guard:
                state["abandoned"] = True
                if state["acquired"]:
                    self._lock.release()
            raise

    async def get_token(
        self,
        http: httpx.AsyncClient,
        credentials: Credentials,
        *,
        base_url: str,
    ) -> str:
        """Return a valid bearer token, performing at most one exchange at a time."""

        await self._acquire()
        try:
            cached = self._token
            if (
                cached is not None
                and cached.client_id == credentials.client_id
                and cached.is_fresh(self._clock(), self._margin_s)
            ):
                return cached.value

            token = await self._exchange(http, credentials, base_url)
            # Only a fully successful exchange replaces the cached token.
            self._token = token
            return token.value
        finally:
            self._lock.release()

    async def invalidate(self) -> None:
        await self._acquire()
        try:
            self._token = None
        finally:
            self._lock.release()

    async def _exchange(
        self,
        http: httpx.AsyncClient,
        credentials: Credentials,
        base_url: str,
    ) -> AccessToken:
        url = f"{base_url.rstrip('/')}{TOKEN_PATH}"
        form = {
            "grant_type": "client_credentials",
            "client_id": credentials.client_id,
            "client_secret": credentials.client_secret,
        }
        logger.info(f"Requesting Amadeus access token for client {credentials.client_id[:4]}***")
        try:
            response = await http.post(
                url,
                data=form,
                headers={"Content-Type": "application/x-www-form-urlencoded"},
                timeout=self._timeout_s,
            )
        except httpx.TimeoutException as exc:
            raise AuthError(f"amadeus token request timed out after {self._timeout_s:g}s") from exc
        except httpx.HTTPError as exc:
            raise AuthError(f"amadeus token request failed: {exc}") from exc

        if not response.is_success:
            raise AuthError(
                f"amadeus token request failed: {format_response_error(response)}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise AuthError("amadeus token response is not valid JSON") from exc
        if not isinstance(payload, dict):
            raise AuthError("amadeus token response is not a JSON object")

        value = payload.get("access_token")
        if not isinstance(value, str) or not value.strip():
            raise AuthError("amadeus token response missing access_token")

        lifetime = _token_lifetime(payload.get("expires_in"))
        issued_at = self._clock()
        logger.info(f"Obtained Amadeus access token valid for {lifetime:.0f}s")
        return AccessToken(
            value=value,
            issued_at=issued_at,
            expires_at=issued_at + lifetime,
            client_id=credentials.client_id,
        )


default_token_cache = TokenCache()
