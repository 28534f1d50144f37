"""Configuration helpers for the Amadeus credentials and environment variables."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from flight_search.core.errors import ConfigurationError

DEFAULT_BASE_URL = "https://test.api.amadeus.com"


@dataclass(slots=True)
class AmadeusSettings:
    """Centralised container for the Amadeus Self-Service credentials."""

    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    search_timeout_s: float = 25.0

    @classmethod
    def from_env(cls) -> "AmadeusSettings":
        """Load settings from the ``AMADEUS_*`` environment variables."""

        return cls(
            client_id=os.getenv("AMADEUS_CLIENT_ID"),
            client_secret=os.getenv("AMADEUS_CLIENT_SECRET"),
            base_url=(os.getenv("AMADEUS_BASE_URL") or DEFAULT_BASE_URL).rstrip("/"),
        )

    def ensure(self, field: str) -> str:
        """Return the requested field and fail fast if it is missing."""

        value = getattr(self, field)
        if isinstance(value, str):
            value = value.strip()
        if not value:
            raise ConfigurationError(f"Missing configuration value: {field}")
        return value

    def has_credentials(self) -> bool:
        return bool((self.client_id or "").strip() and (self.client_secret or "").strip())
