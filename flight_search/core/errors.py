"""Error taxonomy shared by the flight search integration."""
from __future__ import annotations

import json
from typing import Any, Optional


class FlightSearchError(RuntimeError):
    """Base class for every failure that aborts a flight search invocation."""


class ConfigurationError(FlightSearchError):
    """Credentials or other required settings are missing."""


class InvalidRequestError(FlightSearchError):
    """A required search argument is missing or cannot be parsed."""


class AuthError(FlightSearchError):
    """The client-credentials token exchange failed."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UpstreamError(FlightSearchError):
    """The flight offers search call failed (bad status, transport error or timeout)."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ParseError(FlightSearchError):
    """The provider response body is not the JSON document we expect."""


def format_response_error(response: Any) -> str:
    """Return a human-friendly message for a failed Amadeus HTTP response."""

    status = getattr(response, "status_code", None)
    reason = getattr(response, "reason_phrase", None) or ""
    raw_body = getattr(response, "text", None)

    details = None
    if raw_body:
        try:
            parsed = json.loads(raw_body)
        except json.JSONDecodeError:
            details = raw_body.strip()[:200]
        else:
            errors = parsed.get("errors") if isinstance(parsed, dict) else None
            if isinstance(errors, list):
                parts = []
                for item in errors:
                    if not isinstance(item, dict):
                        continue
                    code = item.get("code")
                    title = item.get("title")
                    detail = item.get("detail")
                    section = " ".join(str(part) for part in (code, title) if part)
                    if detail:
                        section = f"{section}: {detail}" if section else str(detail)
                    if section:
                        parts.append(section)
                if parts:
                    details = "; ".join(parts)
            if details is None and isinstance(parsed, dict):
                for key in ("error_description", "message", "error"):
                    if key in parsed and isinstance(parsed[key], str):
                        details = parsed[key]
                        break
    prefix = f"HTTP {status} {reason}".strip() if status else "Amadeus API error"
    if details:
        return f"{prefix}: {details}"
    return prefix
