import logging
import math
from datetime import date
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from flight_search.core.types import IATACode, NonNegMoney

logger = logging.getLogger(__name__)


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    return str(value).strip()


def _to_number(value: Any) -> Optional[float]:
    """Coerce ints, floats and numeric strings; anything else counts as absent."""

    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


class FlightSearchInput(BaseModel):
    """Arguments accepted by the ``flight_search`` tool."""

    origin: str = Field(..., description="Origin IATA airport code")
    destination: str = Field(..., description="Destination IATA airport code")
    depart_date: str = Field(..., description="Departure date (YYYY-MM-DD)")
    return_date: Optional[str] = Field(None, description="Return date (YYYY-MM-DD) or empty for one-way")
    passengers: Optional[float] = Field(None, description="Number of passengers")
    cabin: Optional[str] = Field(None, description="Cabin class")
    max_price: Optional[float] = Field(None, description="Maximum price")
    currency: Optional[str] = Field(None, description="Currency code")


class SearchRequest(BaseModel):
    """Typed flight search request built from the loosely typed tool arguments."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    origin: IATACode
    destination: IATACode
    depart_date: date
    return_date: Optional[date] = None
    passengers: Optional[int] = None
    cabin: str = ""
    max_price: Optional[NonNegMoney] = None
    currency: str = ""

    @field_validator("origin", "destination", "cabin", "currency", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _to_text(value)

    @field_validator("depart_date", mode="before")
    @classmethod
    def _coerce_depart_date(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("return_date", mode="before")
    @classmethod
    def _coerce_return_date(cls, value: Any) -> Optional[date]:
        if isinstance(value, date):
            return value
        text = _to_text(value)
        if not text:
            return None
        try:
            return date.fromisoformat(text)
        except ValueError:
            logger.warning(f"Ignoring unparseable return_date {text!r}; searching one-way")
            return None

    @field_validator("passengers", mode="before")
    @classmethod
    def _coerce_passengers(cls, value: Any) -> Optional[int]:
        number = _to_number(value)
        if number is None or int(number) <= 0:
            return None
        return int(number)

    @field_validator("max_price", mode="before")
    @classmethod
    def _coerce_max_price(cls, value: Any) -> Optional[float]:
        number = _to_number(value)
        if number is None or number <= 0:
            return None
        return number

    @property
    def adults(self) -> int:
        """Passenger count sent to the provider, which requires at least one adult."""

        return self.passengers or 1

    @field_serializer("depart_date", "return_date", when_used="json")
    def _serialize_dates(self, value: Optional[date], _info) -> Optional[str]:
        if value is None:
            return None
        return value.strftime("%Y-%m-%d")


class FlightOffer(BaseModel):
    """Flat, provider-independent view of a single flight offer."""

    model_config = ConfigDict(frozen=True)

    airline: str
    flight_number: str
    origin: str
    destination: str
    depart_time: str
    arrive_time: str
    duration: str
    stops: int = Field(..., ge=0)
    price: str = Field(..., description="Provider decimal string, never converted to float")
    currency: str


class SearchResult(BaseModel):
    """Payload returned to the workflow for a successful search."""

    query: str
    results: List[FlightOffer] = Field(default_factory=list)
    source: str = "amadeus"


class ToolResult(BaseModel):
    """Success/failure envelope handed back to the calling workflow."""

    success: bool
    content: Optional[str] = Field(None, description="JSON-serialised SearchResult on success")
    error: Optional[str] = Field(None, description="Human readable error on failure")

    @classmethod
    def ok(cls, result: SearchResult) -> "ToolResult":
        return cls(success=True, content=result.model_dump_json())

    @classmethod
    def failure(cls, message: str) -> "ToolResult":
        return cls(success=False, error=message)
