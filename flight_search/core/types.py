"""Shared type aliases used across the flight search modules."""
from __future__ import annotations

from typing import Annotated

from pydantic import Field, StringConstraints

NonNegMoney = Annotated[float, Field(ge=0)]
IATACode = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True,
        min_length=1,
    ),
]
