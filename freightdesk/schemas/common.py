"""Shared schema building blocks."""
from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Literal

from pydantic import BaseModel, PlainSerializer

# Amounts travel as strings so no precision is lost to JSON floats.
Amount = Annotated[Decimal, PlainSerializer(lambda value: str(value), return_type=str)]

ScreenStatus = Literal["loaded", "empty", "error"]


class ScreenPayload(BaseModel):
    """Outcome of loading one screen.

    ``empty`` means the collaborator answered with no rows; ``error`` carries
    the failure message and leaves ``data`` unset.
    """

    status: ScreenStatus
    error: str | None = None


class MessageResponse(BaseModel):
    detail: str


__all__ = ["Amount", "MessageResponse", "ScreenPayload", "ScreenStatus"]
