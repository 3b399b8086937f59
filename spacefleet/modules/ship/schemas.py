"""Pydantic schemas for ship request/response bodies.

Payload models only check JSON types.  Field rules (lengths, ranges, enum
membership, mandatory fields on create) are applied by
:mod:`spacefleet.modules.ship.validation` so that every violation surfaces
as a ``BAD_REQUEST`` with the same envelope.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from spacefleet.models.enums import ShipType
from spacefleet.modules.ship.timestamps import date_to_epoch_millis

# ---------------------------------------------------------------------------
# Payloads
# ---------------------------------------------------------------------------


class ShipPayload(BaseModel):
    """Ship fields as sent by clients; ``id`` and ``rating`` are ignored."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    planet: str | None = None
    ship_type: str | None = Field(None, alias="shipType")
    prod_date: int | None = Field(None, alias="prodDate")
    is_used: bool | None = Field(None, alias="isUsed")
    speed: float | None = None
    crew_size: int | None = Field(None, alias="crewSize")


class ShipCreate(ShipPayload):
    """Body of a create request. Every field except ``isUsed`` is mandatory."""


class ShipUpdate(ShipPayload):
    """Patch body: a ``None``/absent field leaves the stored value unchanged."""


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class ShipResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    planet: str
    ship_type: ShipType = Field(serialization_alias="shipType")
    prod_date: date = Field(serialization_alias="prodDate")
    is_used: bool = Field(serialization_alias="isUsed")
    speed: Decimal
    crew_size: int = Field(serialization_alias="crewSize")
    rating: Decimal

    @field_serializer("prod_date")
    def _prod_date_millis(self, value: date) -> int:
        return date_to_epoch_millis(value)

    @field_serializer("speed", "rating")
    def _decimal_number(self, value: Decimal) -> float:
        return float(value)


class DeleteResponse(BaseModel):
    status: str
