"""Ship field rules, the create/update validation entry points and the rating formula.

Both entry points run the same per-field checks in a fixed order and stop at
the first violation with :class:`BadRequestException`:
name, planet, speed, crewSize, prodDate, shipType, isUsed.
"""

from __future__ import annotations

import math
from datetime import date
from decimal import ROUND_HALF_DOWN, Decimal
from typing import Any

from spacefleet.exceptions import BadRequestException
from spacefleet.models.enums import ShipType
from spacefleet.models.ship import Ship
from spacefleet.modules.ship.constants import (
    CREW_SIZE_MAX,
    CREW_SIZE_MIN,
    NAME_MAX_LENGTH,
    PLANET_MAX_LENGTH,
    PROD_YEAR_MAX,
    PROD_YEAR_MIN,
    RATING_BASE,
    RATING_USED_FACTOR,
    RATING_YEAR_ANCHOR,
    SHIP_ID_MAX,
    SPEED_MAX,
    SPEED_MIN,
)
from spacefleet.modules.ship.schemas import ShipCreate, ShipUpdate
from spacefleet.modules.ship.timestamps import epoch_millis_to_datetime

TWO_PLACES = Decimal("0.01")


def _invalid(field: str, message: str) -> BadRequestException:
    return BadRequestException(
        f"Invalid {field}: {message}",
        details=[{"field": field, "message": message}],
    )


def _require(value: Any, field: str) -> Any:
    if value is None:
        raise BadRequestException(
            f"Missing required field: {field}",
            details=[{"field": field, "message": "Field is required"}],
        )
    return value


def round_half_down(value: float | Decimal) -> Decimal:
    """Round to two decimals, ties toward zero.

    Floats are rounded from their shortest decimal representation, so
    ``0.125`` becomes ``0.12`` and ``0.126`` becomes ``0.13``.
    """
    return Decimal(str(value)).quantize(TWO_PLACES, rounding=ROUND_HALF_DOWN)


# ---------------------------------------------------------------------------
# Field rules
# ---------------------------------------------------------------------------


def check_ship_id(ship_id: int) -> int:
    if isinstance(ship_id, bool) or not isinstance(ship_id, int):
        raise _invalid("id", "must be an integer")
    if not 0 < ship_id <= SHIP_ID_MAX:
        raise _invalid("id", f"must be an integer between 1 and {SHIP_ID_MAX}")
    return ship_id


def _check_text(value: str, field: str, max_length: int) -> str:
    if not value:
        raise _invalid(field, "must not be empty")
    if len(value) > max_length:
        raise _invalid(field, f"must be at most {max_length} characters")
    return value


def check_name(value: str) -> str:
    return _check_text(value, "name", NAME_MAX_LENGTH)


def check_planet(value: str) -> str:
    return _check_text(value, "planet", PLANET_MAX_LENGTH)


def check_speed(value: float) -> Decimal:
    """Return the half-down rounded speed if it lies in [0.10, 0.99]."""
    if not math.isfinite(value):
        raise _invalid("speed", "must be a finite number")
    speed = round_half_down(value)
    if not SPEED_MIN <= speed <= SPEED_MAX:
        raise _invalid("speed", f"must be between {SPEED_MIN} and {SPEED_MAX}")
    return speed


def check_crew_size(value: int) -> int:
    if not CREW_SIZE_MIN <= value <= CREW_SIZE_MAX:
        raise _invalid("crewSize", f"must be between {CREW_SIZE_MIN} and {CREW_SIZE_MAX}")
    return value


def check_prod_date(value: int) -> date:
    """Convert an epoch-millisecond timestamp to a date with an allowed year."""
    try:
        moment = epoch_millis_to_datetime(value)
    except OverflowError:
        raise _invalid("prodDate", "timestamp out of range") from None
    if not PROD_YEAR_MIN <= moment.year <= PROD_YEAR_MAX:
        raise _invalid("prodDate", f"year must be between {PROD_YEAR_MIN} and {PROD_YEAR_MAX}")
    return moment.date()


def check_ship_type(value: str) -> ShipType:
    try:
        return ShipType[value]
    except KeyError:
        allowed = ", ".join(member.name for member in ShipType)
        raise _invalid("shipType", f"must be one of {allowed}") from None


def compute_rating(speed: Decimal, is_used: bool, prod_year: int) -> Decimal:
    """``80 * speed * (0.5 if used else 1) / (1119 - year + 1)``, rounded half-down.

    The quotient is negative for every production year after 1119; it is
    stored as computed.
    """
    factor = RATING_USED_FACTOR if is_used else 1.0
    return round_half_down(
        RATING_BASE * float(speed) * factor / (RATING_YEAR_ANCHOR - prod_year + 1.0)
    )


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------


def validate_create(data: ShipCreate) -> dict[str, Any]:
    """Validate a create payload and return the full column values, rating included."""
    name = check_name(_require(data.name, "name"))
    planet = check_planet(_require(data.planet, "planet"))
    speed = check_speed(_require(data.speed, "speed"))
    crew_size = check_crew_size(_require(data.crew_size, "crewSize"))
    prod_date = check_prod_date(_require(data.prod_date, "prodDate"))
    ship_type = check_ship_type(_require(data.ship_type, "shipType"))
    is_used = data.is_used if data.is_used is not None else False

    return {
        "name": name,
        "planet": planet,
        "speed": speed,
        "crew_size": crew_size,
        "prod_date": prod_date,
        "ship_type": ship_type,
        "is_used": is_used,
        "rating": compute_rating(speed, is_used, prod_date.year),
    }


def validate_update(ship: Ship, data: ShipUpdate) -> dict[str, Any]:
    """Validate a patch against *ship* and return the attribute changes.

    Only supplied fields are checked.  The rating is always part of the
    result, computed from the merged speed, isUsed and prodDate.  *ship* is
    not modified.
    """
    changes: dict[str, Any] = {}
    if data.name is not None:
        changes["name"] = check_name(data.name)
    if data.planet is not None:
        changes["planet"] = check_planet(data.planet)
    if data.speed is not None:
        changes["speed"] = check_speed(data.speed)
    if data.crew_size is not None:
        changes["crew_size"] = check_crew_size(data.crew_size)
    if data.prod_date is not None:
        changes["prod_date"] = check_prod_date(data.prod_date)
    if data.ship_type is not None:
        changes["ship_type"] = check_ship_type(data.ship_type)
    if data.is_used is not None:
        changes["is_used"] = data.is_used

    speed = changes.get("speed", ship.speed)
    is_used = changes.get("is_used", ship.is_used)
    prod_date = changes.get("prod_date", ship.prod_date)
    changes["rating"] = compute_rating(speed, is_used, prod_date.year)
    return changes
