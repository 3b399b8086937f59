"""Ship listing filters — query parameters to criteria and a page spec.

:func:`build_ship_query` is a pure translation: it reads the optional filter
keys, turns each one into a criterion and collects the paging parameters.
The repository combines the criteria with AND.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation

from sqlalchemy import ColumnElement, and_, true

from spacefleet.exceptions import BadRequestException
from spacefleet.models.enums import ShipType
from spacefleet.models.ship import Ship
from spacefleet.modules.ship.constants import (
    DEFAULT_ORDER,
    DEFAULT_PAGE_NUMBER,
    DEFAULT_PAGE_SIZE,
    INT_PARAM_MAX,
    INT_PARAM_MIN,
    ORDER_FIELDS,
    TIMESTAMP_PARAM_MAX,
    TIMESTAMP_PARAM_MIN,
)
from spacefleet.modules.ship.timestamps import (
    first_date_at_or_after,
    last_date_at_or_before,
)


def _range_clause(column, minimum, maximum) -> ColumnElement[bool]:
    bounds = []
    if minimum is not None:
        bounds.append(column >= minimum)
    if maximum is not None:
        bounds.append(column <= maximum)
    return and_(true(), *bounds)


# ---------------------------------------------------------------------------
# Criteria
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NameContains:
    value: str

    def clause(self) -> ColumnElement[bool]:
        return Ship.name.contains(self.value, autoescape=True)


@dataclass(frozen=True)
class PlanetContains:
    value: str

    def clause(self) -> ColumnElement[bool]:
        return Ship.planet.contains(self.value, autoescape=True)


@dataclass(frozen=True)
class ShipTypeIs:
    value: ShipType

    def clause(self) -> ColumnElement[bool]:
        return Ship.ship_type == self.value


@dataclass(frozen=True)
class UsedIs:
    value: bool

    def clause(self) -> ColumnElement[bool]:
        return Ship.is_used == self.value


@dataclass(frozen=True)
class CrewSizeRange:
    minimum: int | None = None
    maximum: int | None = None

    def clause(self) -> ColumnElement[bool]:
        return _range_clause(Ship.crew_size, self.minimum, self.maximum)


@dataclass(frozen=True)
class SpeedRange:
    minimum: Decimal | None = None
    maximum: Decimal | None = None

    def clause(self) -> ColumnElement[bool]:
        return _range_clause(Ship.speed, self.minimum, self.maximum)


@dataclass(frozen=True)
class RatingRange:
    minimum: Decimal | None = None
    maximum: Decimal | None = None

    def clause(self) -> ColumnElement[bool]:
        return _range_clause(Ship.rating, self.minimum, self.maximum)


@dataclass(frozen=True)
class ProdDateRange:
    after: date | None = None
    before: date | None = None

    def clause(self) -> ColumnElement[bool]:
        return _range_clause(Ship.prod_date, self.after, self.before)


Criterion = (
    NameContains
    | PlanetContains
    | ShipTypeIs
    | UsedIs
    | CrewSizeRange
    | SpeedRange
    | RatingRange
    | ProdDateRange
)


@dataclass(frozen=True)
class PageSpec:
    page_number: int = DEFAULT_PAGE_NUMBER
    page_size: int = DEFAULT_PAGE_SIZE
    order: str = DEFAULT_ORDER

    @property
    def offset(self) -> int:
        return self.page_number * self.page_size


@dataclass(frozen=True)
class ShipQuery:
    criteria: tuple[Criterion, ...]
    page: PageSpec


# ---------------------------------------------------------------------------
# Parameter parsing
# ---------------------------------------------------------------------------


def _bad_param(key: str, value: str, expected: str) -> BadRequestException:
    return BadRequestException(
        f"Invalid value for '{key}': {value!r}",
        details=[{"field": key, "message": f"Expected {expected}"}],
    )


_INTEGER = re.compile(r"[+-]?[0-9]+")


def _int_param(
    params: Mapping[str, str],
    key: str,
    minimum: int = INT_PARAM_MIN,
    maximum: int = INT_PARAM_MAX,
) -> int | None:
    """Parse an optional ASCII decimal integer within [*minimum*, *maximum*]."""
    raw = params.get(key)
    if raw is None:
        return None
    if not _INTEGER.fullmatch(raw):
        raise _bad_param(key, raw, "an integer")
    value = int(raw)
    if not minimum <= value <= maximum:
        raise _bad_param(key, raw, f"an integer between {minimum} and {maximum}")
    return value


def _decimal_param(params: Mapping[str, str], key: str) -> Decimal | None:
    raw = params.get(key)
    if raw is None:
        return None
    try:
        value = Decimal(raw)
    except InvalidOperation:
        raise _bad_param(key, raw, "a number") from None
    if not value.is_finite():
        raise _bad_param(key, raw, "a finite number")
    return value


def _bool_param(params: Mapping[str, str], key: str) -> bool | None:
    raw = params.get(key)
    if raw is None:
        return None
    lowered = raw.lower()
    if lowered not in ("true", "false"):
        raise _bad_param(key, raw, "'true' or 'false'")
    return lowered == "true"


def _date_bound(params: Mapping[str, str], key: str, convert) -> date | None:
    millis = _int_param(params, key, TIMESTAMP_PARAM_MIN, TIMESTAMP_PARAM_MAX)
    if millis is None:
        return None
    try:
        return convert(millis)
    except OverflowError:
        raise _bad_param(key, params[key], "an epoch-millisecond timestamp") from None


def _page_spec(params: Mapping[str, str]) -> PageSpec:
    page_number = _int_param(params, "pageNumber")
    page_size = _int_param(params, "pageSize")
    order = params.get("order", DEFAULT_ORDER)

    if page_number is None:
        page_number = DEFAULT_PAGE_NUMBER
    elif page_number < 0:
        raise _bad_param("pageNumber", params["pageNumber"], "a non-negative integer")
    if page_size is None:
        page_size = DEFAULT_PAGE_SIZE
    elif page_size < 1:
        raise _bad_param("pageSize", params["pageSize"], "a positive integer")

    attribute = ORDER_FIELDS.get(order.lower())
    if attribute is None:
        raise _bad_param("order", order, "a ship field name")

    return PageSpec(page_number=page_number, page_size=page_size, order=attribute)


def build_ship_query(params: Mapping[str, str]) -> ShipQuery:
    """Translate listing query parameters into criteria and a page spec.

    Absent keys impose no constraint; unknown keys are ignored.  Raises
    :class:`BadRequestException` for unparseable numbers, booleans and
    timestamps, unknown ship types and bad paging values.
    """
    criteria: list[Criterion] = []

    if "name" in params:
        criteria.append(NameContains(params["name"]))
    if "planet" in params:
        criteria.append(PlanetContains(params["planet"]))
    if "shipType" in params:
        raw_type = params["shipType"]
        try:
            criteria.append(ShipTypeIs(ShipType[raw_type]))
        except KeyError:
            raise _bad_param("shipType", raw_type, "one of " + ", ".join(ShipType.__members__)) from None

    is_used = _bool_param(params, "isUsed")
    if is_used is not None:
        criteria.append(UsedIs(is_used))

    min_crew, max_crew = _int_param(params, "minCrewSize"), _int_param(params, "maxCrewSize")
    if min_crew is not None or max_crew is not None:
        criteria.append(CrewSizeRange(min_crew, max_crew))

    min_speed, max_speed = _decimal_param(params, "minSpeed"), _decimal_param(params, "maxSpeed")
    if min_speed is not None or max_speed is not None:
        criteria.append(SpeedRange(min_speed, max_speed))

    min_rating, max_rating = _decimal_param(params, "minRating"), _decimal_param(params, "maxRating")
    if min_rating is not None or max_rating is not None:
        criteria.append(RatingRange(min_rating, max_rating))

    after = _date_bound(params, "after", first_date_at_or_after)
    before = _date_bound(params, "before", last_date_at_or_before)
    if after is not None or before is not None:
        criteria.append(ProdDateRange(after, before))

    return ShipQuery(criteria=tuple(criteria), page=_page_spec(params))
