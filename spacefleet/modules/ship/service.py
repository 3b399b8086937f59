"""ShipService — listing, lookup and CRUD orchestration for the ship registry."""

from __future__ import annotations

import enum
import logging
from collections.abc import Mapping

from spacefleet.exceptions import NotFoundException
from spacefleet.models.ship import Ship
from spacefleet.modules.ship.filters import build_ship_query
from spacefleet.modules.ship.repository import ShipRepository
from spacefleet.modules.ship.schemas import ShipCreate, ShipUpdate
from spacefleet.modules.ship.validation import (
    check_ship_id,
    validate_create,
    validate_update,
)

logger = logging.getLogger(__name__)


class DeleteOutcome(str, enum.Enum):
    DELETED = "DELETED"
    NOT_FOUND = "NOT_FOUND"


class ShipService:
    def __init__(self, repository: ShipRepository) -> None:
        self.repository = repository

    async def list_ships(self, params: Mapping[str, str]) -> tuple[list[Ship], int]:
        query = build_ship_query(params)
        return await self.repository.find_page(query.criteria, query.page)

    async def count_ships(self, params: Mapping[str, str]) -> int:
        query = build_ship_query(params)
        return await self.repository.count(query.criteria)

    async def get_ship(self, ship_id: int) -> Ship:
        check_ship_id(ship_id)
        ship = await self.repository.find_by_id(ship_id)
        if ship is None:
            raise NotFoundException(f"Ship {ship_id} not found")
        return ship

    async def create_ship(self, data: ShipCreate) -> Ship:
        ship = await self.repository.save(Ship(**validate_create(data)))
        logger.info("Created ship %s (%s), rating %s", ship.id, ship.name, ship.rating)
        return ship

    async def update_ship(self, ship_id: int, data: ShipUpdate) -> Ship:
        ship = await self.get_ship(ship_id)
        # Validate everything before touching the record
        changes = validate_update(ship, data)
        for field_name, field_value in changes.items():
            setattr(ship, field_name, field_value)
        ship = await self.repository.save(ship)
        logger.info("Updated ship %s, rating %s", ship.id, ship.rating)
        return ship

    async def delete_ship(self, ship_id: int) -> DeleteOutcome:
        """Delete a ship; a missing id is reported as ``NOT_FOUND``, not raised."""
        check_ship_id(ship_id)
        if not await self.repository.exists_by_id(ship_id):
            return DeleteOutcome.NOT_FOUND
        await self.repository.delete_by_id(ship_id)
        logger.info("Deleted ship %s", ship_id)
        return DeleteOutcome.DELETED
