"""ShipRepository — persistence operations for ships on an AsyncSession."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from spacefleet.models.ship import Ship
from spacefleet.modules.ship.filters import Criterion, PageSpec


class ShipRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def count(self, criteria: Sequence[Criterion]) -> int:
        count_query = (
            select(func.count())
            .select_from(Ship)
            .where(*(criterion.clause() for criterion in criteria))
        )
        result = await self.session.execute(count_query)
        return result.scalar_one()

    async def find_page(
        self, criteria: Sequence[Criterion], page: PageSpec,
    ) -> tuple[list[Ship], int]:
        """Return one page of ships matching every criterion, plus the total match count."""
        total = await self.count(criteria)

        order_by = [getattr(Ship, page.order).asc()]
        if page.order != "id":
            order_by.append(Ship.id.asc())

        query = (
            select(Ship)
            .where(*(criterion.clause() for criterion in criteria))
            .order_by(*order_by)
            .offset(page.offset)
            .limit(page.page_size)
        )
        result = await self.session.execute(query)
        ships = list(result.scalars().all())

        return ships, total

    async def find_by_id(self, ship_id: int) -> Ship | None:
        result = await self.session.execute(
            select(Ship).where(Ship.id == ship_id)
        )
        return result.scalar_one_or_none()

    async def exists_by_id(self, ship_id: int) -> bool:
        result = await self.session.execute(
            select(Ship.id).where(Ship.id == ship_id)
        )
        return result.scalar_one_or_none() is not None

    async def save(self, ship: Ship) -> Ship:
        self.session.add(ship)
        await self.session.flush()
        return ship

    async def delete_by_id(self, ship_id: int) -> None:
        await self.session.execute(delete(Ship).where(Ship.id == ship_id))
        await self.session.flush()
