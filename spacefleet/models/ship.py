"""Ship model — the registry's single entity."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import BigInteger, Boolean, Date, Integer, Numeric, String
from sqlalchemy import Enum as SQLAlchemyEnum
from sqlalchemy.orm import Mapped, mapped_column

from spacefleet.database.base import Base
from spacefleet.models.enums import ShipType


class Ship(Base):
    __tablename__ = "ship"

    # SQLite only autoincrements INTEGER PRIMARY KEY columns
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    planet: Mapped[str] = mapped_column(String(50), nullable=False)
    ship_type: Mapped[ShipType] = mapped_column(
        SQLAlchemyEnum(ShipType, name="shiptype"),
        nullable=False,
    )
    prod_date: Mapped[date] = mapped_column(Date, nullable=False)
    is_used: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    speed: Mapped[Decimal] = mapped_column(Numeric(4, 2), nullable=False)
    crew_size: Mapped[int] = mapped_column(Integer, nullable=False)
    rating: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    def __repr__(self) -> str:
        return f"<Ship id={self.id} name={self.name!r}>"
