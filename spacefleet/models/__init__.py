# Import all models so SQLAlchemy metadata is populated for create_all
from spacefleet.models.enums import ShipType
from spacefleet.models.ship import Ship

__all__ = [
    "Ship",
    "ShipType",
]
