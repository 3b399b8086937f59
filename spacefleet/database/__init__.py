from spacefleet.database.base import Base
from spacefleet.database.engine import async_session, create_schema, engine
from spacefleet.database.session import get_db

__all__ = [
    "Base",
    "async_session",
    "create_schema",
    "engine",
    "get_db",
]
