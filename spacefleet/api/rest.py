"""Centralized REST router — all module routers are included here."""

from fastapi import APIRouter

from spacefleet.modules.ship.router import router as ship_router

rest_router = APIRouter(prefix="/rest")
rest_router.include_router(ship_router)
