"""Ship registry API router."""

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from spacefleet.config import settings
from spacefleet.database.session import get_db
from spacefleet.exceptions import NotFoundException
from spacefleet.middleware.rate_limit import limiter
from spacefleet.middleware.request_id import get_request_id
from spacefleet.modules.ship.repository import ShipRepository
from spacefleet.modules.ship.schemas import (
    DeleteResponse,
    ShipCreate,
    ShipResponse,
    ShipUpdate,
)
from spacefleet.modules.ship.service import DeleteOutcome, ShipService
from spacefleet.schemas.responses import ErrorResponse, error_response

router = APIRouter(prefix="/ships", tags=["ships"])

_ERRORS = {400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}


def get_ship_service(session: AsyncSession = Depends(get_db)) -> ShipService:
    return ShipService(ShipRepository(session))


# ---------------------------------------------------------------------------
# Listing (filters are read from the raw query string)
# ---------------------------------------------------------------------------


@router.get("", response_model=list[ShipResponse], responses=_ERRORS)
@limiter.limit(settings.rate_limit)
async def list_ships(
    request: Request,
    response: Response,
    service: ShipService = Depends(get_ship_service),
):
    ships, total = await service.list_ships(dict(request.query_params))
    response.headers["X-Total-Count"] = str(total)
    return ships


@router.get("/count", response_model=int, responses=_ERRORS)
@limiter.limit(settings.rate_limit)
async def count_ships(
    request: Request,
    service: ShipService = Depends(get_ship_service),
):
    return await service.count_ships(dict(request.query_params))


# ---------------------------------------------------------------------------
# CRUD routes
# ---------------------------------------------------------------------------


@router.post("", response_model=ShipResponse, responses=_ERRORS)
@limiter.limit(settings.rate_limit)
async def create_ship(
    request: Request,
    body: ShipCreate,
    service: ShipService = Depends(get_ship_service),
):
    return await service.create_ship(body)


@router.get("/{ship_id}", response_model=ShipResponse, responses=_ERRORS)
@limiter.limit(settings.rate_limit)
async def get_ship(
    request: Request,
    ship_id: int,
    service: ShipService = Depends(get_ship_service),
):
    return await service.get_ship(ship_id)


@router.post("/{ship_id}", response_model=ShipResponse, responses=_ERRORS)
@limiter.limit(settings.rate_limit)
async def update_ship(
    request: Request,
    ship_id: int,
    body: ShipUpdate,
    service: ShipService = Depends(get_ship_service),
):
    return await service.update_ship(ship_id, body)


@router.delete("/{ship_id}", response_model=DeleteResponse, responses=_ERRORS)
@limiter.limit(settings.rate_limit)
async def delete_ship(
    request: Request,
    ship_id: int,
    service: ShipService = Depends(get_ship_service),
):
    outcome = await service.delete_ship(ship_id)
    if outcome is DeleteOutcome.NOT_FOUND:
        return error_response(
            status_code=NotFoundException.status_code,
            code=NotFoundException.code,
            message=f"Ship {ship_id} not found",
            request_id=get_request_id(request),
        )
    return DeleteResponse(status="Ok")
