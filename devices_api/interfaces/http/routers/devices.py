"""Device inventory endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from devices_api.core.config import Settings
from devices_api.interfaces.http.deps import get_app_settings, get_db_session
from devices_api.modules.devices import (
    DeviceChangeSet,
    DeviceConflictError,
    DeviceLockedError,
    DeviceNotFoundError,
    DeviceService,
    DeviceState,
    InvalidSortError,
    describe_state,
)
from devices_api.schemas import (
    DeviceCreateRequest,
    DevicePageResponse,
    DeviceResponse,
    DeviceUpdateRequest,
    ErrorResponse,
)

router = APIRouter()

_STATE_HELP = "; ".join(f"{state.value}: {describe_state(state)}" for state in DeviceState)

_NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse, "description": "Device not found"}}
_CONFLICT = {status.HTTP_409_CONFLICT: {"model": ErrorResponse, "description": "Concurrent modification"}}


def _to_schema(device) -> DeviceResponse:
    return DeviceResponse.model_validate(device)


@router.post(
    "",
    response_model=DeviceResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new device",
    responses={status.HTTP_400_BAD_REQUEST: {"description": "Invalid input data"}},
)
async def create_device(payload: DeviceCreateRequest, db: AsyncSession = Depends(get_db_session)):
    service = DeviceService.with_session(db)
    device = await service.create_device(name=payload.name, brand=payload.brand)
    await db.commit()
    return _to_schema(device)


@router.get(
    "",
    response_model=DevicePageResponse,
    summary="Get all devices",
    description="Lists devices, optionally filtered by brand or, when no brand is given, by state.",
)
async def list_devices(
    brand: Optional[str] = Query(None, description="Exact brand match; takes precedence over state"),
    state: Optional[DeviceState] = Query(None, description=_STATE_HELP),
    page: int = Query(0, ge=0, description="Zero-based page index"),
    size: Optional[int] = Query(None, ge=1, description="Page size"),
    sort: Optional[str] = Query(None, description="field[,asc|desc], defaults to id ascending"),
    db: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_app_settings),
):
    page_size = min(size or settings.pagination.default_size, settings.pagination.max_size)
    service = DeviceService.with_session(db)
    try:
        result = await service.list_devices(brand=brand, state=state, page=page, size=page_size, sort=sort)
    except InvalidSortError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return DevicePageResponse.from_page(result)


@router.get(
    "/{device_id}",
    response_model=DeviceResponse,
    summary="Get a device by ID",
    responses=_NOT_FOUND,
)
async def get_device(
    device_id: int = Path(..., description="Device ID"),
    db: AsyncSession = Depends(get_db_session),
):
    service = DeviceService.with_session(db)
    try:
        device = await service.get_device(device_id)
    except DeviceNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return _to_schema(device)


@router.patch(
    "/{device_id}",
    response_model=DeviceResponse,
    summary="Update of device",
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse, "description": "Invalid update"},
        **_NOT_FOUND,
        **_CONFLICT,
    },
)
async def update_device(
    payload: DeviceUpdateRequest,
    device_id: int = Path(..., description="Device ID"),
    db: AsyncSession = Depends(get_db_session),
):
    change_set = DeviceChangeSet.from_mapping(payload.model_dump(exclude_unset=True))
    service = DeviceService.with_session(db)
    try:
        device = await service.update_device(device_id, change_set)
    except DeviceNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except DeviceLockedError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except DeviceConflictError as exc:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc

    await db.commit()
    return _to_schema(device)


@router.delete(
    "/{device_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a device",
    description="Deletes a device by its ID (cannot delete IN_USE devices)",
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse, "description": "Cannot delete IN_USE device"},
        **_NOT_FOUND,
        **_CONFLICT,
    },
)
async def delete_device(
    device_id: int = Path(..., description="Device ID"),
    db: AsyncSession = Depends(get_db_session),
):
    service = DeviceService.with_session(db)
    try:
        await service.delete_device(device_id)
    except DeviceNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except DeviceLockedError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except DeviceConflictError as exc:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc

    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
