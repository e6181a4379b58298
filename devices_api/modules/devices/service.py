"""Domain service orchestrating device related workflows."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from .exceptions import DeviceLockedError, DeviceNotFoundError
from .lifecycle import Rejected, validate_delete, validate_update
from .merge import apply_change_set
from .models import (
    Device,
    DeviceChangeSet,
    DeviceFilter,
    DevicePage,
    DeviceState,
    PageRequest,
    SortSpec,
)
from .repository import DeviceRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DeviceService:
    repository: DeviceRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "DeviceService":
        # deferred: the SQL repository imports this package
        from devices_api.infrastructure.database.repositories import SqlDeviceRepository

        return cls(SqlDeviceRepository(session))

    async def create_device(self, *, name: str, brand: str) -> Device:
        device = await self.repository.create(Device(id=None, name=name, brand=brand))
        logger.info("Device created with id: %s", device.id)
        return device

    async def get_device(self, device_id: int) -> Device:
        logger.info("Fetching device with id: %s", device_id)
        return await self._load(device_id)

    async def list_devices(
        self,
        *,
        brand: Optional[str] = None,
        state: Optional[DeviceState] = None,
        page: int = 0,
        size: int = 10,
        sort: Optional[str] = None,
    ) -> DevicePage:
        device_filter = DeviceFilter.of(brand=brand, state=state)
        page_request = PageRequest(page=page, size=size, sort=SortSpec.parse(sort))
        logger.info(
            "Fetching devices filter=%s page=%s size=%s sort=%s",
            device_filter,
            page,
            size,
            sort,
        )
        return await self.repository.find_page(device_filter, page_request)

    async def update_device(self, device_id: int, change_set: DeviceChangeSet) -> Device:
        logger.info("Update for device id: %s", device_id)
        current = await self._load(device_id)
        if change_set.is_empty():
            logger.info("No fields supplied for device %s, nothing to update", device_id)
            return current

        decision = validate_update(current, change_set)
        if isinstance(decision, Rejected):
            logger.info("Update rejected for device %s: %s", device_id, decision.reason)
            raise DeviceLockedError(decision)

        updated = await self.repository.save(apply_change_set(current, change_set))
        logger.info("Device partially updated: %s", updated.id)
        return updated

    async def delete_device(self, device_id: int) -> None:
        logger.info("Deleting device with id: %s", device_id)
        current = await self._load(device_id)

        decision = validate_delete(current)
        if isinstance(decision, Rejected):
            logger.info("Delete rejected for device %s: %s", device_id, decision.reason)
            raise DeviceLockedError(decision)

        await self.repository.delete(current)

    async def _load(self, device_id: int) -> Device:
        device = await self.repository.find_by_id(device_id)
        if device is None:
            raise DeviceNotFoundError(device_id)
        return device
