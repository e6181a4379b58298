"""Repository protocol for device persistence operations."""

from __future__ import annotations

from typing import Protocol

from .models import Device, DeviceFilter, DevicePage, PageRequest


class DeviceRepository(Protocol):
    async def create(self, device: Device) -> Device:
        ...

    async def find_by_id(self, device_id: int) -> Device | None:
        ...

    async def find_page(self, device_filter: DeviceFilter, page: PageRequest) -> DevicePage:
        ...

    async def save(self, device: Device) -> Device:
        ...

    async def delete(self, device: Device) -> None:
        ...
