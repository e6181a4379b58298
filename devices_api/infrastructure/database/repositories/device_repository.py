"""SQLAlchemy powered repository for device persistence."""

from __future__ import annotations

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from devices_api.infrastructure.database.models import Device as DeviceModel
from devices_api.modules.common import AsyncRepository
from devices_api.modules.devices.exceptions import DeviceConflictError, DeviceNotFoundError
from devices_api.modules.devices.models import Device, DeviceFilter, DevicePage, PageRequest


class SqlDeviceRepository(AsyncRepository[DeviceModel]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def create(self, device: Device) -> Device:
        model = DeviceModel(
            name=device.name,
            brand=device.brand,
            state=device.state.value,
        )
        await self.add(model)
        return Device.from_orm(model)

    async def find_by_id(self, device_id: int) -> Device | None:
        model = await self._fetch_model(device_id)
        return Device.from_orm(model) if model else None

    async def find_page(self, device_filter: DeviceFilter, page: PageRequest) -> DevicePage:
        query = self._apply_filter(select(DeviceModel), device_filter)
        count_query = self._apply_filter(select(func.count(DeviceModel.id)), device_filter)

        column = getattr(DeviceModel, page.sort.field)
        ordering = [column.desc() if page.sort.descending else column.asc()]
        if page.sort.field != "id":
            ordering.append(DeviceModel.id.asc())
        query = query.order_by(*ordering).offset(page.offset).limit(page.size)

        result = await self.session.execute(query)
        devices = [Device.from_orm(model) for model in result.scalars().all()]
        total = (await self.session.execute(count_query)).scalar() or 0
        return DevicePage(content=devices, total_elements=int(total), page=page.page, size=page.size)

    async def save(self, device: Device) -> Device:
        model = await self._require_model(device)
        model.name = device.name
        model.brand = device.brand
        model.state = device.state.value
        try:
            await self.session.flush()
        except StaleDataError as exc:
            raise DeviceConflictError(device.id) from exc
        return Device.from_orm(model)

    async def delete(self, device: Device) -> None:
        model = await self._require_model(device)
        try:
            await self.remove(model)
        except StaleDataError as exc:
            raise DeviceConflictError(device.id) from exc

    async def _require_model(self, device: Device) -> DeviceModel:
        if device.id is None:
            raise ValueError("Device has not been persisted yet")
        model = await self._fetch_model(device.id)
        if model is None:
            raise DeviceNotFoundError(device.id)
        return model

    async def _fetch_model(self, device_id: int) -> DeviceModel | None:
        stmt = select(DeviceModel).where(DeviceModel.id == device_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _apply_filter(query: Select, device_filter: DeviceFilter) -> Select:
        if device_filter.is_unfiltered:
            return query
        if device_filter.brand is not None:
            return query.where(DeviceModel.brand == device_filter.brand)
        return query.where(DeviceModel.state == device_filter.state.value)
