"""Pydantic schemas used across the project."""
from datetime import datetime
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from devices_api.modules.devices import DevicePage, DeviceState


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


NonBlankStr = Annotated[str, AfterValidator(_not_blank), Field(max_length=255)]


class DeviceCreateRequest(CamelModel):
    name: NonBlankStr = Field(..., description="Name is required")
    brand: NonBlankStr = Field(..., description="Brand is required")


class DeviceUpdateRequest(CamelModel):
    """Partial update; only keys present in the body are applied."""

    name: Optional[NonBlankStr] = None
    brand: Optional[NonBlankStr] = None
    state: Optional[DeviceState] = None

    @field_validator("name", "brand", "state", mode="before")
    @classmethod
    def reject_null(cls, value):
        # only runs for keys the client sent; absent keys keep the default
        if value is None:
            raise ValueError("must not be null, omit the field to leave it unchanged")
        return value


class DeviceResponse(CamelModel):
    id: int
    name: str
    brand: str
    state: DeviceState
    creation_time: datetime

    model_config = ConfigDict(from_attributes=True)


class DevicePageResponse(CamelModel):
    content: list[DeviceResponse]
    total_elements: int
    total_pages: int
    number: int
    size: int

    @classmethod
    def from_page(cls, page: DevicePage) -> "DevicePageResponse":
        return cls(
            content=[DeviceResponse.model_validate(device) for device in page.content],
            total_elements=page.total_elements,
            total_pages=page.total_pages,
            number=page.page,
            size=page.size,
        )


class ErrorResponse(BaseModel):
    detail: str
