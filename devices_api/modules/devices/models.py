"""Device domain models."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Optional

from devices_api.infrastructure.database import models as orm

from .exceptions import InvalidSortError


class DeviceState(str, Enum):
    AVAILABLE = "AVAILABLE"
    IN_USE = "IN_USE"
    INACTIVE = "INACTIVE"


STATE_DESCRIPTIONS: dict[DeviceState, str] = {
    DeviceState.AVAILABLE: "Device is ready to use",
    DeviceState.IN_USE: "Device is currently being used",
    DeviceState.INACTIVE: "Device is not available",
}


def describe_state(state: DeviceState) -> str:
    return STATE_DESCRIPTIONS[state]


@dataclass(slots=True)
class Device:
    id: Optional[int]
    name: str
    brand: str
    state: DeviceState = DeviceState.AVAILABLE
    creation_time: Optional[datetime] = None

    @classmethod
    def from_orm(cls, instance: orm.Device) -> "Device":
        return cls(
            id=instance.id,
            name=instance.name,
            brand=instance.brand,
            state=DeviceState(instance.state),
            creation_time=instance.creation_time,
        )


# Sentinel used to differentiate between "not provided" and an explicit value.
UNSET = object()

CHANGE_SET_FIELDS = ("name", "brand", "state")


@dataclass(frozen=True, slots=True)
class DeviceChangeSet:
    """Fields a partial update explicitly supplies.

    Every field defaults to ``UNSET``; only fields holding something else are
    part of the change. ``None`` is a value like any other here, callers that
    cannot tell "absent" from "null" must leave the field ``UNSET``.
    """

    name: str | object = UNSET
    brand: str | object = UNSET
    state: DeviceState | object = UNSET

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "DeviceChangeSet":
        return cls(**{key: data[key] for key in CHANGE_SET_FIELDS if key in data})

    def changes(self) -> dict[str, Any]:
        """Provided fields, in name, brand, state order."""
        provided = {}
        for key in CHANGE_SET_FIELDS:
            value = getattr(self, key)
            if value is not UNSET:
                provided[key] = value
        return provided

    def is_empty(self) -> bool:
        return not self.changes()


@dataclass(frozen=True, slots=True)
class DeviceFilter:
    """Listing filter with at most one active dimension."""

    brand: Optional[str] = None
    state: Optional[DeviceState] = None

    def __post_init__(self) -> None:
        if self.brand is not None and self.state is not None:
            raise ValueError("DeviceFilter accepts either brand or state, not both")

    @classmethod
    def of(cls, *, brand: Optional[str] = None, state: Optional[DeviceState] = None) -> "DeviceFilter":
        if brand is not None:
            return cls(brand=brand)
        if state is not None:
            return cls(state=state)
        return cls()

    @property
    def is_unfiltered(self) -> bool:
        return self.brand is None and self.state is None


SORTABLE_FIELDS: dict[str, str] = {
    "id": "id",
    "name": "name",
    "brand": "brand",
    "state": "state",
    "creationTime": "creation_time",
    "creation_time": "creation_time",
}

DEFAULT_SORT_FIELD = "id"


@dataclass(frozen=True, slots=True)
class SortSpec:
    field: str = DEFAULT_SORT_FIELD
    descending: bool = False

    @classmethod
    def parse(cls, raw: Optional[str]) -> "SortSpec":
        """Parse ``field[,direction]``; only ``desc`` (any case) sorts descending."""
        if raw is None or not raw.strip():
            return cls()

        parts = raw.split(",")
        name = parts[0].strip() or DEFAULT_SORT_FIELD
        direction = parts[1] if len(parts) > 1 else ""
        column = SORTABLE_FIELDS.get(name)
        if column is None:
            raise InvalidSortError(name)
        return cls(field=column, descending=direction.strip().lower() == "desc")


@dataclass(frozen=True, slots=True)
class PageRequest:
    page: int = 0
    size: int = 10
    sort: SortSpec = field(default_factory=SortSpec)

    def __post_init__(self) -> None:
        if self.page < 0:
            raise ValueError("page index must not be negative")
        if self.size < 1:
            raise ValueError("page size must be at least 1")

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass(slots=True)
class DevicePage:
    """One page of a device listing."""

    content: list[Device]
    total_elements: int
    page: int
    size: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_elements / self.size) if self.size else 0
