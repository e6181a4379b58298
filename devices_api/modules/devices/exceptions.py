"""Device domain specific exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .lifecycle import Rejected


class DeviceError(Exception):
    """Base class for device related domain errors."""


class DeviceNotFoundError(DeviceError):
    """Raised when the requested device could not be found."""

    def __init__(self, device_id: int) -> None:
        super().__init__(f"Device not found with id: {device_id}")
        self.device_id = device_id


class DeviceLockedError(DeviceError):
    """Raised when the lifecycle rules reject an update or delete."""

    def __init__(self, rejection: "Rejected") -> None:
        super().__init__(rejection.reason)
        self.rejection = rejection

    @property
    def field(self) -> Optional[str]:
        return self.rejection.field


class DeviceConflictError(DeviceError):
    """Raised when the device was modified concurrently since it was read."""

    def __init__(self, device_id: Optional[int]) -> None:
        super().__init__(f"Device with id {device_id} was modified concurrently, retry the request")
        self.device_id = device_id


class InvalidSortError(DeviceError, ValueError):
    """Raised when listing is asked to sort on an unsupported field."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Unsupported sort field: {field}")
        self.field = field
