"""Device domain: models, lifecycle rules and the service using them."""

from .exceptions import (
    DeviceConflictError,
    DeviceError,
    DeviceLockedError,
    DeviceNotFoundError,
    InvalidSortError,
)
from .models import (
    STATE_DESCRIPTIONS,
    UNSET,
    Device,
    DeviceChangeSet,
    DeviceFilter,
    DevicePage,
    DeviceState,
    PageRequest,
    SortSpec,
    describe_state,
)
from .lifecycle import ALLOWED, Allowed, Decision, Rejected, validate_delete, validate_update
from .merge import apply_change_set
from .service import DeviceService

__all__ = [
    "ALLOWED",
    "Allowed",
    "Decision",
    "Device",
    "DeviceChangeSet",
    "DeviceConflictError",
    "DeviceError",
    "DeviceFilter",
    "DeviceLockedError",
    "DeviceNotFoundError",
    "DevicePage",
    "DeviceService",
    "DeviceState",
    "InvalidSortError",
    "PageRequest",
    "Rejected",
    "STATE_DESCRIPTIONS",
    "SortSpec",
    "UNSET",
    "apply_change_set",
    "describe_state",
    "validate_delete",
    "validate_update",
]
