"""Lifecycle rules deciding which device mutations are legal.

Both checks are pure: they only look at the current device and the requested
change, never at the store, and they report their verdict as a value instead
of raising. Callers decide what a rejection means for them.

While a device is ``IN_USE`` its ``name`` and ``brand`` are locked. Sending the
value the device already has is not a change and is always allowed; the
comparison is exact (case-sensitive, no trimming). ``state`` is never locked.
A device that is ``IN_USE`` cannot be deleted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from .models import Device, DeviceChangeSet, DeviceState, UNSET

LOCKED_FIELDS = ("name", "brand")


@dataclass(frozen=True, slots=True)
class Allowed:
    pass


@dataclass(frozen=True, slots=True)
class Rejected:
    field: Optional[str]
    reason: str


ALLOWED = Allowed()

Decision = Union[Allowed, Rejected]


def validate_update(current: Device, change_set: DeviceChangeSet) -> Decision:
    if current.state is not DeviceState.IN_USE:
        return ALLOWED

    # name is checked before brand so the reported violation is stable
    for field in LOCKED_FIELDS:
        proposed = getattr(change_set, field)
        if proposed is UNSET:
            continue
        if proposed != getattr(current, field):
            return Rejected(
                field=field,
                reason=f"Cannot update {field} of a device that is {DeviceState.IN_USE.value}",
            )
    return ALLOWED


def validate_delete(current: Device) -> Decision:
    if current.state is DeviceState.IN_USE:
        return Rejected(
            field=None,
            reason=f"Device with id {current.id} is currently in use and cannot be deleted",
        )
    return ALLOWED
