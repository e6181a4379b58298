"""Apply a partial change-set onto a device."""

from __future__ import annotations

from dataclasses import replace

from .models import Device, DeviceChangeSet


def apply_change_set(current: Device, change_set: DeviceChangeSet) -> Device:
    """Return a copy of ``current`` with every provided field overwritten.

    No lifecycle checks happen here; run ``validate_update`` first.
    """
    return replace(current, **change_set.changes())
