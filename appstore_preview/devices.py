"""
App Store device screenshot sizes.

These match Apple's App Store preview requirements. Catalog order is the
default capture order.
"""
from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from .models import DeviceSpec


class UnknownDeviceError(KeyError, ValueError):
    """Raised when a device label is not in the catalog."""

    def __init__(self, label: str):
        super().__init__(label)
        self.label = label

    def __str__(self) -> str:
        known = ", ".join(APP_STORE_DEVICES)
        return f"Unknown device {self.label!r} (known: {known})"


APP_STORE_DEVICES: Dict[str, DeviceSpec] = {
    spec.label: spec
    for spec in (
        # iPhone sizes
        DeviceSpec(label='iPhone 6.7"', pixel_width=1290, pixel_height=2796, file_token="iPhone_6.7_inch"),
        DeviceSpec(label='iPhone 6.5"', pixel_width=1242, pixel_height=2688, file_token="iPhone_6.5_inch"),
        DeviceSpec(label='iPhone 5.5"', pixel_width=1242, pixel_height=2208, file_token="iPhone_5.5_inch"),
        # iPad sizes
        DeviceSpec(label='iPad Pro 12.9"', pixel_width=2048, pixel_height=2732, file_token="iPad_Pro_12.9_inch"),
        DeviceSpec(label='iPad Pro 11"', pixel_width=1668, pixel_height=2388, file_token="iPad_Pro_11_inch"),
    )
}


def device_labels() -> List[str]:
    """All catalog labels in catalog order."""
    return list(APP_STORE_DEVICES)


def get_device(label: str) -> DeviceSpec:
    """Look up a device by label."""
    try:
        return APP_STORE_DEVICES[label]
    except KeyError:
        raise UnknownDeviceError(label) from None


def resolve_devices(labels: Optional[Iterable[str]] = None) -> List[DeviceSpec]:
    """
    Turn a label selection into device specs.

    Args:
        labels: Labels in the desired order. None selects the whole catalog;
            an empty sequence selects nothing.

    Returns:
        DeviceSpec list in the requested order

    Raises:
        UnknownDeviceError: If any label is not in the catalog
    """
    if labels is None:
        return list(APP_STORE_DEVICES.values())
    return [get_device(label) for label in labels]
