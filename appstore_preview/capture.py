"""
Device-matrix screenshot capture.

Every device gets its own browsing context rendered at a fixed 3x scale
factor, so the PNG raster always equals the catalog resolution. iPads are
captured at 3x as well.
"""
from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import List

from playwright.sync_api import Error as PlaywrightError

from .browser import BrowserSession
from .devices import resolve_devices
from .logging_utils import log
from .models import CaptureRequest, CaptureResult, DeviceOutcome, DeviceSpec

DEVICE_SCALE_FACTOR = 3
SELECTOR_TIMEOUT_MS = 10_000


def _epoch_ms() -> int:
    return int(time.time() * 1000)


class CaptureEngine:
    """Capture screenshots for a list of App Store devices."""

    def __init__(self, session: BrowserSession):
        self.session = session

    def capture(self, request: CaptureRequest) -> List[CaptureResult]:
        """
        Capture one screenshot per selected device.

        Devices that fail are logged and left out, so the result may be
        shorter than the selection (or empty).

        Raises:
            BrowserNotStartedError: If the session has not been started
            UnknownDeviceError: If the selection names a device not in the catalog
        """
        return [o.result for o in self.capture_outcomes(request) if o.result is not None]

    def capture_outcomes(self, request: CaptureRequest) -> List[DeviceOutcome]:
        """Like ``capture`` but reports success or failure for every device."""
        # Touch the browser first so an unstarted session fails before any work
        _ = self.session.browser
        devices = resolve_devices(request.selected_devices)

        output_dir = Path(request.output_directory)
        output_dir.mkdir(parents=True, exist_ok=True)

        outcomes = []
        for device in devices:
            try:
                result = self._capture_device(device, request, output_dir)
            except (PlaywrightError, OSError) as e:
                log(f"Failed to capture screenshot for {device.label}: {e}", logging.ERROR)
                outcomes.append(DeviceOutcome(device_label=device.label, error=str(e)))
                continue
            log(f"Captured screenshot for {device.label}: {result.file_path}")
            outcomes.append(DeviceOutcome(device_label=device.label, result=result))

        return outcomes

    def _capture_device(
        self,
        device: DeviceSpec,
        request: CaptureRequest,
        output_dir: Path,
    ) -> CaptureResult:
        width, height = device.viewport(DEVICE_SCALE_FACTOR)
        with self.session.context(
            viewport={"width": width, "height": height},
            device_scale_factor=DEVICE_SCALE_FACTOR,
        ) as ctx:
            page = ctx.new_page()
            page.goto(request.target_url, wait_until="networkidle")

            if request.wait_selector:
                page.wait_for_selector(request.wait_selector, timeout=SELECTOR_TIMEOUT_MS)

            # Extra time for client-side rendering
            page.wait_for_timeout(request.settle_delay_ms)

            file_path = output_dir / f"{device.file_token}_{_epoch_ms()}.png"
            page.screenshot(path=str(file_path), full_page=request.render_full_page)

        return CaptureResult(
            device_label=device.label,
            file_path=str(file_path),
            width=device.pixel_width,
            height=device.pixel_height,
        )
