#!/usr/bin/env python3
"""
Capture App Store screenshots of a URL without running the full job.

Usage examples:
  python scripts/take_screenshots.py https://example.com
  python scripts/take_screenshots.py https://example.com --device 'iPhone 6.7"' --full-page
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from appstore_preview.browser import BrowserSession  # noqa: E402
from appstore_preview.capture import CaptureEngine  # noqa: E402
from appstore_preview.devices import UnknownDeviceError, device_labels, resolve_devices  # noqa: E402
from appstore_preview.logging_utils import configure_logging, log  # noqa: E402
from appstore_preview.models import CaptureRequest  # noqa: E402


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Capture App Store screenshots of a page")
    ap.add_argument("url", help="Page to capture")
    ap.add_argument(
        "--device",
        action="append",
        dest="devices",
        metavar="LABEL",
        help=f"Device label, repeatable (default: all of {', '.join(device_labels())})",
    )
    ap.add_argument(
        "--output-dir",
        type=Path,
        default=Path("output/screenshots"),
        help="Directory to save screenshots (default: output/screenshots)",
    )
    ap.add_argument("--full-page", action="store_true", help="Capture the full scrollable page")
    ap.add_argument("--wait-for-selector", default=None, help="Selector to wait for before capture")
    ap.add_argument(
        "--wait-time",
        type=int,
        default=2000,
        help="Settle delay in milliseconds (default: 2000)",
    )
    args = ap.parse_args(argv)

    configure_logging()
    request = CaptureRequest(
        target_url=args.url,
        output_directory=str(args.output_dir),
        selected_devices=args.devices,
        render_full_page=args.full_page,
        wait_selector=args.wait_for_selector,
        settle_delay_ms=args.wait_time,
    )

    try:
        resolve_devices(request.selected_devices)
    except UnknownDeviceError as e:
        log(str(e), logging.ERROR)
        return 1

    with BrowserSession() as session:
        outcomes = CaptureEngine(session).capture_outcomes(request)

    for outcome in outcomes:
        if outcome.ok:
            print(f"✓ {outcome.device_label}: {outcome.result.file_path}")
        else:
            print(f"✗ {outcome.device_label}: {outcome.error}")

    succeeded = sum(1 for o in outcomes if o.ok)
    log(f"Summary: {succeeded} captured, {len(outcomes) - succeeded} failed")
    return 0 if succeeded or not outcomes else 1


if __name__ == "__main__":
    raise SystemExit(main())
