"""
App Store preview job.

Runs the whole pipeline for one page:
1. Start the browser
2. Capture screenshots at every selected App Store size
3. Scrape app details from the page and merge them with the caller's
4. Generate an app icon (only when an OpenAI key is configured)
5. Write manifest.json
6. Close the browser, whatever happened above
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from .browser import BrowserSession
from .capture import CaptureEngine
from .config import JobConfig
from .devices import resolve_devices
from .icons import IconGenerator
from .image_client import OpenAIImageClient
from .logging_utils import log
from .metadata import MetadataExtractor
from .models import (
    AppInfo,
    CaptureRequest,
    CaptureResult,
    ExtractedAppInfo,
    IconOptions,
    IconResult,
    JobResult,
)


class JobState(str, Enum):
    """Stages of a job, in the order they are entered."""
    NOT_STARTED = "not_started"
    BROWSER_READY = "browser_ready"
    SCREENSHOTS_CAPTURED = "screenshots_captured"
    METADATA_EXTRACTED = "metadata_extracted"
    ICON_ATTEMPTED = "icon_attempted"
    MANIFEST_WRITTEN = "manifest_written"
    CLOSED = "closed"


# Ordered fallback sources per AppInfo field. Each source reads from
# (config, extracted); the first present value wins, then the default.
Source = Callable[[JobConfig, ExtractedAppInfo], Any]

APP_INFO_FALLBACKS: Dict[str, Tuple[List[Source], Any]] = {
    "name": (
        [lambda cfg, ext: cfg.app_name, lambda cfg, ext: ext.name],
        "Unknown App",
    ),
    "description": (
        [lambda cfg, ext: cfg.app_description, lambda cfg, ext: ext.description],
        "",
    ),
    "category": (
        [lambda cfg, ext: cfg.category],
        "General",
    ),
    "keywords": (
        [lambda cfg, ext: cfg.keywords, lambda cfg, ext: ext.keywords],
        [],
    ),
}


def _is_present(value: Any) -> bool:
    # Strings must be non-empty; lists only need to be supplied
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value)
    return True


def first_present(values: Sequence[Any], default: Any) -> Any:
    """Return the first present value, else ``default``."""
    for value in values:
        if _is_present(value):
            return value
    return default


def merge_app_info(
    config: JobConfig,
    extracted: ExtractedAppInfo,
    screenshots: Sequence[CaptureResult] = (),
) -> AppInfo:
    """Merge caller-supplied and scraped app details."""
    merged: Dict[str, Any] = {}
    for field, (sources, default) in APP_INFO_FALLBACKS.items():
        value = first_present([source(config, extracted) for source in sources], default)
        merged[field] = list(value) if isinstance(value, list) else value
    return AppInfo(**merged, screenshot_paths=[s.file_path for s in screenshots])


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def write_manifest(result: JobResult, path: Union[str, Path]) -> Path:
    """Write a job result as pretty-printed JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(result.to_manifest(), encoding="utf-8")
    return path


def read_manifest(path: Union[str, Path]) -> JobResult:
    """Load a manifest written by ``write_manifest``."""
    with open(path, "r", encoding="utf-8") as f:
        return JobResult.model_validate(json.load(f))


class AppStorePreviewJob:
    """
    One run of the preview pipeline.

    Usage:
        job = AppStorePreviewJob(JobConfig(url="https://example.com", app_name="Foo"))
        result = job.run()
        job.history  # states entered, ending with JobState.CLOSED
    """

    def __init__(
        self,
        config: JobConfig,
        session: Optional[BrowserSession] = None,
        icon_generator: Optional[IconGenerator] = None,
    ):
        self.config = config
        self.session = session or BrowserSession(headless=config.headless)
        self._icon_generator = icon_generator
        self.state = JobState.NOT_STARTED
        self.history: List[JobState] = [JobState.NOT_STARTED]

    @property
    def icon_generator(self) -> IconGenerator:
        """Lazy-load the icon generator."""
        if self._icon_generator is None:
            self._icon_generator = IconGenerator(OpenAIImageClient(self.config.openai_api_key))
        return self._icon_generator

    def _enter(self, state: JobState) -> None:
        self.state = state
        self.history.append(state)

    def run(self) -> JobResult:
        """
        Execute the job.

        Raises:
            UnknownDeviceError: If the config names a device not in the catalog
            playwright.sync_api.Error: If the browser cannot start or the page
                cannot be loaded for metadata extraction
        """
        config = self.config
        log(f"Starting App Store preview job for {config.url}")
        log(f"App name: {config.app_name or '(from page)'}")

        # Reject bad device labels before launching anything
        resolve_devices(config.devices)

        for directory in (config.output_path, config.screenshot_dir):
            directory.mkdir(parents=True, exist_ok=True)

        try:
            self.session.start()
            self._enter(JobState.BROWSER_READY)

            log("Capturing screenshots for App Store...")
            screenshots = CaptureEngine(self.session).capture(
                CaptureRequest(
                    target_url=config.url,
                    output_directory=str(config.screenshot_dir),
                    selected_devices=config.devices,
                    render_full_page=config.full_page,
                    wait_selector=config.wait_for_selector,
                    settle_delay_ms=config.wait_time_ms,
                )
            )
            self._enter(JobState.SCREENSHOTS_CAPTURED)

            log("Extracting app information...")
            extracted = MetadataExtractor(self.session).extract(config.url)
            app_info = merge_app_info(config, extracted, screenshots)
            self._enter(JobState.METADATA_EXTRACTED)

            icon: Optional[IconResult] = None
            variations: Optional[List[IconResult]] = None
            if config.openai_api_key:
                icon, variations = self._generate_icons(app_info)
                self._enter(JobState.ICON_ATTEMPTED)
            else:
                log("OPENAI_API_KEY not configured, skipping icon generation", logging.WARNING)

            result = JobResult(
                screenshots=screenshots,
                icon=icon,
                icon_variations=variations,
                app_info=app_info,
                timestamp=utc_timestamp(),
            )
            manifest_path = write_manifest(result, config.manifest_path)
            self._enter(JobState.MANIFEST_WRITTEN)
            log(f"Manifest saved to: {manifest_path}")

            log("App Store preview job completed")
            log(f"  Screenshots captured: {len(screenshots)}")
            log(f"  Output directory: {config.output_dir}")
            return result
        finally:
            try:
                self.session.close()
            finally:
                self._enter(JobState.CLOSED)

    def _generate_icons(self, app_info: AppInfo):
        options = IconOptions(
            app_name=app_info.name,
            app_description=app_info.description,
            category=app_info.category,
            keywords=app_info.keywords,
            style=self.config.icon_style,
            primary_color=self.config.primary_color,
            output_directory=str(self.config.icon_dir),
            image_size=self.config.icon_size,
        )
        try:
            if self.config.generate_variations:
                log("Generating icon variations...")
                return None, self.icon_generator.generate_icon_variations(options)
            log("Generating app icon...")
            return self.icon_generator.generate_icon(options), None
        except Exception as e:
            log(f"Icon generation failed: {e}", logging.ERROR)
            return None, None


def run_app_store_preview_job(config: JobConfig) -> JobResult:
    """Run a job with a fresh browser session."""
    return AppStorePreviewJob(config).run()
