"""
App Store Preview - screenshot and icon kit for App Store listings.

This package handles:
- Screenshot capture at every App Store device size (Playwright, 3x scale)
- App metadata scraping (title, description, keywords)
- App icon generation (OpenAI Images API)
- Job orchestration and manifest.json output
"""
from __future__ import annotations

from .browser import BrowserNotStartedError, BrowserSession
from .capture import CaptureEngine
from .config import JobConfig
from .devices import APP_STORE_DEVICES, UnknownDeviceError, get_device, resolve_devices
from .icons import IconGenerator
from .image_client import ImageGenerationError, MissingAPIKeyError, OpenAIImageClient
from .job import AppStorePreviewJob, JobState, read_manifest, run_app_store_preview_job
from .metadata import MetadataExtractor
from .models import (
    AppInfo,
    CaptureRequest,
    CaptureResult,
    DeviceOutcome,
    DeviceSpec,
    ExtractedAppInfo,
    IconOptions,
    IconResult,
    IconStyle,
    JobResult,
    StyleOutcome,
)
from .prompts import build_prompt

__all__ = [
    "APP_STORE_DEVICES",
    "AppInfo",
    "AppStorePreviewJob",
    "BrowserNotStartedError",
    "BrowserSession",
    "CaptureEngine",
    "CaptureRequest",
    "CaptureResult",
    "DeviceOutcome",
    "DeviceSpec",
    "ExtractedAppInfo",
    "IconGenerator",
    "IconOptions",
    "IconResult",
    "IconStyle",
    "ImageGenerationError",
    "JobConfig",
    "JobResult",
    "JobState",
    "MetadataExtractor",
    "MissingAPIKeyError",
    "OpenAIImageClient",
    "StyleOutcome",
    "UnknownDeviceError",
    "build_prompt",
    "get_device",
    "read_manifest",
    "resolve_devices",
    "run_app_store_preview_job",
]
