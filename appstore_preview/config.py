"""
Job configuration.

A JobConfig is the single record a job runs from. ``JobConfig.from_env``
builds one from environment variables (after loading a local ``.env``),
which is how the process entry point is configured.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import List, Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .models import IconSize


DEFAULT_URL = "https://example.com"
DEFAULT_APP_NAME = "My App"
DEFAULT_APP_DESCRIPTION = "A fantastic mobile application"
DEFAULT_APP_CATEGORY = "Productivity"
DEFAULT_APP_KEYWORDS = ["productivity", "tools", "utility"]
DEFAULT_OUTPUT_DIR = "./output"
DEFAULT_WAIT_TIME_MS = 2000

_TRUE_VALUES = {"1", "true", "yes", "on"}


class JobConfig(BaseModel):
    """Configuration for one App Store preview job."""
    url: str = Field(..., description="Page to capture")

    # App information (caller-supplied; empty values fall back to scraped ones)
    app_name: str = Field("", description="App name")
    app_description: str = Field("", description="App description")
    category: Optional[str] = Field(None, description="App Store category")
    keywords: Optional[List[str]] = Field(None, description="Keywords in priority order")

    output_dir: str = Field(DEFAULT_OUTPUT_DIR, description="Root of the output tree")
    devices: Optional[List[str]] = Field(None, description="Device labels; None means all")

    # Screenshot options
    full_page: bool = Field(False, description="Capture the full scrollable page")
    wait_for_selector: Optional[str] = Field(None, description="Selector to wait for before capture")
    wait_time_ms: int = Field(DEFAULT_WAIT_TIME_MS, ge=0, description="Settle delay in milliseconds")

    # Icon options
    icon_style: str = Field("gradient", description="flat, 3d, gradient or minimal")
    icon_size: IconSize = Field("1024x1024", description="Requested icon size")
    primary_color: Optional[str] = Field(None, description="Color hint for the icon")
    generate_variations: bool = Field(False, description="Generate one icon per style")
    openai_api_key: Optional[str] = Field(None, description="Image service credential")

    headless: bool = Field(True, description="Run Chromium headless")

    @property
    def output_path(self) -> Path:
        return Path(self.output_dir)

    @property
    def screenshot_dir(self) -> Path:
        return self.output_path / "screenshots"

    @property
    def icon_dir(self) -> Path:
        return self.output_path / "icons"

    @property
    def manifest_path(self) -> Path:
        return self.output_path / "manifest.json"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "JobConfig":
        """
        Build a config from environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``. When omitted a
                ``.env`` file in the working directory is loaded first.
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        def get(name: str) -> Optional[str]:
            value = environ.get(name)
            if value is None or not value.strip():
                return None
            return value.strip()

        return cls(
            url=get("APP_URL") or DEFAULT_URL,
            app_name=get("APP_NAME") or DEFAULT_APP_NAME,
            app_description=get("APP_DESCRIPTION") or DEFAULT_APP_DESCRIPTION,
            category=get("APP_CATEGORY") or DEFAULT_APP_CATEGORY,
            keywords=split_csv(get("APP_KEYWORDS")) or list(DEFAULT_APP_KEYWORDS),
            output_dir=get("OUTPUT_DIR") or DEFAULT_OUTPUT_DIR,
            devices=split_csv(get("DEVICES")),
            full_page=parse_bool(get("FULL_PAGE")),
            wait_for_selector=get("WAIT_FOR_SELECTOR"),
            wait_time_ms=int(get("WAIT_TIME") or DEFAULT_WAIT_TIME_MS),
            icon_style=get("ICON_STYLE") or "gradient",
            icon_size=get("ICON_SIZE") or "1024x1024",
            primary_color=get("PRIMARY_COLOR"),
            generate_variations=parse_bool(get("GENERATE_VARIATIONS")),
            openai_api_key=get("OPENAI_API_KEY"),
            headless=parse_bool(get("HEADLESS"), default=True),
        )


def parse_bool(raw: Optional[str], default: bool = False) -> bool:
    """Interpret an environment flag."""
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE_VALUES


def split_csv(raw: Optional[str]) -> Optional[List[str]]:
    """Split a comma-separated value, trimming entries and dropping empty ones."""
    if raw is None:
        return None
    items = [item.strip() for item in raw.split(",")]
    return [item for item in items if item]
