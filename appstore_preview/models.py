"""
Pydantic data models for the App Store preview pipeline.

Attributes are snake_case in Python and serialize with camelCase aliases,
which is the shape written to ``manifest.json``.
"""
from __future__ import annotations

from enum import Enum
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


IconSize = Literal["256x256", "512x512", "1024x1024"]


class IconStyle(str, Enum):
    """Icon styles that map to a prompt clause."""
    FLAT = "flat"
    THREE_D = "3d"
    GRADIENT = "gradient"
    MINIMAL = "minimal"


class _Model(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _round_half_up(value: float) -> int:
    return int(value + 0.5)


class DeviceSpec(_Model):
    """One App Store screenshot target."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    label: str = Field(..., description='Human-readable key, e.g. \'iPhone 6.7"\'')
    pixel_width: int = Field(..., gt=0, description="Nominal raster width in pixels")
    pixel_height: int = Field(..., gt=0, description="Nominal raster height in pixels")
    file_token: str = Field(..., description="Filesystem-safe name used in screenshot filenames")

    def viewport(self, scale: int) -> Tuple[int, int]:
        """CSS viewport that renders to the nominal raster at ``scale``."""
        return (
            _round_half_up(self.pixel_width / scale),
            _round_half_up(self.pixel_height / scale),
        )


class CaptureRequest(_Model):
    """What to capture and where to put it."""
    target_url: str = Field(..., description="Page to photograph")
    output_directory: str = Field(..., description="Directory receiving the PNG files")
    selected_devices: Optional[List[str]] = Field(
        None, description="Device labels in capture order; None means the whole catalog"
    )
    render_full_page: bool = Field(False, description="Capture the full scrollable page")
    wait_selector: Optional[str] = Field(None, description="Selector that must appear before capture")
    settle_delay_ms: int = Field(2000, ge=0, description="Pause after load for dynamic content")


class CaptureResult(_Model):
    """A screenshot written for one device."""
    device_label: str
    file_path: str
    width: int = Field(..., description="Pixel width from the catalog")
    height: int = Field(..., description="Pixel height from the catalog")


class DeviceOutcome(_Model):
    """Success or failure of capturing a single device."""
    device_label: str
    result: Optional[CaptureResult] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.result is not None


class ExtractedAppInfo(_Model):
    """App details scraped from the page; every field may be missing."""
    name: Optional[str] = None
    description: Optional[str] = None
    keywords: Optional[List[str]] = None


class AppInfo(_Model):
    """Merged app details recorded in the manifest."""
    name: str
    description: str
    category: str
    keywords: List[str] = Field(default_factory=list)
    screenshot_paths: List[str] = Field(default_factory=list)


class IconOptions(_Model):
    """Inputs for one icon generation request."""
    app_name: str
    app_description: str
    category: str = ""
    keywords: List[str] = Field(default_factory=list)
    style: str = Field(
        IconStyle.GRADIENT.value,
        description="flat, 3d, gradient or minimal; other values add no style clause",
    )
    primary_color: Optional[str] = None
    output_directory: str
    image_size: IconSize = "1024x1024"


class IconResult(_Model):
    """An icon written to disk."""
    file_path: str
    prompt: str
    revised_prompt: Optional[str] = Field(None, description="Prompt as rewritten by the generator")


class StyleOutcome(_Model):
    """Success or failure of generating one icon style."""
    style: str
    result: Optional[IconResult] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.result is not None


class JobResult(_Model):
    """Everything a job produced; serialized verbatim as the manifest."""
    screenshots: List[CaptureResult] = Field(default_factory=list)
    icon: Optional[IconResult] = None
    icon_variations: Optional[List[IconResult]] = None
    app_info: AppInfo
    timestamp: str = Field(..., description="ISO-8601 UTC completion time")

    def to_manifest(self) -> str:
        """Pretty-printed JSON with absent fields omitted."""
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=2)
