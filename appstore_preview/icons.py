"""
App icon generation with the OpenAI Images API.
"""
from __future__ import annotations

import logging
import re
import time
from pathlib import Path
from typing import List, Optional, Sequence

from .image_client import ImageGenerationError, OpenAIImageClient
from .logging_utils import log
from .models import IconOptions, IconResult, IconStyle, StyleOutcome
from .prompts import build_prompt

# Fixed request settings; not exposed as options
IMAGE_QUALITY = "hd"
IMAGE_STYLE = "vivid"

DEFAULT_VARIATION_STYLES: Sequence[str] = (
    IconStyle.FLAT.value,
    IconStyle.GRADIENT.value,
    IconStyle.THREE_D.value,
    IconStyle.MINIMAL.value,
)


def icon_slug(app_name: str) -> str:
    """Filename-safe form of an app name: whitespace runs become ``_``, lowercased."""
    slug = re.sub(r"\s+", "_", app_name).lower()
    # Keep the file inside the icons directory
    return slug.replace("/", "_").replace("\\", "_")


class IconGenerator:
    """
    Generate app icons from app metadata.

    Usage:
        generator = IconGenerator(OpenAIImageClient(api_key))
        result = generator.generate_icon(IconOptions(app_name="Foo", ...))
    """

    def __init__(self, client: Optional[OpenAIImageClient] = None):
        self.client = client or OpenAIImageClient()

    def generate_icon(self, options: IconOptions) -> IconResult:
        """
        Generate one icon and save it under ``options.output_directory``.

        Raises:
            ImageGenerationError: If the API fails or returns no image URL
        """
        output_dir = Path(options.output_directory)
        output_dir.mkdir(parents=True, exist_ok=True)

        prompt = build_prompt(options)
        log(f"Generating icon with prompt: {prompt}")

        image = self.client.generate(
            prompt,
            size=options.image_size,
            quality=IMAGE_QUALITY,
            style=IMAGE_STYLE,
        )
        if not image.url:
            raise ImageGenerationError("No image URL returned from OpenAI")

        image_bytes = self.client.download(image.url)

        file_name = f"icon_{icon_slug(options.app_name)}_{int(time.time() * 1000)}.png"
        file_path = output_dir / file_name
        file_path.write_bytes(image_bytes)
        log(f"Icon generated and saved to: {file_path}")

        return IconResult(
            file_path=str(file_path),
            prompt=prompt,
            revised_prompt=image.revised_prompt,
        )

    def generate_icon_variations(
        self,
        options: IconOptions,
        styles: Sequence[str] = DEFAULT_VARIATION_STYLES,
    ) -> List[IconResult]:
        """One icon per style, in order. Failed styles are logged and skipped."""
        return [o.result for o in self.variation_outcomes(options, styles) if o.result is not None]

    def variation_outcomes(
        self,
        options: IconOptions,
        styles: Sequence[str] = DEFAULT_VARIATION_STYLES,
    ) -> List[StyleOutcome]:
        """Like ``generate_icon_variations`` but reports every style."""
        outcomes = []
        for style in styles:
            try:
                result = self.generate_icon(options.model_copy(update={"style": style}))
            except (ImageGenerationError, OSError) as e:
                log(f"Failed to generate {style} icon variation: {e}", logging.ERROR)
                outcomes.append(StyleOutcome(style=style, error=str(e)))
                continue
            outcomes.append(StyleOutcome(style=style, result=result))
        return outcomes
