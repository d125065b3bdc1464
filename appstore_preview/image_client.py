"""
Direct OpenAI Images API client.

Uses the REST API with ``requests`` (no SDK dependency). Only the two calls
the icon generator needs are implemented: create one image from a prompt,
and download the image the API points at.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Tuple

import requests

MAX_ERROR_PREVIEW = 200


class ImageGenerationError(Exception):
    """Base error for image generation calls."""
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class MissingAPIKeyError(ImageGenerationError):
    """No OpenAI API key configured."""
    pass


@dataclass
class GeneratedImage:
    """Reference to an image created by the API."""
    url: Optional[str]
    revised_prompt: Optional[str] = None


class OpenAIImageClient:
    """
    Minimal client for ``POST /v1/images/generations``.

    Args:
        api_key: OpenAI API key. If None, reads OPENAI_API_KEY on first use.
        timeout: (connect_timeout, read_timeout) in seconds
    """

    API_URL = "https://api.openai.com/v1/images/generations"
    MODEL = "dall-e-3"

    def __init__(
        self,
        api_key: Optional[str] = None,
        timeout: Tuple[int, int] = (10, 120),
    ):
        self._api_key = api_key
        self.timeout = timeout

    @property
    def api_key(self) -> str:
        """Get API key, loading from env if needed."""
        if not self._api_key:
            self._api_key = os.environ.get("OPENAI_API_KEY")
            if not self._api_key:
                raise MissingAPIKeyError("OPENAI_API_KEY not set")
        return self._api_key

    def generate(
        self,
        prompt: str,
        size: str = "1024x1024",
        quality: str = "hd",
        style: str = "vivid",
    ) -> GeneratedImage:
        """
        Request a single image.

        Returns:
            GeneratedImage; ``url`` is None when the API returned no image

        Raises:
            ImageGenerationError: On network errors, non-2xx responses or
                an unparseable body
        """
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = {
            "model": self.MODEL,
            "prompt": prompt,
            "n": 1,
            "size": size,
            "quality": quality,
            "style": style,
        }

        try:
            response = requests.post(self.API_URL, headers=headers, json=payload, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise ImageGenerationError(f"Request timeout: {e}")
        except requests.exceptions.RequestException as e:
            raise ImageGenerationError(f"Network error: {e}")

        if not response.ok:
            raise ImageGenerationError(
                f"HTTP {response.status_code}: {response.text[:MAX_ERROR_PREVIEW]}",
                response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ImageGenerationError(f"Invalid JSON response: {e}", response.status_code)

        if not isinstance(data, dict):
            raise ImageGenerationError(
                f"Malformed response: expected object, got {type(data).__name__}",
                response.status_code,
            )
        images = data.get("data") or []
        if not isinstance(images, list):
            raise ImageGenerationError(
                f"Malformed response: 'data' is {type(images).__name__}, expected list",
                response.status_code,
            )
        if not images:
            return GeneratedImage(url=None)
        first = images[0]
        if not isinstance(first, dict):
            raise ImageGenerationError(
                f"Malformed response: image entry is {type(first).__name__}, expected object",
                response.status_code,
            )
        return GeneratedImage(url=first.get("url"), revised_prompt=first.get("revised_prompt"))

    def download(self, url: str) -> bytes:
        """Fetch image bytes from a URL returned by ``generate``."""
        try:
            response = requests.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise ImageGenerationError(f"Image download failed: {e}")

        if not response.ok:
            raise ImageGenerationError(
                f"Image download failed: HTTP {response.status_code}",
                response.status_code,
            )
        return response.content
