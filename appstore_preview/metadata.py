"""
Scrape basic app details (title, description, keywords) from a page.
"""
from __future__ import annotations

from typing import List, Optional

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page

from .browser import BrowserSession
from .models import ExtractedAppInfo


def split_keywords(raw: str) -> List[str]:
    """Split a ``meta[name=keywords]`` value on commas and trim each entry."""
    return [k.strip() for k in raw.split(",")]


def _meta_content(page: Page, name: str) -> Optional[str]:
    try:
        return page.eval_on_selector(
            f'meta[name="{name}"]', 'el => el.getAttribute("content")'
        )
    except PlaywrightError:
        return None


class MetadataExtractor:
    """Read app details from a single page load."""

    def __init__(self, session: BrowserSession):
        self.session = session

    def extract(self, url: str) -> ExtractedAppInfo:
        """
        Load ``url`` once and read its title and meta tags.

        Missing meta tags leave the matching field unset. Navigation errors
        propagate to the caller.
        """
        with self.session.context() as ctx:
            page = ctx.new_page()
            page.goto(url, wait_until="networkidle")

            info = ExtractedAppInfo(name=page.title())

            description = _meta_content(page, "description")
            if description:
                info.description = description

            keywords = _meta_content(page, "keywords")
            if keywords:
                info.keywords = split_keywords(keywords)

            return info
