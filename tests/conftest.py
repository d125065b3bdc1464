"""
Pytest configuration and fixtures for the App Store preview test suite.

This module provides reusable fixtures for:
- A fake Playwright browser (contexts, pages, screenshots written to disk)
- A BrowserSession that is already "started" on the fake browser
- A JobConfig pointing at a temporary output directory

No real browser or network access is needed.
"""

import base64
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from playwright.sync_api import Error as PlaywrightError

# Ensure project root is on sys.path to import appstore_preview
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from appstore_preview.browser import BrowserSession  # noqa: E402
from appstore_preview.config import JobConfig  # noqa: E402


PNG_1X1_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mP8/x8AAwMCAO7+fJ8AAAAASUVORK5CYII="
)

EXAMPLE_TITLE = "Example Domain"


def _write_png(path, full_page=False):
    Path(path).write_bytes(PNG_1X1_BYTES)


def make_page(options=None, title=EXAMPLE_TITLE, meta=None):
    """
    Build a fake Playwright page.

    Args:
        options: new_context() options of the owning context (unused here)
        title: Value returned by page.title()
        meta: {meta name: content} served to eval_on_selector
    """
    page = MagicMock(name="page")
    page.title.return_value = title
    meta = meta or {}

    def eval_on_selector(selector, expression):
        for name, content in meta.items():
            if selector == f'meta[name="{name}"]':
                return content
        raise PlaywrightError(f"Failed to find element matching selector {selector!r}")

    page.eval_on_selector.side_effect = eval_on_selector
    page.screenshot.side_effect = _write_png
    return page


class FakeBrowser:
    """Stands in for playwright.sync_api.Browser."""

    def __init__(self, page_factory=make_page):
        self.page_factory = page_factory
        self.contexts = []
        self.closed = False

    def new_context(self, **options):
        ctx = MagicMock(name="context")
        ctx.options = options
        ctx.page = self.page_factory(options)
        ctx.new_page.return_value = ctx.page
        self.contexts.append(ctx)
        return ctx

    def close(self):
        self.closed = True


@pytest.fixture
def fake_browser():
    return FakeBrowser()


def session_on(browser):
    """A BrowserSession that treats ``browser`` as already launched."""
    session = BrowserSession()
    session._browser = browser
    return session


@pytest.fixture
def started_session(fake_browser):
    return session_on(fake_browser)


@pytest.fixture
def job_config(tmp_path):
    return JobConfig(
        url="https://example.com",
        devices=['iPhone 6.7"'],
        output_dir=str(tmp_path / "out"),
        wait_time_ms=0,
    )
