"""
Run an App Store preview job configured from environment variables.

Usage:
    APP_URL=https://example.com APP_NAME="My App" python -m appstore_preview

Environment:
    APP_URL, APP_NAME, APP_DESCRIPTION, APP_CATEGORY, APP_KEYWORDS (comma list)
    OUTPUT_DIR, DEVICES (comma list of device labels), FULL_PAGE, WAIT_TIME,
    WAIT_FOR_SELECTOR, ICON_STYLE, ICON_SIZE, PRIMARY_COLOR,
    GENERATE_VARIATIONS, HEADLESS
    OPENAI_API_KEY: Icon generation (optional; skipped when unset)
"""
from __future__ import annotations

import logging
import traceback

from .config import JobConfig
from .job import run_app_store_preview_job
from .logging_utils import configure_logging, log


def main() -> int:
    configure_logging()
    try:
        config = JobConfig.from_env()
        result = run_app_store_preview_job(config)
    except Exception as e:
        log(f"Job failed: {e}", logging.ERROR)
        log(traceback.format_exc(), logging.DEBUG)
        return 1

    print("Job Result Summary:")
    print(result.to_manifest())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
