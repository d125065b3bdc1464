#!/usr/bin/env python3
"""
Generate app icon candidates with the OpenAI Images API (DALL-E 3).

Usage examples:
  python scripts/generate_icon.py --name "Focus Timer" --description "Pomodoro timer"
  python scripts/generate_icon.py --name "Focus Timer" --description "..." --style flat
  python scripts/generate_icon.py --name "Focus Timer" --description "..." --variations

Requires OPENAI_API_KEY in the environment or a .env file.
"""
from __future__ import annotations

import argparse
import html
import logging
import sys
from pathlib import Path
from typing import List

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from dotenv import load_dotenv  # noqa: E402

from appstore_preview.config import split_csv  # noqa: E402
from appstore_preview.icons import IconGenerator  # noqa: E402
from appstore_preview.image_client import ImageGenerationError, OpenAIImageClient  # noqa: E402
from appstore_preview.logging_utils import configure_logging, log  # noqa: E402
from appstore_preview.models import IconOptions, IconResult, IconStyle  # noqa: E402


def generate_preview_html(output_dir: Path, icons: List[IconResult]) -> Path:
    """Generate an HTML preview page for comparing generated icons."""
    html_path = output_dir / "preview.html"

    page = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>Icon Candidates</title>
    <style>
        body { font-family: system-ui; max-width: 1200px; margin: 0 auto; padding: 20px; background: #f5f5f5; }
        h1 { color: #333; }
        .grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(220px, 1fr)); gap: 20px; }
        .card { background: white; border-radius: 8px; padding: 15px; box-shadow: 0 2px 4px rgba(0,0,0,0.1); }
        .card img { width: 100%; height: auto; border-radius: 22%; }
        .card .name { margin-top: 10px; font-size: 14px; color: #666; text-align: center; }
        .card .prompt { margin-top: 6px; font-size: 11px; color: #999; }
        .preview-sizes { display: flex; gap: 10px; align-items: center; margin-top: 10px; justify-content: center; }
        .preview-sizes img { width: auto; border-radius: 22%; }
        .size-180 { width: 180px; height: 180px; }
        .size-120 { width: 120px; height: 120px; }
        .size-60 { width: 60px; height: 60px; }
    </style>
</head>
<body>
    <h1>Icon Candidates</h1>
    <p>Generated with DALL-E 3</p>
    <div class="grid">
"""

    for icon in icons:
        name = Path(icon.file_path).name
        stem = html.escape(Path(icon.file_path).stem)
        prompt = html.escape(icon.revised_prompt or icon.prompt)
        page += f"""        <div class="card">
            <img src="{name}" alt="{stem}">
            <div class="name">{stem}</div>
            <div class="preview-sizes">
                <img src="{name}" class="size-60" title="60x60">
                <img src="{name}" class="size-120" title="120x120">
            </div>
            <div class="prompt">{prompt}</div>
        </div>
"""

    page += """    </div>
</body>
</html>
"""

    html_path.write_text(page, encoding="utf-8")
    return html_path


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Generate app icon candidates with DALL-E 3")
    ap.add_argument("--name", required=True, help="App name")
    ap.add_argument("--description", required=True, help="What the app does")
    ap.add_argument("--category", default="", help="App Store category")
    ap.add_argument("--keywords", default="", help="Comma-separated key themes")
    ap.add_argument(
        "--style",
        choices=[s.value for s in IconStyle],
        default=IconStyle.GRADIENT.value,
        help="Icon style (default: gradient)",
    )
    ap.add_argument("--primary-color", default=None, help="Color hint, e.g. '#0A84FF'")
    ap.add_argument(
        "--size",
        choices=["256x256", "512x512", "1024x1024"],
        default="1024x1024",
        help="Image size (default: 1024x1024)",
    )
    ap.add_argument(
        "--variations",
        action="store_true",
        help="Generate one icon per style instead of a single icon",
    )
    ap.add_argument(
        "--output-dir",
        type=Path,
        default=Path("output/icons"),
        help="Directory to save generated icons (default: output/icons)",
    )
    args = ap.parse_args(argv)

    load_dotenv()
    configure_logging()

    client = OpenAIImageClient()
    try:
        _ = client.api_key
    except ImageGenerationError as e:
        log(str(e), logging.ERROR)
        return 1

    options = IconOptions(
        app_name=args.name,
        app_description=args.description,
        category=args.category,
        keywords=split_csv(args.keywords) or [],
        style=args.style,
        primary_color=args.primary_color,
        output_directory=str(args.output_dir),
        image_size=args.size,
    )
    generator = IconGenerator(client)

    generated: List[IconResult] = []
    failed = 0
    if args.variations:
        for outcome in generator.variation_outcomes(options):
            if outcome.ok:
                log(f"✓ {outcome.style}: {outcome.result.file_path}")
                generated.append(outcome.result)
            else:
                log(f"✗ {outcome.style}: {outcome.error}", logging.ERROR)
                failed += 1
    else:
        try:
            generated.append(generator.generate_icon(options))
        except ImageGenerationError as e:
            log(f"✗ Failed: {e}", logging.ERROR)
            failed += 1

    log(f"Summary: {len(generated)} generated, {failed} failed")

    if generated:
        preview_path = generate_preview_html(args.output_dir, generated)
        log(f"Preview page: {preview_path}")

    return 0 if generated else 1


if __name__ == "__main__":
    raise SystemExit(main())
