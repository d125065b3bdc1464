"""
Prompt construction for app icon generation.
"""
from __future__ import annotations

from typing import Dict, List

from .models import IconOptions, IconStyle


STYLE_CLAUSES: Dict[str, str] = {
    IconStyle.FLAT.value: "Use a flat design style with clean shapes and no shadows.",
    IconStyle.THREE_D.value: "Use a 3D style with depth, shadows, and highlights.",
    IconStyle.GRADIENT.value: "Use a modern gradient style with smooth color transitions.",
    IconStyle.MINIMAL.value: "Use a minimalist design with simple shapes and limited colors.",
}

ICON_TRAILER: List[str] = [
    "The icon should be square, centered, with rounded corners suitable for iOS App Store.",
    "No text or letters should appear in the icon.",
    "High quality, professional look suitable for the App Store.",
]

DEFAULT_CATEGORY = "general"


def build_prompt(options: IconOptions) -> str:
    """
    Build the image-generation prompt for an app icon.

    Sentence order is fixed: identity, description, category, key themes,
    style, primary color, then the composition trailer. An unrecognized style
    contributes no sentence.
    """
    sentences = [
        f'Create a professional, modern app icon for an application called "{options.app_name}".',
        f"The app is about: {options.app_description}.",
        f"Category: {options.category or DEFAULT_CATEGORY}.",
    ]

    if options.keywords:
        sentences.append(f"Key themes: {', '.join(options.keywords)}.")

    style_clause = STYLE_CLAUSES.get(options.style)
    if style_clause:
        sentences.append(style_clause)

    if options.primary_color:
        sentences.append(f"Primary color scheme should include {options.primary_color}.")

    sentences.extend(ICON_TRAILER)
    return " ".join(sentences)
