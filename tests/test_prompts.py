"""Tests for icon prompt construction."""
import pytest

from appstore_preview.models import IconOptions
from appstore_preview.prompts import ICON_TRAILER, STYLE_CLAUSES, build_prompt


def _options(**overrides):
    base = dict(
        app_name="Focus Timer",
        app_description="A pomodoro timer for deep work",
        category="Productivity",
        keywords=["focus", "timer"],
        style="gradient",
        output_directory="/tmp/icons",
    )
    base.update(overrides)
    return IconOptions(**base)


class TestBuildPrompt:
    """Sentence content and order."""

    def test_contains_quoted_app_name(self):
        prompt = build_prompt(_options())
        assert 'called "Focus Timer".' in prompt

    def test_sentence_order(self):
        """Identity, description, category, themes, style, color, trailer."""
        prompt = build_prompt(_options(primary_color="teal"))

        markers = [
            "Create a professional, modern app icon",
            "The app is about: A pomodoro timer for deep work.",
            "Category: Productivity.",
            "Key themes: focus, timer.",
            STYLE_CLAUSES["gradient"],
            "Primary color scheme should include teal.",
        ] + ICON_TRAILER
        positions = [prompt.index(m) for m in markers]
        assert positions == sorted(positions)

    def test_starts_and_ends_fixed(self):
        prompt = build_prompt(_options())
        assert prompt.startswith("Create a professional, modern app icon")
        assert prompt.endswith("High quality, professional look suitable for the App Store.")

    def test_trailer_forbids_text(self):
        assert "No text or letters should appear in the icon." in build_prompt(_options())

    @pytest.mark.parametrize("style", ["flat", "3d", "gradient", "minimal"])
    def test_exactly_one_style_clause(self, style):
        prompt = build_prompt(_options(style=style))

        present = [s for s, clause in STYLE_CLAUSES.items() if clause in prompt]
        assert present == [style]

    def test_unknown_style_adds_nothing(self):
        """Unrecognized styles are silently ignored."""
        prompt = build_prompt(_options(style="neon"))

        assert not any(clause in prompt for clause in STYLE_CLAUSES.values())
        assert prompt.endswith(ICON_TRAILER[-1])

    def test_primary_color_only_when_set(self):
        assert "Primary color scheme" not in build_prompt(_options())
        assert "Primary color scheme" not in build_prompt(_options(primary_color=""))
        assert "Primary color scheme should include #FF5733." in build_prompt(
            _options(primary_color="#FF5733")
        )

    def test_empty_category_defaults_to_general(self):
        assert "Category: general." in build_prompt(_options(category=""))

    def test_no_keywords_no_themes(self):
        assert "Key themes" not in build_prompt(_options(keywords=[]))

    def test_deterministic(self):
        assert build_prompt(_options()) == build_prompt(_options())
