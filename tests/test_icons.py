"""Tests for icon generation."""
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from appstore_preview.icons import DEFAULT_VARIATION_STYLES, IconGenerator, icon_slug
from appstore_preview.image_client import GeneratedImage, ImageGenerationError, OpenAIImageClient
from appstore_preview.models import IconOptions
from appstore_preview.prompts import STYLE_CLAUSES

from conftest import PNG_1X1_BYTES


@pytest.fixture
def mock_client():
    client = MagicMock()
    client.generate.return_value = GeneratedImage(
        url="https://img.example/icon.png", revised_prompt="A revised prompt"
    )
    client.download.return_value = PNG_1X1_BYTES
    return client


@pytest.fixture
def options(tmp_path):
    return IconOptions(
        app_name="Focus  Timer Pro",
        app_description="A pomodoro timer",
        category="Productivity",
        keywords=["focus"],
        style="flat",
        output_directory=str(tmp_path / "icons"),
    )


class TestGenerateIcon:
    """Single icon generation."""

    def test_writes_icon_and_returns_result(self, mock_client, options, tmp_path):
        result = IconGenerator(mock_client).generate_icon(options)

        path = Path(result.file_path)
        assert path.parent == tmp_path / "icons"
        assert path.name.startswith("icon_focus_timer_pro_")
        assert path.suffix == ".png"
        assert path.read_bytes() == PNG_1X1_BYTES
        assert result.revised_prompt == "A revised prompt"
        assert STYLE_CLAUSES["flat"] in result.prompt

    def test_requests_fixed_quality_and_style(self, mock_client, options):
        IconGenerator(mock_client).generate_icon(options)

        _, kwargs = mock_client.generate.call_args
        assert kwargs["size"] == "1024x1024"
        assert kwargs["quality"] == "hd"
        assert kwargs["style"] == "vivid"
        mock_client.download.assert_called_once_with("https://img.example/icon.png")

    def test_configured_size_forwarded(self, mock_client, options):
        IconGenerator(mock_client).generate_icon(options.model_copy(update={"image_size": "256x256"}))

        assert mock_client.generate.call_args.kwargs["size"] == "256x256"

    def test_no_image_url_raises(self, mock_client, options, tmp_path):
        mock_client.generate.return_value = GeneratedImage(url=None)

        with pytest.raises(ImageGenerationError, match="No image URL"):
            IconGenerator(mock_client).generate_icon(options)

        mock_client.download.assert_not_called()
        assert list((tmp_path / "icons").iterdir()) == []

    def test_revised_prompt_optional(self, mock_client, options):
        mock_client.generate.return_value = GeneratedImage(url="https://img.example/x.png")

        result = IconGenerator(mock_client).generate_icon(options)

        assert result.revised_prompt is None


class TestIconSlug:
    def test_whitespace_and_case(self):
        assert icon_slug("My  Great\tApp") == "my_great_app"

    def test_path_separators_stay_inside_directory(self):
        assert "/" not in icon_slug("Foo/Bar")
        assert "\\" not in icon_slug("Foo\\Bar")


class TestVariations:
    """One icon per style, failures omitted."""

    def test_default_style_order(self, mock_client, options):
        results = IconGenerator(mock_client).generate_icon_variations(options)

        assert len(results) == 4
        assert list(DEFAULT_VARIATION_STYLES) == ["flat", "gradient", "3d", "minimal"]
        prompts = [c.args[0] for c in mock_client.generate.call_args_list]
        for prompt, style in zip(prompts, DEFAULT_VARIATION_STYLES):
            assert STYLE_CLAUSES[style] in prompt

    def test_failed_style_omitted(self, mock_client, options):
        ok = GeneratedImage(url="https://img.example/icon.png")
        mock_client.generate.side_effect = [
            ok,
            ImageGenerationError("HTTP 500: server error", 500),
            ok,
            ok,
        ]

        generator = IconGenerator(mock_client)
        results = generator.generate_icon_variations(options)

        assert len(results) == 3

    def test_outcomes_name_failed_style(self, mock_client, options):
        ok = GeneratedImage(url="https://img.example/icon.png")
        mock_client.generate.side_effect = [ok, ok, ImageGenerationError("blocked"), ok]

        outcomes = IconGenerator(mock_client).variation_outcomes(options)

        assert [o.style for o in outcomes if not o.ok] == ["3d"]
        assert outcomes[2].error == "blocked"

    def test_custom_styles(self, mock_client, options):
        results = IconGenerator(mock_client).generate_icon_variations(options, styles=["minimal"])

        assert len(results) == 1
        assert STYLE_CLAUSES["minimal"] in results[0].prompt

    def test_original_options_unchanged(self, mock_client, options):
        IconGenerator(mock_client).generate_icon_variations(options)

        assert options.style == "flat"


class TestVariationsWithMalformedResponse:
    """A malformed API body fails only its own style."""

    def _response(self, payload=None, content=b""):
        resp = MagicMock()
        resp.ok = True
        resp.status_code = 200
        resp.content = content
        resp.json.return_value = payload
        return resp

    def test_other_styles_still_returned(self, options):
        good = self._response({"data": [{"url": "https://img.example/icon.png"}]})
        bad = self._response({"data": ["not-an-object"]})

        with patch("appstore_preview.image_client.requests.post", side_effect=[good, bad, good, good]), \
             patch("appstore_preview.image_client.requests.get", return_value=self._response(content=PNG_1X1_BYTES)):
            generator = IconGenerator(OpenAIImageClient("sk-test"))
            outcomes = generator.variation_outcomes(options)

        assert [o.style for o in outcomes if o.ok] == ["flat", "3d", "minimal"]
        assert "Malformed response" in outcomes[1].error
