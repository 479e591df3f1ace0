from pathlib import Path
from unittest.mock import MagicMock

import pytest

from docextract.exceptions import InferenceError
from docextract.inference.client_base import InlineMedia
from docextract.inference.image_analyzer import ImageAnalyzer, parse_sections


class TestParseSections:
    def test_both_sections(self) -> None:
        result = parse_sections("## Extracted Text\nHello\n## Description\nA photo")
        assert result.text == "Hello"
        assert result.description == "A photo"

    def test_markers_are_case_insensitive(self) -> None:
        result = parse_sections("## EXTRACTED TEXT\nPrice: $40\n\n## description\nA receipt")
        assert result.text == "Price: $40"
        assert result.description == "A receipt"

    def test_only_text_section(self) -> None:
        result = parse_sections("Intro\n## Extracted Text\n  Line one\nLine two  ")
        assert result.text == "Line one\nLine two"
        assert result.description == ""

    def test_only_description_section(self) -> None:
        result = parse_sections("## Description\nNo text, just a guitar")
        assert result.text == ""
        assert result.description == "No text, just a guitar"

    def test_no_markers_keeps_whole_response_as_text(self) -> None:
        raw = "The model ignored the format.\nStill useful."
        result = parse_sections(raw)
        assert result.text == raw
        assert result.description == ""

    def test_empty_sections_fall_back_to_raw_response(self) -> None:
        raw = "## Extracted Text\n\n## Description\n"
        assert parse_sections(raw).text == raw


class TestImageAnalyzer:
    def test_sends_image_and_prompt_with_document_name(self) -> None:
        client = MagicMock()
        client.generate.return_value = "## Extracted Text\nHi\n## Description\nA sign"
        analyzer = ImageAnalyzer(client=client, model="m", temperature=0.1, max_tokens=100)

        result = analyzer.analyze(b"\x89PNG", "image/png", "Headstock")

        assert result.text == "Hi"
        assert result.description == "A sign"
        kwargs = client.generate.call_args.kwargs
        assert kwargs["model"] == "m"
        assert kwargs["temperature"] == 0.1
        assert kwargs["max_tokens"] == 100
        assert kwargs["media"] == [InlineMedia(data=b"\x89PNG", media_type="image/png")]
        assert 'titled "Headstock"' in kwargs["prompt"]
        assert "## Extracted Text" in kwargs["prompt"]
        assert "## Description" in kwargs["prompt"]

    def test_custom_prompt_template(self, tmp_path: Path) -> None:
        template = tmp_path / "prompt.txt"
        template.write_text("Describe {document_name}", encoding="utf-8")
        client = MagicMock()
        client.generate.return_value = "plain"
        analyzer = ImageAnalyzer(client=client, model="m", prompt_template_path=template)

        analyzer.analyze(b"img", "image/jpeg", "Doc")

        assert client.generate.call_args.kwargs["prompt"] == "Describe Doc"

    def test_missing_prompt_template_raises(self, tmp_path: Path) -> None:
        with pytest.raises(InferenceError, match="Failed to load prompt template"):
            ImageAnalyzer(
                client=MagicMock(),
                model="m",
                prompt_template_path=tmp_path / "missing.txt",
            )
