"""
Unit tests for pageflow/cli.py - command-line entry point
"""
from unittest.mock import AsyncMock, patch

import pytest

from pageflow import cli
from pageflow.exceptions import RenderError


@pytest.fixture
def converters():
    """Replace both file converters with mocks returning the output path"""
    with patch.object(cli, "convert_html_file_to_docx_hf", new=AsyncMock(side_effect=lambda i, o, opts: o)) as docx, \
         patch.object(cli, "convert_html_file_to_pdf", new=AsyncMock(side_effect=lambda i, o, opts: o)) as pdf:
        yield docx, pdf


@pytest.fixture
def html_file(temp_dir, sample_html):
    path = temp_dir / "report.html"
    path.write_text(sample_html, encoding="utf-8")
    return path


class TestCli:

    def test_defaults_to_docx_next_to_input(self, converters, html_file):
        docx, pdf = converters
        assert cli.main([str(html_file)]) == 0

        docx.assert_awaited_once()
        pdf.assert_not_awaited()
        _, output, options = docx.await_args.args
        assert output == html_file.with_suffix(".docx")
        assert options.format is None
        assert options.orientation == "portrait"

    def test_target_from_output_suffix(self, converters, html_file, temp_dir):
        docx, pdf = converters
        assert cli.main([str(html_file), "-o", str(temp_dir / "out.pdf")]) == 0
        pdf.assert_awaited_once()
        docx.assert_not_awaited()

    def test_explicit_target_wins(self, converters, html_file, temp_dir):
        docx, _ = converters
        assert cli.main([str(html_file), "-o", str(temp_dir / "out.pdf"), "--target", "docx"]) == 0
        docx.assert_awaited_once()

    def test_options(self, converters, html_file):
        docx, _ = converters
        cli.main([str(html_file), "--format", "slide", "--orientation", "landscape", "--title", "Deck"])
        options = docx.await_args.args[2]
        assert options.is_slide
        assert options.is_landscape
        assert options.title == "Deck"

    def test_missing_input(self, converters, temp_dir, capsys):
        docx, _ = converters
        assert cli.main([str(temp_dir / "missing.html")]) == 1
        assert "not found" in capsys.readouterr().out
        docx.assert_not_awaited()

    def test_conversion_error(self, html_file, capsys):
        failing = AsyncMock(side_effect=RenderError("Failed to create high-fidelity document: crashed"))
        with patch.object(cli, "convert_html_file_to_docx_hf", new=failing):
            assert cli.main([str(html_file)]) == 1
        assert "crashed" in capsys.readouterr().out

    def test_rejects_unknown_format(self, html_file):
        with pytest.raises(SystemExit):
            cli.main([str(html_file), "--format", "A3"])
