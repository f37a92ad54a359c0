"""
Unit tests for pageflow/docx_assembler.py - composed pages → DOCX package
"""
from io import BytesIO

import pytest
from docx import Document
from docx.enum.section import WD_ORIENT
from docx.enum.text import WD_ALIGN_PARAGRAPH, WD_LINE_SPACING
from docx.oxml.ns import qn
from docx.shared import Pt, RGBColor, Twips

from conftest import make_png
from pageflow.compositor import BackgroundLayer, ComposedPage, ParagraphDirective, RunStyle
from pageflow.docx_assembler import DocxAssembler, assemble_docx
from pageflow.exceptions import SerializationError


def directive(text, indent=0, spacing=0, alignment="left", **run):
    return ParagraphDirective(
        text=text,
        indent_twips=indent,
        spacing_before_twips=spacing,
        alignment=alignment,
        run=RunStyle(
            font_name=run.get("font_name", "Arial"),
            size_half_points=run.get("size_half_points", 24),
            color_hex=run.get("color_hex", "000000"),
            bold=run.get("bold", False),
            italic=run.get("italic", False),
        ),
    )


def page(index, paragraphs=(), width_twips=11910, height_twips=16845, image=None):
    return ComposedPage(
        index=index,
        width_twips=width_twips,
        height_twips=height_twips,
        background=BackgroundLayer(image=image or make_png(), width_px=794, height_px=1123),
        paragraphs=list(paragraphs),
    )


def reopen(data: bytes):
    return Document(BytesIO(data))


class TestSections:

    def test_one_section_per_page(self):
        doc = reopen(assemble_docx([page(0), page(1), page(2)]))
        assert len(doc.sections) == 3

    def test_page_size_and_zero_margins(self):
        doc = reopen(assemble_docx([page(0), page(1)]))
        for section in doc.sections:
            assert section.page_width == Twips(11910)
            assert section.page_height == Twips(16845)
            assert section.orientation == WD_ORIENT.PORTRAIT
            for margin in (section.top_margin, section.bottom_margin,
                           section.left_margin, section.right_margin):
                assert margin == 0

    def test_landscape_pages(self):
        doc = reopen(assemble_docx([page(0, width_twips=14400, height_twips=8100)]))
        (section,) = doc.sections
        assert section.orientation == WD_ORIENT.LANDSCAPE
        assert section.page_width == Twips(14400)

    def test_title_metadata(self):
        doc = reopen(assemble_docx([page(0)], title="Quarterly Report"))
        assert doc.core_properties.title == "Quarterly Report"


class TestBackground:

    def test_one_background_anchor_per_page(self):
        doc = reopen(assemble_docx([page(0), page(1)]))
        anchors = doc.element.body.findall(".//" + qn("wp:anchor"))
        assert len(anchors) == 2
        for anchor in anchors:
            assert anchor.get("behindDoc") == "1"
            assert anchor.find(qn("wp:wrapNone")) is not None

    def test_background_paragraph_comes_first(self):
        doc = reopen(assemble_docx([page(0, [directive("Hello")])]))
        first, second = doc.paragraphs
        assert first._p.find(".//" + qn("wp:anchor")) is not None
        assert first.text == ""
        assert second.text == "Hello"

    def test_unreadable_image_is_a_serialization_error(self):
        with pytest.raises(SerializationError, match="Failed to serialize DOCX"):
            assemble_docx([page(0, image=b"not an image")])

    def test_no_pages(self):
        with pytest.raises(SerializationError):
            DocxAssembler().assemble([])


class TestTextParagraphs:

    def test_paragraph_count(self):
        pages = [
            page(0, [directive("a"), directive("b")]),
            page(1, [directive("c")]),
            page(2),
        ]
        doc = reopen(assemble_docx(pages))
        assert len(doc.paragraphs) == len(pages) + 3

    def test_text_order(self):
        pages = [page(0, [directive("one"), directive("two")]), page(1, [directive("three")])]
        doc = reopen(assemble_docx(pages))
        assert [p.text for p in doc.paragraphs if p.text] == ["one", "two", "three"]

    def test_positioning(self):
        doc = reopen(assemble_docx([page(0, [directive("x", indent=600, spacing=900)])]))
        fmt = doc.paragraphs[1].paragraph_format
        assert fmt.left_indent == Twips(600)
        assert fmt.space_before == Twips(900)
        assert fmt.space_after == 0

    def test_single_line_spacing(self):
        """Text paragraphs do not inherit the template's 1.15 line spacing."""
        doc = reopen(assemble_docx([page(0, [directive("a"), directive("b")])]))
        for paragraph in doc.paragraphs[1:]:
            fmt = paragraph.paragraph_format
            assert fmt.line_spacing == 1.0
            assert fmt.line_spacing_rule == WD_LINE_SPACING.SINGLE

    def test_run_formatting(self):
        doc = reopen(assemble_docx([page(0, [
            directive("styled", alignment="center", size_half_points=48,
                      color_hex="c8102e", bold=True, italic=True, font_name="Calibri"),
        ])]))
        paragraph = doc.paragraphs[1]
        (run,) = paragraph.runs

        assert paragraph.alignment == WD_ALIGN_PARAGRAPH.CENTER
        assert run.font.name == "Calibri"
        assert run.font.size == Pt(24)
        assert run.font.bold is True
        assert run.font.italic is True
        assert run.font.color.rgb == RGBColor.from_string("C8102E")
        assert run._element.rPr.rFonts.get(qn("w:eastAsia")) == "Calibri"

    def test_fresh_document_per_call(self):
        assembler = DocxAssembler()
        first = reopen(assembler.assemble([page(0, [directive("a")])]))
        second = reopen(assembler.assemble([page(0, [directive("b")])]))
        assert [p.text for p in first.paragraphs] == ["", "a"]
        assert [p.text for p in second.paragraphs] == ["", "b"]
