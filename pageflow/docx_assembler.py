#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
DOCX Document Assembler
=======================

Serializes composed pages into a Word document:
- one section per page, page size from the page format, zero margins
- first paragraph of each section anchors the page background image
  (floating, behind text, pinned to the page origin)
- then one paragraph per text run, positioned with indent/spacing only

Sections are closed the way Word does it: the section properties of every
page but the last ride on that page's final paragraph, the last page uses
the body-level properties.
"""

from copy import deepcopy
from io import BytesIO
from typing import Optional, Sequence

from docx import Document
from docx.enum.section import WD_ORIENT, WD_SECTION
from docx.enum.text import WD_ALIGN_PARAGRAPH, WD_LINE_SPACING
from docx.oxml import parse_xml
from docx.oxml.ns import nsdecls, qn
from docx.section import Section
from docx.shared import Pt, RGBColor, Twips

from config.logging_config import get_logger
from .compositor import BackgroundLayer, ComposedPage, ParagraphDirective
from .exceptions import SerializationError
from .units import px_to_emu

logger = get_logger(__name__)


ALIGNMENT_MAP = {
    "left": WD_ALIGN_PARAGRAPH.LEFT,
    "center": WD_ALIGN_PARAGRAPH.CENTER,
    "right": WD_ALIGN_PARAGRAPH.RIGHT,
    "justify": WD_ALIGN_PARAGRAPH.JUSTIFY,
}

_PICTURE_URI = "http://schemas.openxmlformats.org/drawingml/2006/picture"

# Floating picture pinned at the page origin, behind the text layer
_BACKGROUND_RUN_XML = (
    '<w:r {nsdecls}>'
    '<w:drawing>'
    '<wp:anchor distT="0" distB="0" distL="0" distR="0" simplePos="0"'
    ' relativeHeight="{z_order}" behindDoc="1" locked="1" layoutInCell="1" allowOverlap="1">'
    '<wp:simplePos x="0" y="0"/>'
    '<wp:positionH relativeFrom="page"><wp:posOffset>0</wp:posOffset></wp:positionH>'
    '<wp:positionV relativeFrom="page"><wp:posOffset>0</wp:posOffset></wp:positionV>'
    '<wp:extent cx="{cx}" cy="{cy}"/>'
    '<wp:effectExtent l="0" t="0" r="0" b="0"/>'
    '<wp:wrapNone/>'
    '<wp:docPr id="{shape_id}" name="Page Background {page_number}"/>'
    '<wp:cNvGraphicFramePr><a:graphicFrameLocks noChangeAspect="1"/></wp:cNvGraphicFramePr>'
    '<a:graphic>'
    '<a:graphicData uri="{uri}">'
    '<pic:pic>'
    '<pic:nvPicPr>'
    '<pic:cNvPr id="{shape_id}" name="{filename}"/>'
    '<pic:cNvPicPr/>'
    '</pic:nvPicPr>'
    '<pic:blipFill>'
    '<a:blip r:embed="{rel_id}"/>'
    '<a:stretch><a:fillRect/></a:stretch>'
    '</pic:blipFill>'
    '<pic:spPr>'
    '<a:xfrm><a:off x="0" y="0"/><a:ext cx="{cx}" cy="{cy}"/></a:xfrm>'
    '<a:prstGeom prst="rect"><a:avLst/></a:prstGeom>'
    '</pic:spPr>'
    '</pic:pic>'
    '</a:graphicData>'
    '</a:graphic>'
    '</wp:anchor>'
    '</w:drawing>'
    '</w:r>'
)


class DocxAssembler:
    """
    Builds one DOCX package from composed pages.

    A new assembler (or a new call to `assemble`) starts from a fresh
    document; nothing is shared between conversions.
    """

    def __init__(self):
        self.doc = None
        self._section_template = None

    def assemble(self, pages: Sequence[ComposedPage], title: Optional[str] = None) -> bytes:
        """
        Serialize pages to DOCX bytes.

        Raises:
            SerializationError: If the package cannot be built or written
        """
        if not pages:
            raise SerializationError("Cannot assemble a document without pages")

        try:
            self.doc = Document()
            self._section_template = deepcopy(self.doc.element.body.get_or_add_sectPr())
            if title:
                self.doc.core_properties.title = title

            last = len(pages) - 1
            for position, page in enumerate(pages):
                self._add_page(page, is_last=position == last)

            buffer = BytesIO()
            self.doc.save(buffer)
        except SerializationError:
            raise
        except Exception as e:
            logger.error(f"DOCX serialization failed: {e}")
            raise SerializationError(f"Failed to serialize DOCX document: {e}") from e

        data = buffer.getvalue()
        logger.info(f"Assembled DOCX: {len(pages)} page(s), {len(data) / 1024:.1f} KB")
        return data

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------

    def _add_page(self, page: ComposedPage, is_last: bool) -> None:
        last_paragraph = self._add_background(page.index, page.background)
        for directive in page.paragraphs:
            last_paragraph = self._add_text_paragraph(directive)

        if is_last:
            sectPr = self.doc.element.body.get_or_add_sectPr()
        else:
            sectPr = deepcopy(self._section_template)
            last_paragraph._p.set_sectPr(sectPr)

        self._apply_page_geometry(Section(sectPr, self.doc.part), page)

    def _apply_page_geometry(self, section: Section, page: ComposedPage) -> None:
        section.start_type = WD_SECTION.NEW_PAGE
        section.orientation = (
            WD_ORIENT.LANDSCAPE if page.width_twips > page.height_twips else WD_ORIENT.PORTRAIT
        )
        section.page_width = Twips(page.width_twips)
        section.page_height = Twips(page.height_twips)

        # Positions are carried by indent/spacing; page margins would double-count
        section.top_margin = Twips(0)
        section.bottom_margin = Twips(0)
        section.left_margin = Twips(0)
        section.right_margin = Twips(0)
        section.header_distance = Twips(0)
        section.footer_distance = Twips(0)
        section.gutter = Twips(0)

    # ------------------------------------------------------------------
    # Paragraphs
    # ------------------------------------------------------------------

    def _add_background(self, index: int, layer: BackgroundLayer):
        """Paragraph holding the page image; takes (almost) no vertical room"""
        paragraph = self.doc.add_paragraph()
        fmt = paragraph.paragraph_format
        fmt.space_before = Pt(0)
        fmt.space_after = Pt(0)
        fmt.line_spacing_rule = WD_LINE_SPACING.EXACTLY
        fmt.line_spacing = Pt(1)

        rel_id, image = self.doc.part.get_or_add_image(BytesIO(layer.image))
        run_xml = _BACKGROUND_RUN_XML.format(
            nsdecls=nsdecls("w", "wp", "a", "pic", "r"),
            z_order=index,
            cx=px_to_emu(layer.width_px),
            cy=px_to_emu(layer.height_px),
            shape_id=index + 1,
            page_number=index + 1,
            uri=_PICTURE_URI,
            filename=f"page-{index + 1}.{image.ext}",
            rel_id=rel_id,
        )
        paragraph._p.append(parse_xml(run_xml))
        return paragraph

    def _add_text_paragraph(self, directive: ParagraphDirective):
        paragraph = self.doc.add_paragraph()
        paragraph.alignment = ALIGNMENT_MAP.get(directive.alignment, WD_ALIGN_PARAGRAPH.LEFT)

        fmt = paragraph.paragraph_format
        fmt.left_indent = Twips(directive.indent_twips)
        fmt.space_before = Twips(directive.spacing_before_twips)
        fmt.space_after = Twips(0)
        # Spacing-before assumes each line is exactly as tall as its text
        fmt.line_spacing = 1.0

        run = paragraph.add_run(directive.text)
        style = directive.run
        font = run.font
        font.name = style.font_name
        run._element.rPr.rFonts.set(qn('w:eastAsia'), style.font_name)
        font.size = Pt(style.size_half_points / 2)
        font.bold = style.bold
        font.italic = style.italic
        font.color.rgb = RGBColor.from_string(style.color_hex.upper())
        return paragraph


def assemble_docx(pages: Sequence[ComposedPage], title: Optional[str] = None) -> bytes:
    """Convenience wrapper around DocxAssembler"""
    return DocxAssembler().assemble(pages, title=title)
