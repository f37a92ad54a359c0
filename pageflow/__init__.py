"""
PageFlow - HTML → paginated DOCX / PDF

High-fidelity DOCX:
    browser render → flow extraction → pagination → page composition → DOCX
Each page carries a text-free screenshot of its slice of the rendered HTML
behind editable, flow-positioned paragraphs.

Print PDF:
    browser render → print engine → PDF

Usage:
    from pageflow import HighFidelityConverter, convert_html_to_pdf

    docx_bytes = await HighFidelityConverter().convert(html, {"format": "slide"})
    pdf_bytes = await convert_html_to_pdf(html, {"orientation": "landscape"})
"""

from .exceptions import (
    ConversionError,
    HtmlValidationError,
    RenderError,
    SerializationError,
    ConversionCancelled,
)

from .models import (
    StyleSnapshot,
    RawTextNode,
    LayoutItem,
    PageFrame,
    RenderedDocument,
)

from .page_format import (
    PageFormat,
    ConversionOptions,
    A4_PORTRAIT,
    A4_LANDSCAPE,
    SLIDE_16_9,
    resolve_page_format,
)

from .units import px_to_twip, px_to_half_point, px_to_emu

from .flow_extractor import FlowCursor, extract_layout_items
from .paginator import compute_total_height, count_pages, paginate, build_page_frames
from .render_surface import RenderSurface, ClipRegion, Measurement, render_document
from .compositor import ComposedPage, ParagraphDirective, RunStyle, compose_pages
from .docx_assembler import DocxAssembler, assemble_docx
from .validation import validate_html

from .hf_converter import (
    HighFidelityConverter,
    ConversionReport,
    convert_html_to_docx_hf,
    convert_html_file_to_docx_hf,
)

from .pdf_converter import convert_html_to_pdf, convert_html_file_to_pdf

__all__ = [
    # Errors
    "ConversionError",
    "HtmlValidationError",
    "RenderError",
    "SerializationError",
    "ConversionCancelled",
    # Model
    "StyleSnapshot",
    "RawTextNode",
    "LayoutItem",
    "PageFrame",
    "RenderedDocument",
    "PageFormat",
    "ConversionOptions",
    "A4_PORTRAIT",
    "A4_LANDSCAPE",
    "SLIDE_16_9",
    "resolve_page_format",
    # Units
    "px_to_twip",
    "px_to_half_point",
    "px_to_emu",
    # Pipeline stages
    "FlowCursor",
    "extract_layout_items",
    "compute_total_height",
    "count_pages",
    "paginate",
    "build_page_frames",
    "RenderSurface",
    "ClipRegion",
    "Measurement",
    "render_document",
    "ComposedPage",
    "ParagraphDirective",
    "RunStyle",
    "compose_pages",
    "DocxAssembler",
    "assemble_docx",
    "validate_html",
    # Entry points
    "HighFidelityConverter",
    "ConversionReport",
    "convert_html_to_docx_hf",
    "convert_html_file_to_docx_hf",
    "convert_html_to_pdf",
    "convert_html_file_to_pdf",
]
