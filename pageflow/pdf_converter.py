#!/usr/bin/env python3
"""
Print-to-PDF Converter

Renders HTML in headless Chromium and uses the browser's print engine to
produce a paginated PDF. Unlike the high-fidelity DOCX path, pagination is
left to the print layout; injected print rules keep blocks together and
unclip scroll containers.

The produced PDF is opened with PyMuPDF before it is returned, so a
truncated or empty document is reported instead of handed to the caller.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

import fitz  # PyMuPDF

from config.constants import (
    PDF_DEFAULT_FORMAT,
    PDF_VIEWPORT_HEIGHT,
    PDF_VIEWPORT_WIDTH,
    SLIDE_PDF_HEIGHT,
    SLIDE_PDF_WIDTH,
)
from config.logging_config import get_logger
from config.settings import Settings, settings as default_settings
from .exceptions import ConversionError, RenderError, SerializationError
from .page_format import ConversionOptions
from .validation import validate_html

logger = get_logger(__name__)

PDF_ERROR_PREFIX = "Failed to convert HTML to PDF"

PRINT_CSS = """
@media print {
    html, body, #root {
        height: auto !important;
        min-height: auto !important;
        max-height: none !important;
        overflow: visible !important;
    }

    [class*="overflow"], [class*="scroll"], [style*="overflow"] {
        overflow: visible !important;
    }

    table, img, svg, pre, blockquote, tr, ul, ol, li, .prevent-break, .card {
        page-break-inside: avoid !important;
        break-inside: avoid !important;
    }

    h1, h2, h3, h4, h5, h6 {
        page-break-after: avoid !important;
        break-after: avoid !important;
        page-break-inside: avoid !important;
    }

    * {
        -webkit-print-color-adjust: exact !important;
        print-color-adjust: exact !important;
    }
}
"""

ZERO_MARGIN = {"top": "0", "right": "0", "bottom": "0", "left": "0"}


def build_pdf_options(options: ConversionOptions, config: Optional[Settings] = None) -> Dict[str, Any]:
    """
    Keyword arguments for the browser's print-to-PDF call.

    Slides print at 10in x 5.625in with no margins; everything else uses a
    named paper format with optional landscape orientation.
    """
    config = config or default_settings
    margin = config.pdf_margin
    pdf_options: Dict[str, Any] = {
        "print_background": True,
        "prefer_css_page_size": True,
        "display_header_footer": False,
        "margin": options.margin or {"top": margin, "right": margin, "bottom": margin, "left": margin},
    }

    if options.is_slide:
        pdf_options["width"] = SLIDE_PDF_WIDTH
        pdf_options["height"] = SLIDE_PDF_HEIGHT
        pdf_options["landscape"] = True
        pdf_options["margin"] = dict(ZERO_MARGIN)
    else:
        pdf_options["format"] = options.format or PDF_DEFAULT_FORMAT
        if options.is_landscape:
            pdf_options["landscape"] = True

    return pdf_options


def verify_pdf(data: bytes) -> int:
    """
    Open a PDF buffer and return its page count.

    Raises:
        SerializationError: If the buffer is not a readable PDF with pages
    """
    try:
        with fitz.open(stream=data, filetype="pdf") as pdf:
            page_count = pdf.page_count
    except Exception as e:
        raise SerializationError(f"Generated PDF is not readable: {e}") from e

    if page_count < 1:
        raise SerializationError("Generated PDF has no pages")
    return page_count


async def convert_html_to_pdf(
    html: str,
    options: Union[ConversionOptions, Dict[str, Any], None] = None,
    config: Optional[Settings] = None,
) -> bytes:
    """
    Convert HTML to PDF bytes through the browser print engine.

    Raises:
        HtmlValidationError: Input rejected before rendering
        RenderError: Browser failure (wrapped, original chained)
        SerializationError: Output is not a usable PDF
    """
    from .playwright_surface import open_browser_page

    validate_html(html)
    if not isinstance(options, ConversionOptions):
        options = ConversionOptions.from_dict(options)
    config = config or default_settings

    viewport = {
        "width": options.width or PDF_VIEWPORT_WIDTH,
        "height": options.height or PDF_VIEWPORT_HEIGHT,
    }

    try:
        async with open_browser_page(viewport, config) as page:
            logger.info("Loading page for print...")
            await page.set_content(html, wait_until="load", timeout=config.navigation_timeout_ms)
            await page.add_style_tag(content=PRINT_CSS)
            await page.evaluate("document.fonts.ready.then(() => true)")

            logger.info("Generating PDF...")
            data = await page.pdf(**build_pdf_options(options, config))
    except ConversionError:
        raise
    except Exception as e:
        logger.error(f"PDF conversion error: {e}")
        raise RenderError(f"{PDF_ERROR_PREFIX}: {e}") from e

    page_count = verify_pdf(data)
    logger.info(f"PDF generated: {page_count} page(s), {len(data) / 1024:.1f} KB")
    return data


async def convert_html_file_to_pdf(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
    options: Union[ConversionOptions, Dict[str, Any], None] = None,
    config: Optional[Settings] = None,
) -> Path:
    """Read an HTML file, convert it and write the PDF to output_path"""
    html = Path(input_path).read_text(encoding="utf-8")
    data = await convert_html_to_pdf(html, options, config)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(data)
    logger.info(f"Converted {input_path} → {output_path}")
    return output_path
