#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
High-Fidelity HTML → DOCX Converter

Pipeline (strictly downstream, one request at a time):

    validate → render (measure + hide text + capture) → paginate
             → composite → assemble

Every request acquires its own render surface and releases it on every
exit path. Render failures are wrapped as RenderError with a stable
prefix; validation and serialization errors pass through unchanged.

Usage:
    converter = HighFidelityConverter()
    docx_bytes = await converter.convert(html, ConversionOptions(format="slide"))
"""

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Any, AsyncContextManager, Callable, Dict, Optional, Tuple, Union

from config.logging_config import get_logger
from config.settings import Settings, settings as default_settings
from .compositor import compose_pages
from .docx_assembler import DocxAssembler
from .exceptions import ConversionError, RenderError
from .page_format import ConversionOptions, resolve_page_format
from .paginator import build_page_frames
from .render_surface import RenderSurface, raise_if_cancelled, render_document
from .validation import validate_html

logger = get_logger(__name__)

RENDER_ERROR_PREFIX = "Failed to create high-fidelity document"

SurfaceFactory = Callable[[], AsyncContextManager[RenderSurface]]
OptionsLike = Union[ConversionOptions, Dict[str, Any], None]


@dataclass
class ConversionReport:
    """Summary of one high-fidelity conversion"""
    page_count: int
    item_count: int
    total_height: float
    page_width_px: int
    page_height_px: int
    output_bytes: int


def _coerce_options(options: OptionsLike) -> ConversionOptions:
    if isinstance(options, ConversionOptions):
        return options
    return ConversionOptions.from_dict(options)


class HighFidelityConverter:
    """
    Converts HTML to a paginated DOCX whose pages are a text-free screenshot
    background overlaid with editable, flow-positioned text.
    """

    def __init__(
        self,
        surface_factory: Optional[SurfaceFactory] = None,
        config: Optional[Settings] = None,
    ):
        self.config = config or default_settings
        if surface_factory is None:
            from .playwright_surface import PlaywrightRenderSurface

            def surface_factory():
                return PlaywrightRenderSurface(self.config)

        self.surface_factory = surface_factory

    async def convert(
        self,
        html: str,
        options: OptionsLike = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> bytes:
        """Convert HTML to DOCX bytes."""
        data, _ = await self.convert_with_report(html, options, cancel_event)
        return data

    async def convert_with_report(
        self,
        html: str,
        options: OptionsLike = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> Tuple[bytes, ConversionReport]:
        """
        Convert HTML to DOCX bytes and report what was produced.

        Raises:
            HtmlValidationError: Input rejected before rendering
            RenderError: Browser failure (wrapped, original chained)
            SerializationError: DOCX could not be written
            ConversionCancelled: cancel_event was set at a stage boundary
        """
        validate_html(html)
        options = _coerce_options(options)
        page_format = resolve_page_format(options)

        logger.info(
            f"Starting high-fidelity conversion ({page_format.name}, "
            f"{page_format.width_px}x{page_format.height_px}px)"
        )

        try:
            async with self.surface_factory() as surface:
                rendered = await render_document(surface, html, page_format, cancel_event)
        except ConversionError:
            raise
        except Exception as e:
            logger.error(f"High-fidelity render failed: {e}")
            raise RenderError(f"{RENDER_ERROR_PREFIX}: {e}") from e

        raise_if_cancelled(cancel_event, "composition")
        try:
            frames = build_page_frames(rendered)
            pages = compose_pages(frames, self.config)
        except ValueError as e:
            logger.error(f"Page composition failed: {e}")
            raise RenderError(f"{RENDER_ERROR_PREFIX}: {e}") from e

        raise_if_cancelled(cancel_event, "assembly")
        logger.info("Assembling high-fidelity Word document...")
        data = DocxAssembler().assemble(pages, title=options.title)

        report = ConversionReport(
            page_count=len(frames),
            item_count=len(rendered.items),
            total_height=rendered.total_height,
            page_width_px=page_format.width_px,
            page_height_px=page_format.height_px,
            output_bytes=len(data),
        )
        logger.info(
            f"High-fidelity document generated: {report.page_count} page(s), "
            f"{report.item_count} item(s), {len(data) / 1024:.1f} KB"
        )
        return data, report


async def convert_html_to_docx_hf(
    html: str,
    options: OptionsLike = None,
    config: Optional[Settings] = None,
) -> bytes:
    """Convert an HTML string with a fresh Playwright-backed converter"""
    return await HighFidelityConverter(config=config).convert(html, options)


async def convert_html_file_to_docx_hf(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
    options: OptionsLike = None,
    converter: Optional[HighFidelityConverter] = None,
) -> Path:
    """Read an HTML file, convert it and write the DOCX to output_path"""
    html = Path(input_path).read_text(encoding="utf-8")
    converter = converter or HighFidelityConverter()
    data = await converter.convert(html, options)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(data)
    logger.info(f"Converted {input_path} → {output_path}")
    return output_path
