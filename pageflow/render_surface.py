"""
Render Surface

Narrow capability interface over an external rendering engine, and the
render stage that drives it:

    load(html, page_format)   viewport fixed to the page size, content loaded
    measure()                 raw text nodes + scroll height
    hide_text(min_height)     paint all text transparent, no reflow; pad the
                              document to min_height so every clip is full size
    capture(clip)             raster bytes of one document region

Implementations are async context managers; leaving the context releases
the engine on every exit path. See playwright_surface.py for the browser
implementation and tests/conftest.py for a scripted in-memory one.
"""

import asyncio
from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol

from config.logging_config import get_logger
from .exceptions import ConversionCancelled
from .flow_extractor import extract_layout_items
from .models import RawTextNode, RenderedDocument
from .page_format import PageFormat
from .paginator import compute_total_height, count_pages

logger = get_logger(__name__)


@dataclass(frozen=True)
class ClipRegion:
    """Document-space rectangle in CSS pixels"""
    x: float
    y: float
    width: float
    height: float

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


@dataclass
class Measurement:
    """Raw measurement of a loaded document"""
    nodes: List[RawTextNode]
    scroll_height: float


class RenderSurface(Protocol):
    """Capabilities the pipeline needs from a rendering engine"""

    async def load(self, html: str, page_format: PageFormat) -> None:
        ...

    async def measure(self) -> Measurement:
        ...

    async def hide_text(self, min_height: float) -> None:
        ...

    async def capture(self, clip: ClipRegion) -> bytes:
        ...


def raise_if_cancelled(cancel_event: Optional[asyncio.Event], stage: str) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise ConversionCancelled(f"Conversion cancelled before {stage}")


def page_clips(page_format: PageFormat, page_count: int) -> List[ClipRegion]:
    """One full-page clip per vertical slice of the document"""
    return [
        ClipRegion(
            x=0,
            y=index * page_format.height_px,
            width=page_format.width_px,
            height=page_format.height_px,
        )
        for index in range(page_count)
    ]


async def render_document(
    surface: RenderSurface,
    html: str,
    page_format: PageFormat,
    cancel_event: Optional[asyncio.Event] = None,
) -> RenderedDocument:
    """
    Run the render stage on an acquired surface.

    Measures first, then hides text once and captures every page slice in
    order on the same document snapshot.
    """
    raise_if_cancelled(cancel_event, "render")
    await surface.load(html, page_format)

    logger.info("Extracting document flow...")
    measurement = await surface.measure()
    items = extract_layout_items(measurement.nodes)

    total_height = compute_total_height(page_format.height_px, measurement.scroll_height, items)
    page_count = count_pages(total_height, page_format.height_px)
    logger.info(
        f"Document will be {page_count} page(s), total height {total_height:.0f}px, "
        f"{len(items)} text item(s)"
    )

    # Captures are clipped to the document, so the last slice needs room below
    await surface.hide_text(page_count * page_format.height_px)

    logger.info("Capturing background images...")
    page_images: List[bytes] = []
    for index, clip in enumerate(page_clips(page_format, page_count)):
        raise_if_cancelled(cancel_event, f"capture of page {index + 1}")
        page_images.append(await surface.capture(clip))

    return RenderedDocument(
        page_format=page_format,
        items=items,
        total_height=total_height,
        page_images=page_images,
    )
