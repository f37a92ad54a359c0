"""
Page Compositor

Converts each PageFrame into flow directives anchored at the page origin:
a full-bleed background layer followed by one paragraph per LayoutItem.

Positioning uses only what a flow document offers:
- horizontal position -> left indent (twips)
- vertical position   -> spacing before (twips); the first paragraph of a
  page measures from the page top, later ones from the previous item
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from config.logging_config import get_logger
from config.settings import Settings, settings as default_settings
from .models import LayoutItem, PageFrame
from .units import px_to_half_point, px_to_twip

logger = get_logger(__name__)


@dataclass(frozen=True)
class RunStyle:
    """Character formatting of a single text run"""
    font_name: str
    size_half_points: int
    color_hex: str
    bold: bool = False
    italic: bool = False


@dataclass(frozen=True)
class ParagraphDirective:
    """One flow paragraph holding exactly one styled run"""
    text: str
    indent_twips: int
    spacing_before_twips: int
    alignment: str
    run: RunStyle


@dataclass(frozen=True)
class BackgroundLayer:
    """Full-page raster placed behind the text"""
    image: bytes
    width_px: int
    height_px: int


@dataclass
class ComposedPage:
    index: int
    width_twips: int
    height_twips: int
    background: BackgroundLayer
    paragraphs: List[ParagraphDirective] = field(default_factory=list)


def spacing_before_px(item: LayoutItem, position: int, page_top: float) -> float:
    """
    Vertical offset of an item in its page's flow.

    The first item has no predecessor on the page, so it is placed by its
    distance from the page top, floored at zero for items whose top starts
    on the previous page.
    """
    if position == 0:
        return max(0.0, item.y - page_top)
    return item.vertical_gap


def compose_paragraph(
    item: LayoutItem,
    position: int,
    page_top: float,
    font_name: str,
) -> ParagraphDirective:
    style = item.style
    return ParagraphDirective(
        text=item.text,
        indent_twips=px_to_twip(item.x),
        spacing_before_twips=px_to_twip(spacing_before_px(item, position, page_top)),
        alignment=style.alignment,
        run=RunStyle(
            font_name=font_name,
            size_half_points=px_to_half_point(style.font_size_px),
            color_hex=style.color_hex,
            bold=style.bold,
            italic=style.italic,
        ),
    )


def compose_page(frame: PageFrame, font_name: str) -> ComposedPage:
    width_px, height_px = frame.dimensions
    page_top = frame.top_px
    return ComposedPage(
        index=frame.index,
        width_twips=frame.page_format.width_twips,
        height_twips=frame.page_format.height_twips,
        background=BackgroundLayer(
            image=frame.background_image,
            width_px=width_px,
            height_px=height_px,
        ),
        paragraphs=[
            compose_paragraph(item, position, page_top, font_name)
            for position, item in enumerate(frame.items)
        ],
    )


def compose_pages(
    frames: Sequence[PageFrame],
    config: Optional[Settings] = None
) -> List[ComposedPage]:
    """Compose every frame with the configured fallback font"""
    config = config or default_settings
    pages = [compose_page(frame, config.fallback_font) for frame in frames]
    logger.debug(
        f"Composed {len(pages)} page(s), {sum(len(p.paragraphs) for p in pages)} paragraph(s)"
    )
    return pages
