"""
Paginator

Partitions the LayoutItem sequence into fixed-height pages.

Assignment is by vertical center: an item whose center lies in
[p * H, (p + 1) * H) belongs to page p. A straddling item goes wholly to
one page; its background may still be split across two page captures.
"""

import math
from typing import List, Sequence

from config.logging_config import get_logger
from .models import LayoutItem, PageFrame, RenderedDocument

logger = get_logger(__name__)


def compute_total_height(
    page_height: float,
    scroll_height: float,
    items: Sequence[LayoutItem]
) -> float:
    """Largest of one page, the measured scroll height and the lowest item bottom"""
    lowest = max((item.bottom for item in items), default=0.0)
    return max(float(page_height), float(scroll_height or 0.0), lowest)


def count_pages(total_height: float, page_height: float) -> int:
    if page_height <= 0:
        raise ValueError(f"Page height must be positive, got {page_height}")
    return max(1, math.ceil(total_height / page_height))


def page_index_for(item: LayoutItem, page_height: float, page_count: int) -> int:
    """
    Page of an item by its vertical center.

    Centers above the document origin or below the last page are clamped to
    the first/last page so that no item is lost.
    """
    index = math.floor(item.center_y / page_height)
    return min(max(index, 0), page_count - 1)


def paginate(
    items: Sequence[LayoutItem],
    total_height: float,
    page_height: float
) -> List[List[LayoutItem]]:
    """
    Assign each item to exactly one page.

    Returns:
        One list per page, items kept in their original order
    """
    page_count = count_pages(total_height, page_height)
    pages: List[List[LayoutItem]] = [[] for _ in range(page_count)]

    for item in items:
        pages[page_index_for(item, page_height, page_count)].append(item)

    return pages


def build_page_frames(rendered: RenderedDocument) -> List[PageFrame]:
    """Pair each page's item subset with its background capture"""
    page_height = rendered.page_format.height_px
    buckets = paginate(rendered.items, rendered.total_height, page_height)

    if len(buckets) != len(rendered.page_images):
        raise ValueError(
            f"Expected {len(buckets)} page capture(s), got {len(rendered.page_images)}"
        )

    frames = [
        PageFrame(
            index=index,
            page_format=rendered.page_format,
            background_image=image,
            items=bucket,
        )
        for index, (bucket, image) in enumerate(zip(buckets, rendered.page_images))
    ]
    logger.debug(f"Paginated {len(rendered.items)} item(s) into {len(frames)} page(s)")
    return frames
