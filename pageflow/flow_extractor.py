"""
Flow Extractor

Turns the raw text-node list measured in the browser into LayoutItems:
a pure, order-preserving filter + transform with no knowledge of pages.

The running "last bottom" used for vertical gaps is an explicit FlowCursor
threaded through the extraction, so a sequence can be extracted in batches
by passing the same cursor along.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from config.constants import NON_RENDERED_TAGS
from config.logging_config import get_logger
from .models import LayoutItem, RawTextNode, StyleSnapshot
from .style_mapping import snapshot_style

logger = get_logger(__name__)


@dataclass
class FlowCursor:
    """Bottom edge of the last accepted item"""
    last_bottom: float = 0.0

    def gap_to(self, top: float) -> float:
        return max(0.0, top - self.last_bottom)

    def advance(self, item: LayoutItem) -> None:
        self.last_bottom = item.bottom


def has_area(node: RawTextNode) -> bool:
    return node.width != 0 and node.height != 0


def is_candidate(node: RawTextNode) -> bool:
    """Non-empty text whose parent element actually renders text"""
    if not node.text or not node.text.strip():
        return False
    if not node.parent_tag:
        return False
    return node.parent_tag.upper() not in NON_RENDERED_TAGS


def is_visible(node: RawTextNode, style: StyleSnapshot) -> bool:
    return has_area(node) and style.is_rendered


def accept_node(node: RawTextNode, cursor: FlowCursor) -> Optional[LayoutItem]:
    """
    Convert one raw node, or return None when it is filtered out.

    Only accepted nodes move the cursor.
    """
    if not is_candidate(node):
        return None

    style = snapshot_style(node.style)
    if not is_visible(node, style):
        return None

    item = LayoutItem(
        text=node.text.strip(),
        x=node.x,
        y=node.y,
        width=node.width,
        height=node.height,
        vertical_gap=cursor.gap_to(node.y),
        style=style,
    )
    cursor.advance(item)
    return item


def extract_layout_items(
    nodes: Iterable[RawTextNode],
    cursor: Optional[FlowCursor] = None
) -> List[LayoutItem]:
    """
    Filter and convert raw nodes, keeping their visual order.

    Args:
        nodes: Raw text nodes in traversal order
        cursor: Gap accumulator to continue from (fresh one if None)

    Returns:
        LayoutItems for every visible, non-empty node
    """
    cursor = cursor if cursor is not None else FlowCursor()
    items: List[LayoutItem] = []
    seen = 0

    for node in nodes:
        seen += 1
        item = accept_node(node, cursor)
        if item is not None:
            items.append(item)

    logger.debug(f"Flow extraction kept {len(items)} of {seen} text node(s)")
    return items
