"""
Data model of the page-flow pipeline.

RawTextNode   - one text node as reported by the browser, untouched
StyleSnapshot - typed view of the computed style of a text node's parent
LayoutItem    - one visible text run with geometry, style and vertical gap
PageFrame     - one fixed-size output page: background raster + items
RenderedDocument - everything the render surface hands downstream
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .page_format import PageFormat


@dataclass(frozen=True)
class StyleSnapshot:
    """Resolved style of one text run"""
    font_size_px: float
    font_family: str
    color_hex: str
    bold: bool = False
    italic: bool = False
    alignment: str = "left"  # left | center | right | justify

    # Visibility inputs
    display: str = "inline"
    visibility: str = "visible"
    opacity: float = 1.0

    @property
    def is_rendered(self) -> bool:
        return self.display != "none" and self.visibility != "hidden" and self.opacity != 0


@dataclass
class RawTextNode:
    """A text node and its parent's computed style, as measured in the browser"""
    text: str
    parent_tag: Optional[str]
    x: float
    y: float
    width: float
    height: float
    style: Optional[Dict[str, Any]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RawTextNode':
        rect = data.get("rect") or {}
        return cls(
            text=data.get("text") or "",
            parent_tag=data.get("parentTag"),
            x=float(rect.get("x", 0.0)),
            y=float(rect.get("y", 0.0)),
            width=float(rect.get("width", 0.0)),
            height=float(rect.get("height", 0.0)),
            style=data.get("style"),
        )


@dataclass
class LayoutItem:
    """
    One visually distinct run of text.

    Coordinates are CSS pixels in document space (scroll offset included).
    `vertical_gap` is the distance from the bottom of the previous accepted
    item, never negative.
    """
    text: str
    x: float
    y: float
    width: float
    height: float
    vertical_gap: float
    style: StyleSnapshot

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @property
    def size(self) -> Tuple[float, float]:
        return (self.width, self.height)

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2


@dataclass
class PageFrame:
    """One output page"""
    index: int
    page_format: PageFormat
    background_image: bytes
    items: List[LayoutItem] = field(default_factory=list)

    @property
    def top_px(self) -> float:
        return self.index * self.page_format.height_px

    @property
    def bottom_px(self) -> float:
        return (self.index + 1) * self.page_format.height_px

    @property
    def dimensions(self) -> Tuple[int, int]:
        return (self.page_format.width_px, self.page_format.height_px)


@dataclass
class RenderedDocument:
    """Output of the render stage"""
    page_format: PageFormat
    items: List[LayoutItem]
    total_height: float
    page_images: List[bytes]

    @property
    def page_count(self) -> int:
        return len(self.page_images)
