"""
Page formats and conversion options.

A conversion request selects one fixed page size for the whole document:
A4 portrait (default), A4 landscape, or a 16:9 slide.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from config.constants import (
    A4_HEIGHT_PX,
    A4_WIDTH_PX,
    SLIDE_HEIGHT_PX,
    SLIDE_WIDTH_PX,
)
from .units import px_to_twip

SLIDE = "slide"
LANDSCAPE = "landscape"
PORTRAIT = "portrait"


@dataclass(frozen=True)
class PageFormat:
    """Fixed page geometry in CSS pixels"""
    name: str
    width_px: int
    height_px: int

    @property
    def is_landscape(self) -> bool:
        return self.width_px > self.height_px

    @property
    def width_twips(self) -> int:
        return px_to_twip(self.width_px)

    @property
    def height_twips(self) -> int:
        return px_to_twip(self.height_px)

    def viewport(self) -> Dict[str, int]:
        return {"width": self.width_px, "height": self.height_px}


A4_PORTRAIT = PageFormat("A4", A4_WIDTH_PX, A4_HEIGHT_PX)
A4_LANDSCAPE = PageFormat("A4-landscape", A4_HEIGHT_PX, A4_WIDTH_PX)
SLIDE_16_9 = PageFormat(SLIDE, SLIDE_WIDTH_PX, SLIDE_HEIGHT_PX)


@dataclass
class ConversionOptions:
    """
    Options accepted by every conversion entry point.

    Only `format` and `orientation` affect the high-fidelity DOCX path.
    The print-to-PDF path additionally reads `width`, `height` and `margin`.
    """
    format: Optional[str] = None
    orientation: str = PORTRAIT
    title: Optional[str] = None
    filename: Optional[str] = None

    # Print-to-PDF only
    width: Optional[int] = None
    height: Optional[int] = None
    margin: Optional[Dict[str, str]] = None

    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'ConversionOptions':
        """Create options from a request dictionary; unknown keys go to `extra`."""
        data = dict(data or {})
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__ and k != "extra"}
        extra = {k: v for k, v in data.items() if k not in cls.__dataclass_fields__}
        return cls(**known, extra=extra)

    @property
    def is_slide(self) -> bool:
        return (self.format or "").lower() == SLIDE

    @property
    def is_landscape(self) -> bool:
        return (self.orientation or "").lower() == LANDSCAPE


def resolve_page_format(options: Optional[ConversionOptions] = None) -> PageFormat:
    """
    Pick the page geometry for a request.

    `format="slide"` wins over any orientation; otherwise landscape swaps
    the A4 sides.
    """
    options = options or ConversionOptions()
    if options.is_slide:
        return SLIDE_16_9
    if options.is_landscape:
        return A4_LANDSCAPE
    return A4_PORTRAIT
