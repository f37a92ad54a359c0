"""
Computed-style interpretation.

This is the only place where raw CSS text coming back from the browser
(`rgb(...)`, `16px`, `700`, ...) is parsed. Everything downstream works on
StyleSnapshot. Unparseable values fall back to defaults instead of failing
the conversion.
"""

import re
from typing import Any, Dict, Optional

from config.constants import (
    BOLD_WEIGHT_THRESHOLD,
    DEFAULT_ALIGNMENT,
    DEFAULT_COLOR_HEX,
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE_PX,
)
from config.logging_config import get_logger
from .models import StyleSnapshot

logger = get_logger(__name__)

_RGB_PATTERN = re.compile(
    r"rgba?\(\s*(\d+(?:\.\d+)?)\s*[,\s]\s*(\d+(?:\.\d+)?)\s*[,\s]\s*(\d+(?:\.\d+)?)"
)
_LENGTH_PATTERN = re.compile(r"^\s*(-?\d+(?:\.\d+)?)")

ALIGNMENTS = ("left", "center", "right", "justify")


def _channel_hex(value: str) -> str:
    channel = max(0, min(255, int(float(value))))
    return f"{channel:02x}"


def parse_color_hex(css_color: Optional[str]) -> str:
    """
    Convert a resolved `rgb()`/`rgba()` value to a 6-digit hex string.

    Returns black for anything that does not parse.
    """
    if not css_color:
        return DEFAULT_COLOR_HEX
    match = _RGB_PATTERN.search(css_color)
    if not match:
        logger.debug(f"Unparseable color {css_color!r}, using {DEFAULT_COLOR_HEX}")
        return DEFAULT_COLOR_HEX
    return "".join(_channel_hex(channel) for channel in match.groups())


def parse_font_size(css_size: Optional[str]) -> float:
    if css_size is None:
        return DEFAULT_FONT_SIZE_PX
    match = _LENGTH_PATTERN.match(str(css_size))
    if not match:
        logger.debug(f"Unparseable font size {css_size!r}")
        return DEFAULT_FONT_SIZE_PX
    return float(match.group(1))


def parse_bold(css_weight: Optional[str]) -> bool:
    if css_weight is None:
        return False
    weight = str(css_weight).strip().lower()
    if weight in ("bold", "bolder"):
        return True
    try:
        return float(weight) >= BOLD_WEIGHT_THRESHOLD
    except ValueError:
        return False


def parse_opacity(css_opacity: Optional[str]) -> float:
    if css_opacity is None or css_opacity == "":
        return 1.0
    try:
        return float(css_opacity)
    except (TypeError, ValueError):
        return 1.0


def normalize_alignment(css_align: Optional[str]) -> str:
    """left | center | right | justify; anything else is left"""
    align = (css_align or "").strip().lower()
    return align if align in ALIGNMENTS else DEFAULT_ALIGNMENT


def snapshot_style(raw: Optional[Dict[str, Any]]) -> StyleSnapshot:
    """
    Build a StyleSnapshot from the computed-style record of a text node.

    A missing record yields a visible, default-styled snapshot.
    """
    raw = raw or {}
    return StyleSnapshot(
        font_size_px=parse_font_size(raw.get("fontSize")),
        font_family=raw.get("fontFamily") or DEFAULT_FONT_FAMILY,
        color_hex=parse_color_hex(raw.get("color")),
        bold=parse_bold(raw.get("fontWeight")),
        italic=(raw.get("fontStyle") or "").lower() == "italic",
        alignment=normalize_alignment(raw.get("textAlign")),
        display=(raw.get("display") or "inline").lower(),
        visibility=(raw.get("visibility") or "visible").lower(),
        opacity=parse_opacity(raw.get("opacity")),
    )
