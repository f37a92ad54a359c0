"""
Pytest configuration and shared fixtures for PageFlow tests.

The browser is replaced by FakeRenderSurface, a scripted in-memory render
surface, so the whole pipeline runs without launching Chromium.
"""
import os
import sys
import struct
import zlib
import pytest
import tempfile
import shutil
from pathlib import Path
from typing import Any, Dict, Generator, List, Optional

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.settings import Settings
from pageflow.models import RawTextNode
from pageflow.render_surface import ClipRegion, Measurement


# ============================================================================
# Helpers
# ============================================================================

def make_png(width: int = 4, height: int = 4, rgb=(255, 255, 255)) -> bytes:
    """Smallest valid RGB PNG of the given size."""
    def chunk(tag: bytes, data: bytes) -> bytes:
        crc = zlib.crc32(tag + data) & 0xFFFFFFFF
        return struct.pack(">I", len(data)) + tag + data + struct.pack(">I", crc)

    rows = b"".join(b"\x00" + bytes(rgb) * width for _ in range(height))
    header = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + chunk(b"IHDR", header)
        + chunk(b"IDAT", zlib.compress(rows))
        + chunk(b"IEND", b"")
    )


def raw_node(
    text: str = "Hello",
    x: float = 0.0,
    y: float = 0.0,
    width: float = 100.0,
    height: float = 20.0,
    parent_tag: Optional[str] = "P",
    **style: Any,
) -> Dict[str, Any]:
    """Text-node record shaped like the browser measurement script output."""
    computed = {
        "display": "block",
        "visibility": "visible",
        "opacity": "1",
        "color": "rgb(0, 0, 0)",
        "fontSize": "16px",
        "fontFamily": "Arial, sans-serif",
        "fontWeight": "400",
        "fontStyle": "normal",
        "textAlign": "left",
    }
    computed.update(style)
    return {
        "text": text,
        "parentTag": parent_tag,
        "rect": {"x": x, "y": y, "width": width, "height": height},
        "style": computed,
    }


class FakeRenderSurface:
    """
    Scripted RenderSurface.

    Records every call in `events`, returns the given nodes from measure()
    and a small PNG from capture(). `fail_on` names a method that raises.
    """

    def __init__(
        self,
        nodes: Optional[List[Dict[str, Any]]] = None,
        scroll_height: float = 0.0,
        fail_on: Optional[str] = None,
        error: Optional[Exception] = None,
    ):
        self.nodes = nodes or []
        self.scroll_height = scroll_height
        self.fail_on = fail_on
        self.error = error or RuntimeError(f"{fail_on} exploded")
        self.events: List[str] = []
        self.clips: List[ClipRegion] = []
        self.loaded_html: Optional[str] = None
        self.page_format = None
        self.min_height = None
        self.entered = False
        self.closed = False

    async def __aenter__(self):
        self.entered = True
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.closed = True

    def _record(self, event: str) -> None:
        self.events.append(event)
        if self.fail_on == event:
            raise self.error

    async def load(self, html, page_format):
        self.loaded_html = html
        self.page_format = page_format
        self._record("load")

    async def measure(self):
        self._record("measure")
        return Measurement(
            nodes=[RawTextNode.from_dict(node) for node in self.nodes],
            scroll_height=self.scroll_height,
        )

    async def hide_text(self, min_height):
        self.min_height = min_height
        self._record("hide_text")

    async def capture(self, clip):
        self._record("capture")
        self.clips.append(clip)
        return make_png()


# ============================================================================
# Fixtures: Configuration & Settings
# ============================================================================

@pytest.fixture(scope="session")
def test_settings():
    """Settings with the defaults the assertions are written against."""
    return Settings(fallback_font="Arial", text_hide_settle_ms=0)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    temp_path = Path(tempfile.mkdtemp(prefix="pageflow_test_"))
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


# ============================================================================
# Fixtures: Rendering
# ============================================================================

@pytest.fixture
def png_bytes() -> bytes:
    return make_png()


@pytest.fixture
def make_surface():
    """Factory for FakeRenderSurface instances."""
    return FakeRenderSurface


@pytest.fixture
def sample_html() -> str:
    return (
        "<!DOCTYPE html><html><body>"
        "<h1>Quarterly Report</h1><p>Revenue grew in every region.</p>"
        "</body></html>"
    )


@pytest.fixture
def two_page_nodes() -> List[Dict[str, Any]]:
    """Three text runs on an A4 portrait document 2200px tall."""
    return [
        raw_node("Title", x=40, y=60, width=300, height=40, fontSize="32px", fontWeight="700"),
        raw_node("First paragraph", x=40, y=120, width=500, height=20),
        raw_node("Second page text", x=80, y=1500, width=400, height=20,
                 color="rgb(200, 16, 46)", fontStyle="italic", textAlign="center"),
    ]
