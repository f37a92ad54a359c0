"""
Playwright-backed Render Surface

Headless Chromium renders the HTML at a viewport matching the page format.
One browser is launched per surface and closed when the surface context
exits, whether the conversion succeeded or not.

Usage:
    async with PlaywrightRenderSurface(settings) as surface:
        rendered = await render_document(surface, html, page_format)
"""

import math
from contextlib import AsyncExitStack, asynccontextmanager
from typing import AsyncIterator, Dict, Optional

from playwright.async_api import Page, async_playwright

from config.logging_config import get_logger
from config.settings import Settings, settings as default_settings
from .models import RawTextNode
from .page_format import PageFormat
from .render_surface import ClipRegion, Measurement

logger = get_logger(__name__)


# Collects every non-blank text node in document order together with its
# document-space box and the computed style of its parent element.
MEASURE_SCRIPT = """
() => {
    const nodes = [];
    const root = document.body || document.documentElement;
    const walker = document.createTreeWalker(root, NodeFilter.SHOW_TEXT, null);
    const scrollX = window.scrollX;
    const scrollY = window.scrollY;
    let node;

    while ((node = walker.nextNode())) {
        const text = node.textContent;
        if (!text || !text.trim()) continue;

        const parent = node.parentElement;
        const range = document.createRange();
        range.selectNodeContents(node);
        const rect = range.getBoundingClientRect();

        let style = null;
        if (parent) {
            const s = window.getComputedStyle(parent);
            style = {
                display: s.display,
                visibility: s.visibility,
                opacity: s.opacity,
                color: s.color,
                fontSize: s.fontSize,
                fontFamily: s.fontFamily,
                fontWeight: s.fontWeight,
                fontStyle: s.fontStyle,
                textAlign: s.textAlign,
            };
        }

        nodes.push({
            text: text,
            parentTag: parent ? parent.tagName : null,
            rect: {
                x: rect.left + scrollX,
                y: rect.top + scrollY,
                width: rect.width,
                height: rect.height,
            },
            style: style,
        });
    }

    return {
        nodes: nodes,
        scrollHeight: document.documentElement.scrollHeight,
    };
}
"""

# Text becomes transparent in place; layout is untouched.
HIDE_TEXT_CSS = (
    "* { color: transparent !important; text-shadow: none !important; } "
    "::placeholder { color: transparent !important; }"
)


def hide_text_css(min_height: float) -> str:
    """
    Transparent-text rules plus a minimum document height.

    The root only grows downwards, so content above min_height keeps its
    position while the last page slice gets a full-size capture area.
    """
    return f"{HIDE_TEXT_CSS} html {{ min-height: {math.ceil(min_height)}px !important; }}"


@asynccontextmanager
async def open_browser_page(
    viewport: Dict[str, int],
    config: Optional[Settings] = None,
) -> AsyncIterator[Page]:
    """
    Launch Chromium and yield one page with a fixed viewport.

    The browser and the Playwright driver are shut down on exit.
    """
    config = config or default_settings
    launch_options = {"headless": config.headless, "args": list(config.browser_args)}
    if config.chromium_executable:
        launch_options["executable_path"] = config.chromium_executable

    async with async_playwright() as pw:
        browser = await pw.chromium.launch(**launch_options)
        try:
            context = await browser.new_context(
                viewport=viewport,
                device_scale_factor=config.device_scale_factor,
            )
            page = await context.new_page()
            page.set_default_timeout(config.navigation_timeout_ms)
            yield page
        finally:
            await browser.close()
            logger.debug("Browser closed")


class PlaywrightRenderSurface:
    """RenderSurface backed by headless Chromium"""

    def __init__(self, config: Optional[Settings] = None):
        self.config = config or default_settings
        self._stack = AsyncExitStack()
        self._page: Optional[Page] = None

    async def __aenter__(self) -> 'PlaywrightRenderSurface':
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def load(self, html: str, page_format: PageFormat) -> None:
        if self._page is not None:
            raise RuntimeError("Render surface already holds a document")

        # Viewport is fixed before any content loads
        self._page = await self._stack.enter_async_context(
            open_browser_page(page_format.viewport(), self.config)
        )

        logger.debug(
            f"Loading HTML ({len(html)} chars) at {page_format.width_px}x{page_format.height_px}"
        )
        await self._page.set_content(
            html,
            wait_until="networkidle",
            timeout=self.config.navigation_timeout_ms,
        )

    async def measure(self) -> Measurement:
        raw = await self._require_page().evaluate(MEASURE_SCRIPT)
        nodes = [RawTextNode.from_dict(entry) for entry in raw.get("nodes", [])]
        return Measurement(nodes=nodes, scroll_height=float(raw.get("scrollHeight") or 0))

    async def hide_text(self, min_height: float) -> None:
        page = self._require_page()
        await page.add_style_tag(content=hide_text_css(min_height))
        await page.wait_for_timeout(self.config.text_hide_settle_ms)

    async def capture(self, clip: ClipRegion) -> bytes:
        # full_page lets the clip reach below the first viewport
        return await self._require_page().screenshot(
            clip=clip.to_dict(),
            full_page=True,
            **self.config.screenshot_options(),
        )

    async def close(self) -> None:
        self._page = None
        await self._stack.aclose()

    def _require_page(self) -> Page:
        if self._page is None:
            raise RuntimeError("No document loaded on render surface")
        return self._page
