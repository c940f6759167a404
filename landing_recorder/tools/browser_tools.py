from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from playwright.async_api import Browser, BrowserContext, ElementHandle, Page, Playwright, async_playwright

from landing_recorder.animator import smooth_scroll
from landing_recorder.config import SECTION_SCROLL_MS, RecordingConfig
from landing_recorder.errors import SectionNotFoundError

logger = logging.getLogger(__name__)

# Section lands a quarter of the viewport below the top edge
VIEWPORT_ANCHOR_DIVISOR = 4


class BrowserSession:
    """One browser, one context, one page. The recorder may swap context and page."""

    def __init__(self, playwright: Playwright, browser: Browser, context: BrowserContext, page: Page):
        self.playwright = playwright
        self.browser = browser
        self.context: BrowserContext | None = context
        self.page = page
        self._closed = False

    @classmethod
    async def launch(cls, config: RecordingConfig, headless: bool = False) -> BrowserSession:
        frame = config.video_frame
        pw: Playwright = await async_playwright().start()
        browser: Browser | None = None
        try:
            browser = await pw.chromium.launch(
                headless=headless,
                args=[
                    "--no-sandbox",
                    "--disable-setuid-sandbox",
                    f"--window-size={frame.width},{frame.height}",
                ],
            )
            context = await browser.new_context(viewport=config.viewport)
            page: Page = await context.new_page()
        except Exception:
            try:
                if browser is not None:
                    await browser.close()
            finally:
                await pw.stop()
            raise
        return cls(pw, browser, context, page)

    async def goto(self, url: str) -> None:
        await self.page.goto(url, wait_until="networkidle")

    async def scroll_offset(self) -> float:
        return await self.page.evaluate("() => window.scrollY")

    async def viewport_height(self) -> float:
        return await self.page.evaluate("() => window.innerHeight")

    async def max_scroll_offset(self) -> float:
        return await self.page.evaluate(
            "() => Math.max(0, document.documentElement.scrollHeight - window.innerHeight)"
        )

    async def scroll_to(self, y: float) -> None:
        await self.page.evaluate("(y) => window.scrollTo(0, y)", y)

    async def query(self, selector: str) -> ElementHandle | None:
        return await self.page.query_selector(selector)

    async def wait(self, ms: float) -> None:
        await self.page.wait_for_timeout(ms)

    async def storage_state(self) -> dict[str, Any]:
        return await self.context.storage_state()

    async def replace_context(self, **context_options: Any) -> Page:
        """Close the current context and open a fresh one on the same browser."""
        if self.context is not None:
            await self.context.close()
        self.context = await self.browser.new_context(**context_options)
        self.page = await self.context.new_page()
        return self.page

    async def close_context(self) -> None:
        if self.context is not None:
            context, self.context = self.context, None
            await context.close()

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            await self.close_context()
            await self.browser.close()
        finally:
            await self.playwright.stop()


@asynccontextmanager
async def open_browser(config: RecordingConfig, headless: bool = False) -> AsyncIterator[BrowserSession]:
    """Launch a browser session and close it on every exit path."""
    session = await BrowserSession.launch(config, headless=headless)
    try:
        yield session
    finally:
        await session.close()


# ─── Section locating ───────────────────────────────────────────


def section_target_offset(
    scroll_y: float,
    box_top: float,
    viewport_height: float,
    max_offset: float | None = None,
) -> float:
    """Absolute scroll offset that puts an element in the upper-middle of the viewport.

    ``box_top`` is viewport-relative (as returned by a bounding box). The
    result is clamped to ``[0, max_offset]``; the lower bound wins when the
    page is shorter than the viewport.
    """
    target = scroll_y + box_top - viewport_height / VIEWPORT_ANCHOR_DIVISOR
    if max_offset is not None:
        target = min(target, max_offset)
    return max(0.0, target)


async def locate_section(session: BrowserSession, selector: str) -> float:
    el = await session.query(selector)
    if not el:
        raise SectionNotFoundError(selector)

    box = await el.bounding_box()
    if not box:
        raise SectionNotFoundError(selector, "Could not get bounding box for")

    scroll_y = await session.scroll_offset()
    viewport_height = await session.viewport_height()
    max_offset = await session.max_scroll_offset()
    return section_target_offset(scroll_y, box["y"], viewport_height, max_offset)


async def scroll_to_section(session: BrowserSession, selector: str, duration_ms: float = SECTION_SCROLL_MS) -> bool:
    """Animate to a section. Returns False (after a warning) when it can't be located."""
    try:
        target = await locate_section(session, selector)
    except SectionNotFoundError as e:
        logger.warning("%s", e)
        return False

    logger.info("Scrolling to %s", selector)
    await smooth_scroll(session, target, duration_ms)
    return True
