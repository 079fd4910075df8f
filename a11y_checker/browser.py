"""Headless browser capability used by the scanner.

The scanner only talks to the two small protocols below, so tests can hand it
a fake session. ``launch`` is the Playwright-backed default.
"""
from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

from playwright.async_api import async_playwright

from .config import USER_AGENT, VIEWPORT, Settings

logger = logging.getLogger(__name__)

NETWORK_IDLE = "networkidle"
DOM_CONTENT_LOADED = "domcontentloaded"


class PageHandle(Protocol):
    async def goto(self, url: str, wait_until: str, timeout: int) -> None: ...

    async def screenshot(self, path: str) -> None: ...

    async def close(self) -> None: ...


class BrowserSession(Protocol):
    async def new_page(self) -> PageHandle: ...

    async def close(self) -> None: ...


class PlaywrightPage:
    """One page inside its own browser context."""

    def __init__(self, context: Any, page: Any):
        self._context = context
        self.page = page  # raw Playwright page, used by the axe bridge

    async def goto(self, url: str, wait_until: str, timeout: int) -> None:
        await self.page.goto(url, wait_until=wait_until, timeout=timeout)

    async def screenshot(self, path: str) -> None:
        await self.page.screenshot(path=path, full_page=True)

    async def close(self) -> None:
        # Closing the context closes the page with it.
        await self._context.close()


class PlaywrightSession:
    def __init__(self, playwright: Any, browser: Any):
        self._playwright = playwright
        self._browser = browser

    async def new_page(self) -> PlaywrightPage:
        context = await self._browser.new_context(viewport=VIEWPORT, user_agent=USER_AGENT)
        page = await context.new_page()
        return PlaywrightPage(context, page)

    async def close(self) -> None:
        try:
            await self._browser.close()
        finally:
            await self._playwright.stop()


async def launch(settings: Optional[Settings] = None) -> PlaywrightSession:
    settings = settings or Settings()
    playwright = await async_playwright().start()
    try:
        browser_type = getattr(playwright, settings.browser)
        browser = await browser_type.launch(headless=settings.headless)
    except Exception:
        await playwright.stop()
        raise
    logger.debug("Launched %s (headless=%s)", settings.browser, settings.headless)
    return PlaywrightSession(playwright, browser)


__all__ = [
    "PageHandle",
    "BrowserSession",
    "PlaywrightPage",
    "PlaywrightSession",
    "launch",
    "NETWORK_IDLE",
    "DOM_CONTENT_LOADED",
]
