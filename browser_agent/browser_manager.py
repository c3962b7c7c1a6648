"""
Shared browser manager for Browser Agent.

One Chromium process serves every request. It is launched lazily on the
first session and each request borrows its own page from it.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, TYPE_CHECKING

from playwright.async_api import Browser, Page, Playwright, async_playwright

from .config import BROWSER_LAUNCH_ARGS

if TYPE_CHECKING:
    from .config import AgentConfig


# Get logger for this module
logger = logging.getLogger(__name__)


class SharedBrowser:
    """Lazily launched browser shared by all concurrent requests.

    The browser is only launched when session() is first entered.
    Concurrent first callers wait on the same lock, so exactly one
    browser process is ever created.

    Usage:
        shared = SharedBrowser(config)

        async with shared.session() as page:
            await page.goto("https://example.com")

        await shared.close()  # on shutdown
    """

    def __init__(self, config: "AgentConfig"):
        """Initialize the shared browser.

        Args:
            config: Agent configuration with headless and timeout settings
        """
        self.config = config
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._lock = asyncio.Lock()
        self._closed = False

    def is_browser_open(self) -> bool:
        """Check if the browser has been launched.

        Returns:
            True if the browser is currently running
        """
        return self._browser is not None and not self._closed

    async def get_browser(self) -> Browser:
        """Get the browser, launching it on first use.

        Raises:
            RuntimeError: If the manager has been closed
        """
        if self._browser is not None:
            return self._browser

        async with self._lock:
            if self._closed:
                raise RuntimeError("Shared browser has been closed")
            if self._browser is None:
                logger.info("Launching shared browser (first use)")
                playwright = await async_playwright().start()
                try:
                    browser = await playwright.chromium.launch(
                        headless=self.config.headless,
                        args=BROWSER_LAUNCH_ARGS,
                    )
                except BaseException:
                    await playwright.stop()
                    raise
                self._playwright = playwright
                self._browser = browser
                logger.debug("Shared browser launched successfully")
            return self._browser

    async def new_page(self) -> Page:
        """Open a new page on the shared browser with configured timeouts."""
        browser = await self.get_browser()
        page = await browser.new_page()
        page.set_default_timeout(self.config.action_timeout)
        page.set_default_navigation_timeout(self.config.navigation_timeout)
        return page

    @asynccontextmanager
    async def session(self) -> AsyncIterator[Page]:
        """Borrow a page for one request; it is closed on every exit path."""
        page = await self.new_page()
        try:
            yield page
        finally:
            try:
                await page.close()
            except Exception:
                logger.warning("Failed to close page", exc_info=True)

    async def close(self) -> None:
        """Close browser and Playwright.

        Safe to call multiple times.
        """
        async with self._lock:
            if self._closed:
                return
            self._closed = True

            if self._browser is not None:
                logger.debug("Closing shared browser")
                await self._browser.close()
                self._browser = None

            if self._playwright is not None:
                await self._playwright.stop()
                self._playwright = None
