"""
Browser tools for Browser Agent.

Executes parsed commands against a Playwright page and returns the
observation text fed back to the model.
"""

import logging
from typing import Awaitable, Callable

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from .errors import ToolExecutionError
from .screenshots import ScreenshotStore
from .types import (
    Back,
    Click,
    Command,
    Extract,
    Fill,
    Goto,
    Screenshot,
    Scroll,
    Title,
    Url,
)
from .utils import truncate_text


logger = logging.getLogger(__name__)

BODY_TEXT_SCRIPT = "() => document.body ? document.body.innerText : ''"
SCROLL_SCRIPT = "() => window.scrollBy(0, window.innerHeight)"


class BrowserTools:
    """Executes browser commands via Playwright."""

    def __init__(
        self,
        page: Page,
        screenshots: ScreenshotStore,
        extract_max_chars: int = 2000,
    ):
        """Initialize browser tools.

        Args:
            page: Playwright page owned by the current request
            screenshots: Where screenshots are stored
            extract_max_chars: Cap on extracted body text
        """
        self.page = page
        self.screenshots = screenshots
        self.extract_max_chars = extract_max_chars

    async def execute(self, command: Command, base_url: str = "") -> str:
        """Execute a browser command.

        Args:
            command: A tool command (not Answer or Unknown)
            base_url: Public base address of the current request,
                used to build screenshot URLs

        Returns:
            Observation text

        Raises:
            ToolExecutionError: If the browser action fails
            ValueError: If the command is not a tool command
        """
        handlers: dict[type, Callable[[], Awaitable[str]]] = {
            Goto: lambda: self.goto(command.url),
            Click: lambda: self.click(command.selector),
            Extract: self.extract,
            Scroll: self.scroll,
            Title: self.title,
            Url: self.url,
            Back: self.back,
            Fill: lambda: self.fill(command.selector, command.value),
            Screenshot: lambda: self.screenshot(base_url),
        }

        handler = handlers.get(type(command))
        if handler is None:
            raise ValueError(f"Not a browser command: {command!r}")

        try:
            return await handler()
        except ToolExecutionError as e:
            if e.command is None:
                e.command = command
            raise
        except PlaywrightTimeoutError as e:
            raise ToolExecutionError(f"Timeout: {e}", command) from e
        except PlaywrightError as e:
            raise ToolExecutionError(f"{type(e).__name__}: {e}", command) from e

    async def goto(self, url: str) -> str:
        """Navigate to a URL, waiting for the DOM content only."""
        await self.page.goto(url, wait_until="domcontentloaded")
        return f"Navigated to {url}"

    async def click(self, selector: str) -> str:
        """Click the first element matching a selector."""
        locator = self.page.locator(selector)
        if await locator.count() == 0:
            raise ToolExecutionError(f"No element matches selector: {selector}")
        await locator.first.click()
        return f"Clicked {selector}"

    async def extract(self) -> str:
        """Extract the page body text, trimmed and capped."""
        text = await self.page.evaluate(BODY_TEXT_SCRIPT)
        return truncate_text((text or "").strip(), self.extract_max_chars)

    async def scroll(self) -> str:
        """Scroll down by one viewport height."""
        await self.page.evaluate(SCROLL_SCRIPT)
        return "Scrolled down"

    async def title(self) -> str:
        return await self.page.title()

    async def url(self) -> str:
        return self.page.url

    async def back(self) -> str:
        """Go back one history entry."""
        await self.page.go_back(wait_until="domcontentloaded")
        return "Went back"

    async def fill(self, selector: str, value: str) -> str:
        """Focus an element and type a value into it keystroke by keystroke."""
        locator = self.page.locator(selector)
        if await locator.count() == 0:
            raise ToolExecutionError(f"No element matches selector: {selector}")
        await locator.first.focus()
        await self.page.keyboard.type(value)
        return f"Filled {selector}"

    async def screenshot(self, base_url: str) -> str:
        """Capture a full-page screenshot and return its URL."""
        data = await self.page.screenshot(full_page=True)
        name = self.screenshots.new_name()
        await self.screenshots.save(name, data)
        return f"Screenshot: {self.screenshots.url_for(base_url, name)}"
