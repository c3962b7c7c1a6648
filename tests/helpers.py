"""Shared test doubles."""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock


def make_page(element_count=1, body_text="", title="Example Domain", url="https://example.com/"):
    """Build a mock Playwright page."""
    page = MagicMock()
    page.goto = AsyncMock()
    page.go_back = AsyncMock()
    page.evaluate = AsyncMock(return_value=body_text)
    page.title = AsyncMock(return_value=title)
    page.url = url
    page.screenshot = AsyncMock(return_value=b"\x89PNG fake")
    page.keyboard.type = AsyncMock()
    page.close = AsyncMock()

    locator = MagicMock()
    locator.count = AsyncMock(return_value=element_count)
    locator.first.click = AsyncMock()
    locator.first.focus = AsyncMock()
    page.locator.return_value = locator
    return page


class ScriptedCompleter:
    """Completion service that replies from a fixed script."""

    def __init__(self, replies):
        self.replies = list(replies)
        self.prompts = []

    async def complete(self, prompt):
        self.prompts.append(prompt)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


class FakeBrowser:
    """Hands out one stub page and counts session lifecycle."""

    def __init__(self, page=None, fail_on_open=None):
        self.page = page or make_page()
        self.fail_on_open = fail_on_open
        self.opened = 0
        self.closed = 0

    @asynccontextmanager
    async def session(self):
        if self.fail_on_open:
            raise self.fail_on_open
        self.opened += 1
        try:
            yield self.page
        finally:
            self.closed += 1
