"""Narrow view of a browser page used by the polling loop."""

import asyncio
import typing as tp
from pathlib import Path

from playwright.async_api import Page


class PageState(tp.Protocol):
    @property
    def url(self) -> str: ...

    async def read_first(self, selector: str) -> str | None:
        """Value of the first input, or text of the first element, matching selector."""
        ...

    async def body_text(self) -> str: ...

    async def click_button(self, labels: tp.Sequence[str]) -> str | None:
        """Click the first button whose text contains one of labels; return its text."""
        ...

    async def screenshot(self, path: Path) -> None: ...

    async def wait(self, seconds: float) -> None: ...


class PlaywrightPageState:
    """PageState backed by a Playwright page."""

    def __init__(self, page: Page):
        self.page = page

    @property
    def url(self) -> str:
        return self.page.url

    async def read_first(self, selector: str) -> str | None:
        element = await self.page.query_selector(selector)
        if element is None:
            return None
        tag_name = await element.evaluate("el => el.tagName.toLowerCase()")
        if tag_name == "input":
            return await element.get_attribute("value")
        return await element.text_content()

    async def body_text(self) -> str:
        return await self.page.evaluate("() => document.body.innerText")

    async def click_button(self, labels: tp.Sequence[str]) -> str | None:
        for button in await self.page.query_selector_all("button"):
            text = await button.text_content()
            if text and any(label in text for label in labels):
                await button.click()
                return text.strip()
        return None

    async def screenshot(self, path: Path) -> None:
        await self.page.screenshot(path=str(path))

    async def wait(self, seconds: float) -> None:
        await asyncio.sleep(seconds)
