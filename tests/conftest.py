from pathlib import Path

import pytest

from anthropic_token_refresh.config import RefreshConfig

AUTHORIZE_PAGE = "https://claude.ai/oauth/authorize?code=true&client_id=abc"


class FakeClock:
    """Monotonic clock that only moves when the fake page waits."""

    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakePage:
    """In-memory PageState driven by the fake clock."""

    def __init__(
        self,
        clock: FakeClock,
        url=AUTHORIZE_PAGE,
        elements: dict[str, str] | None = None,
        body: str = "",
        buttons=(),
    ):
        self.clock = clock
        self._url = url
        self.elements = elements or {}
        self.body = body
        self.buttons = list(buttons)
        self.clicked: list[str] = []
        self.screenshots: list[Path] = []
        self.waits: list[float] = []
        self.fail_dom = False
        self.fail_screenshot = False

    @property
    def url(self) -> str:
        # A callable url lets a test change the address over time
        return self._url(self.clock()) if callable(self._url) else self._url

    async def read_first(self, selector: str) -> str | None:
        if self.fail_dom:
            raise RuntimeError("Execution context was destroyed")
        return self.elements.get(selector)

    async def body_text(self) -> str:
        return self.body

    async def click_button(self, labels) -> str | None:
        for text in self.buttons:
            if any(label in text for label in labels):
                self.clicked.append(text)
                return text.strip()
        return None

    async def screenshot(self, path: Path) -> None:
        if self.fail_screenshot:
            raise RuntimeError("Target closed")
        self.screenshots.append(path)

    async def wait(self, seconds: float) -> None:
        self.waits.append(seconds)
        self.clock.advance(seconds)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_page(clock):
    def _make(**kwargs) -> FakePage:
        return FakePage(clock, **kwargs)

    return _make


@pytest.fixture
def test_config(tmp_path):
    """Configuration pointing every path into the test's temp directory."""
    return RefreshConfig(
        cli_path=tmp_path / "clawdbot",
        profile_dir=tmp_path / "profile",
        screenshot_dir=tmp_path,
        timeout=90,
        poll_interval=3,
        headless=True,
        log_level="INFO",
    )
