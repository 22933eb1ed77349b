"""Anthropic setup-token extraction via Playwright browser automation."""

import time
import typing as tp
from pathlib import Path

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from .config import RefreshConfig
from .errors import AuthCodeNotFoundError, NavigationError, SetupTokenNotFoundError
from .extraction import (
    APPROVE_LABELS,
    AUTH_CODE_SELECTOR,
    SETUP_TOKEN_SELECTOR,
    accept_setup_token,
    code_from_fragment,
    code_from_query,
    displayed_code,
    setup_token_in_text,
    token_shaped_run,
)
from .logger import logger
from .page_state import PageState, PlaywrightPageState
from .pkce import PKCEChallenge, build_authorize_url, generate_pkce

NAVIGATION_TIMEOUT_MS = 30000
CLICK_SETTLE_SECONDS = 2
TOKEN_PAGE_SETTLE_SECONDS = 1
VIEWPORT = {"width": 1280, "height": 800}


async def obtain_setup_token(
    config: RefreshConfig, pkce: PKCEChallenge | None = None
) -> str:
    """Run the browser half of the refresh: authorize, then read the setup token.

    Args:
        config: Refresh configuration
        pkce: Challenge triple (default: freshly generated)

    Returns:
        Setup token as shown on the callback page

    Raises:
        NavigationError: If the authorization page cannot be opened
        AuthCodeNotFoundError: If no authorization code appears before the timeout
        SetupTokenNotFoundError: If the callback page shows no usable token
    """
    logger.info("Generating PKCE challenge...")
    pkce = pkce or generate_pkce()
    auth_url = build_authorize_url(pkce)

    logger.info("Launching browser...")
    logger.info(f"Auth URL: {auth_url[:100]}...")
    config.profile_dir.mkdir(parents=True, exist_ok=True)

    playwright = await async_playwright().start()
    logger.debug("Playwright started")

    try:
        context = await playwright.chromium.launch_persistent_context(
            str(config.profile_dir),
            headless=config.headless,
            viewport=VIEWPORT,
            args=["--disable-blink-features=AutomationControlled"],
        )
        logger.debug(f"Persistent context opened at {config.profile_dir}")

        try:
            page = await context.new_page()

            logger.info("Navigating to OAuth page...")
            try:
                await page.goto(
                    auth_url, wait_until="domcontentloaded", timeout=NAVIGATION_TIMEOUT_MS
                )
            except PlaywrightError as e:
                raise NavigationError(f"Could not open authorization page: {e}") from e

            state = PlaywrightPageState(page)
            auth_code = await poll_for_auth_code(
                state,
                timeout=config.timeout,
                poll_interval=config.poll_interval,
                screenshot_dir=config.screenshot_dir,
            )
            return await read_setup_token(state, auth_code)
        finally:
            logger.debug("Closing browser context...")
            await context.close()
    finally:
        await playwright.stop()
        logger.debug("Browser cleanup complete")


async def poll_for_auth_code(
    page: PageState,
    timeout: float = 90,
    poll_interval: float = 3,
    screenshot_dir: Path | None = None,
    clock: tp.Callable[[], float] = time.monotonic,
) -> str:
    """Watch the page until an authorization code shows up.

    Each round checks the URL and the DOM, clicks any consent button and
    takes a diagnostic screenshot. After the deadline one last look at the
    query string is made.
    """
    start = clock()
    auth_code = None

    while auth_code is None and clock() - start < timeout:
        logger.info(f"Current URL: {page.url[:100]}...")

        auth_code = await _find_auth_code(page)
        if auth_code:
            break

        await _click_approve(page, max(0.0, timeout - (clock() - start)))
        if screenshot_dir is not None:
            await _save_screenshot(page, screenshot_dir)

        remaining = timeout - (clock() - start)
        await page.wait(max(0.0, min(poll_interval, remaining)))

    if auth_code is None:
        auth_code = code_from_query(page.url)
        if auth_code:
            logger.info("Got authorization code from final URL")

    if auth_code is None:
        raise AuthCodeNotFoundError(
            "Could not obtain authorization code. Please complete login manually."
        )
    return auth_code


async def _find_auth_code(page: PageState) -> str | None:
    url = page.url

    if code := code_from_query(url):
        logger.info("Got authorization code from redirect!")
        return code

    if code := code_from_fragment(url):
        logger.info("Got authorization code from hash!")
        return code

    try:
        if code := displayed_code(await page.read_first(AUTH_CODE_SELECTOR)):
            logger.info("Found code displayed on page!")
            return code

        if candidate := token_shaped_run(await page.body_text()):
            logger.debug(f"Possible code found: {candidate[:20]}...")
    except Exception as e:
        logger.debug(f"Page inspection failed: {e}")

    return None


async def _click_approve(page: PageState, remaining: float) -> None:
    try:
        label = await page.click_button(APPROVE_LABELS)
    except Exception as e:
        logger.debug(f"Button click failed: {e}")
        return
    if label:
        logger.info(f"Clicked button: {label}")
        await page.wait(min(CLICK_SETTLE_SECONDS, remaining))


async def _save_screenshot(page: PageState, screenshot_dir: Path) -> None:
    path = screenshot_dir / f"oauth-debug-{int(time.time() * 1000)}.png"
    try:
        await page.screenshot(path)
        logger.info(f"Screenshot saved: {path}")
    except Exception as e:
        logger.warning(f"Failed to save screenshot: {e}")


async def read_setup_token(page: PageState, auth_code: str) -> str:
    """Read the setup token off the callback page.

    Args:
        page: Page showing the OAuth callback
        auth_code: Authorization code found by the polling loop

    Returns:
        Setup token

    Raises:
        SetupTokenNotFoundError: If neither the page nor the code yields a token
    """
    logger.info("Looking for setup-token on callback page...")
    await page.wait(TOKEN_PAGE_SETTLE_SECONDS)

    setup_token = None
    try:
        setup_token = accept_setup_token(await page.read_first(SETUP_TOKEN_SELECTOR))
        if not setup_token:
            setup_token = accept_setup_token(setup_token_in_text(await page.body_text()))
    except Exception as e:
        logger.warning(f"Error extracting token: {e}")

    if setup_token:
        logger.info("Found setup-token on page!")
        return setup_token

    # The callback sometimes hands back "<code>#<state>", which is the token itself
    if "#" in auth_code:
        logger.info("Using code from URL as setup-token (contains #)")
        return auth_code

    raise SetupTokenNotFoundError("Could not extract setup-token from callback page")
