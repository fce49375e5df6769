"""
Scoped browser page usage.

using_page() opens a page, configures it (timeout, user agent, request
blocker), hands it to caller work and always releases it afterwards.
using_response() adds a navigation step in front of the work. Log events
inside a session carry its session id.

Outcome rules:
- A page that fails to open raises AcquisitionError; nothing is released.
- Navigation failures raise NavigationError after the page is released.
- Errors from caller work propagate unchanged after the page is released.
- Release failures are logged and never reach the caller.
"""

from __future__ import annotations

import itertools
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Protocol, TypeVar

from pagewarden.crawler.blocker import get_resource_blocker
from pagewarden.crawler.identity import get_random_user_agent
from pagewarden.errors import AcquisitionError, NavigationError, ReleaseError
from pagewarden.utils.config import Settings, get_settings
from pagewarden.utils.logging import LogContext, get_logger

if TYPE_CHECKING:
    from playwright.async_api import Page, Response

logger = get_logger(__name__)

T = TypeVar("T")

_session_ids = itertools.count(1)


class PageFactory(Protocol):
    """Anything that opens pages: a Playwright Browser or BrowserContext."""

    async def new_page(self) -> Page: ...


class PageBlocker(Protocol):
    async def enable_in_page(self, page: Page) -> None: ...

    async def disable_in_page(self, page: Page) -> None: ...


async def close_page(
    page: Page,
    *,
    settings: Settings | None = None,
    blocker: PageBlocker | None = None,
) -> None:
    """Tear down the blocker (unless low bandwidth) and close the page.

    The page is closed even if the blocker teardown fails, and an already
    closed page is not closed again.

    Raises:
        ReleaseError: If teardown or close fails.
    """
    settings = settings or get_settings()

    try:
        try:
            if not settings.browser.low_bandwidth:
                await (blocker or get_resource_blocker()).disable_in_page(page)
        finally:
            if not page.is_closed():
                await page.close()
    except Exception as e:
        raise ReleaseError(f"Failed to release page: {e}") from e


async def using_page(
    browser: PageFactory,
    work: Callable[[Page, Any], Awaitable[T]],
    *,
    settings: Settings | None = None,
    blocker: PageBlocker | None = None,
) -> T:
    """Run work against a fresh page and release the page afterwards.

    The page gets the navigation timeout, a random user agent and the
    request blocker before work runs.

    The user agent is sent as the User-Agent request header. Scripts on the
    page still see the browser's own navigator.userAgent; set user_agent on
    the BrowserContext when that matters.

    Args:
        browser: Opens the page (Browser or BrowserContext).
        work: Coroutine function called as work(page, browser).
        settings: Settings to read timeout, user agents and low bandwidth
            mode from. Defaults to get_settings().
        blocker: Blocker to enable on open and tear down on close. Defaults
            to the global one.

    Returns:
        Whatever work returns.

    Raises:
        ConfigurationError: If no user agents are configured.
        AcquisitionError: If the page cannot be opened.
    """
    settings = settings or get_settings()
    blocker = blocker or get_resource_blocker()
    user_agent = get_random_user_agent(settings.page.user_agents)

    with LogContext(session=next(_session_ids)):
        try:
            page = await browser.new_page()
        except Exception as e:
            raise AcquisitionError(f"Failed to open page: {e}") from e

        logger.debug("Page opened", user_agent=user_agent)
        try:
            page.set_default_navigation_timeout(settings.page.timeout)
            await page.set_extra_http_headers({"User-Agent": user_agent})
            await blocker.enable_in_page(page)

            return await work(page, browser)
        finally:
            try:
                await close_page(page, settings=settings, blocker=blocker)
            except Exception as e:
                logger.error("Page release failed", error=str(e))


async def using_response(
    browser: PageFactory,
    url: str,
    work: Callable[[Response | None, Page, Any], Awaitable[T]],
    *,
    settings: Settings | None = None,
    blocker: PageBlocker | None = None,
) -> T:
    """Open a page, navigate to url and run work on the result.

    Navigation waits for DOMContentLoaded only. The response passed to
    work may be None (same-document navigation and some redirects).

    Raises:
        NavigationError: If navigation fails or times out.
    """

    async def navigate(page: Page, browser: Any) -> T:
        with LogContext(url=url):
            try:
                response = await page.goto(url, wait_until="domcontentloaded")
            except Exception as e:
                logger.debug("Navigation failed", error=str(e))
                raise NavigationError(f"Navigation to {url} failed: {e}", url=url) from e

            logger.debug(
                "Navigation complete",
                status=response.status if response is not None else None,
            )
            return await work(response, page, browser)

    return await using_page(browser, navigate, settings=settings, blocker=blocker)
